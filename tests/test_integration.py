"""End-to-end tests: build a document, stage it with other files, commit."""

import asyncio
import json

import pytest
from cleanroom_config import ConfigFileFormat
from cleanroom_config import ConfigurationManager
from cleanroom_config import FSQueue
from cleanroom_config import OutstandingRequirementsError
from cleanroom_config import PathResolver
from cleanroom_config import ReferentialIntegrityError
from cleanroom_config import Settings
from cleanroom_config import load_settings


def build_document(app_dir_key="hatchedEgg"):
    """Serialized document with one source, mozconfig, integration and project."""
    serialized = ConfigFileFormat.blank()
    serialized["sources"]["hatchedEgg"] = ["sources/hatchedEgg"]
    serialized["mozconfigs"]["debug"] = "cleanroom/mozconfigs/debug.mozconfig"
    serialized["integrations"]["central"] = {
        "vanillaTag": "central",
        "sourceKeys": ["hatchedEgg"],
        "patchKeys": [],
        "targetDirectory": "../compiles/central",
    }
    serialized["projects"]["p1"] = {
        "integrationKey": "central",
        "mozconfigKey": "debug",
        "appDirKey": app_dir_key,
    }
    return serialized


class TestEndToEnd:
    """Realistic staging scenarios."""

    @pytest.fixture
    def resolver(self, tmp_path):
        """Create a resolver rooted at a temporary directory."""
        return PathResolver(tmp_path, "")

    def test_document_round_trip(self, resolver):
        """Test the example document builds and reproduces its structure."""
        config = ConfigFileFormat.from_json(resolver, build_document())
        assert config.to_json() == build_document()

    def test_dangling_app_dir(self, resolver):
        """Test an unknown appDirKey fails without returning a document."""
        config = None
        with pytest.raises(ReferentialIntegrityError, match="unknownEgg"):
            config = ConfigFileFormat.from_json(resolver, build_document("unknownEgg"))
        assert config is None

    def test_scaffold_project(self, resolver, tmp_path):
        """Test staging scaffolding plus the document produces the expected tree."""
        config = ConfigFileFormat.from_json(resolver, build_document())
        queue = FSQueue(resolver)

        mozconfig_written = queue.add_requirement("write debug mozconfig")
        queue.make_directory("cleanroom/mozconfigs")
        queue.make_directory("sources/hatchedEgg")
        queue.write_file(
            "cleanroom/mozconfigs/debug.mozconfig",
            "ac_add_options --enable-debug\n",
            requirement=mozconfig_written,
        )
        queue.write_configuration(config, "cleanroom/config.json")

        assert len(queue.pending_operations()) == 4
        assert not (tmp_path / "cleanroom").exists()

        asyncio.run(queue.commit())

        assert queue.has_committed()
        assert (tmp_path / "sources" / "hatchedEgg").is_dir()
        assert config.mozconfigs["debug"].absolute_path() == str(
            tmp_path / "cleanroom" / "mozconfigs" / "debug.mozconfig"
        )

        text = (tmp_path / "cleanroom" / "config.json").read_text(encoding="utf-8")
        assert text.endswith("\n")
        written = json.loads(text)
        assert ConfigFileFormat.is_json(written)
        assert ConfigFileFormat.from_json(resolver, written).to_json() == build_document()

    def test_missing_scaffold_step_blocks_commit(self, resolver, tmp_path):
        """Test nothing is written when a mandatory step was never staged."""
        config = ConfigFileFormat.from_json(resolver, build_document())
        queue = FSQueue(resolver)

        queue.add_requirement("write debug mozconfig")
        queue.make_directory("cleanroom")
        queue.write_configuration(config, "cleanroom/config.json")

        with pytest.raises(OutstandingRequirementsError, match="write debug mozconfig"):
            asyncio.run(queue.suspend_warnings(queue.commit))

        assert not (tmp_path / "cleanroom").exists()

    def test_settings_to_disk(self, tmp_path):
        """Test settings drive where the manager writes the document."""
        settings_file = tmp_path / ".cleanroom" / "settings.yaml"
        settings_file.parent.mkdir()
        settings_file.write_text("configuration_file: build/config.json\n", encoding="utf-8")

        manager = ConfigurationManager(load_settings(tmp_path, [settings_file]))
        config = manager.load()

        queue = manager.create_queue()
        queue.make_directory("build")
        manager.stage(queue, config)
        asyncio.run(queue.commit())

        assert json.loads((tmp_path / "build" / "config.json").read_text(encoding="utf-8")) == ConfigFileFormat.blank()
        assert manager.settings == Settings(project_root=tmp_path, configuration_file="build/config.json")
