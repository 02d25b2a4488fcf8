"""Tests for document entities."""

import pytest
from cleanroom_config import File
from cleanroom_config import Integration
from cleanroom_config import PathResolver
from cleanroom_config import Project
from cleanroom_config import StringSet


class TestStringSet:
    """Test StringSet entity."""

    def test_is_json(self):
        """Test only duplicate-free lists of strings are accepted."""
        assert StringSet.is_json([]) is True
        assert StringSet.is_json(["sources/hatchedEgg", "sources/crackedEgg"]) is True
        assert StringSet.is_json(["a", "a"]) is False
        assert StringSet.is_json(["a", 1]) is False
        assert StringSet.is_json("a") is False
        assert StringSet.is_json({"a": "b"}) is False

    def test_round_trip_preserves_order(self):
        """Test insertion order survives from_json/to_json."""
        value = ["z", "a", "m"]
        assert StringSet.from_json(value).to_json() == ["z", "a", "m"]

    def test_to_json_returns_copy(self):
        """Test mutating serialized output does not affect the set."""
        strings = StringSet(["a"])
        strings.to_json().append("b")
        assert strings.to_json() == ["a"]

    def test_add_deduplicates(self):
        """Test adding an existing entry keeps its original position."""
        strings = StringSet(["a", "b"])
        strings.add("a")
        strings.add("c")
        assert strings.to_json() == ["a", "b", "c"]
        assert len(strings) == 3

    def test_discard(self):
        """Test discarding present and absent entries."""
        strings = StringSet(["a", "b"])
        strings.discard("a")
        strings.discard("missing")
        assert list(strings) == ["b"]
        assert "a" not in strings
        assert "b" in strings

    def test_equality(self):
        """Test equality depends on entries and their order."""
        assert StringSet(["a", "b"]) == StringSet(["a", "b"])
        assert StringSet(["a", "b"]) != StringSet(["b", "a"])


class TestFile:
    """Test File entity."""

    @pytest.fixture
    def resolver(self, tmp_path):
        """Create a resolver rooted at a temporary directory."""
        return PathResolver(tmp_path, "cleanroom")

    def test_is_json(self):
        """Test only strings are accepted."""
        assert File.is_json("patches/a.diff") is True
        assert File.is_json(["patches/a.diff"]) is False
        assert File.is_json(None) is False

    def test_round_trip(self, resolver):
        """Test the stored path is serialized verbatim."""
        entry = File.from_json(resolver, "cleanroom/mozconfigs/debug.mozconfig")
        assert entry.to_json() == "cleanroom/mozconfigs/debug.mozconfig"
        assert entry.path == "cleanroom/mozconfigs/debug.mozconfig"

    def test_absolute_path(self, resolver, tmp_path):
        """Test the path resolves against the directory the resolver pointed at."""
        entry = File.from_json(resolver, "patches/a.diff")
        assert entry.absolute_path() == str(tmp_path / "cleanroom" / "patches" / "a.diff")

    def test_resolver_captured_at_construction(self, resolver, tmp_path):
        """Test later changes to the caller's resolver do not move the file."""
        entry = File.from_json(resolver, "patches/a.diff")
        other = tmp_path / "other"
        other.mkdir()

        resolver.set_path(True, other)
        resolver.set_path(False, "unrelated")

        assert entry.absolute_path() == str(tmp_path / "cleanroom" / "patches" / "a.diff")
        assert resolver.get_path(False) == "unrelated"


class TestIntegration:
    """Test Integration entity."""

    @pytest.fixture
    def serialized(self):
        """Serialized integration."""
        return {
            "vanillaTag": "central",
            "sourceKeys": ["hatchedEgg", "crackedEgg"],
            "patchKeys": ["xpath-functions"],
            "targetDirectory": "../compiles/central",
        }

    def test_is_json(self, serialized):
        """Test a complete integration is accepted."""
        assert Integration.is_json(serialized) is True

    @pytest.mark.parametrize("key", ["vanillaTag", "sourceKeys", "patchKeys", "targetDirectory"])
    def test_is_json_missing_key(self, serialized, key):
        """Test every key is required."""
        del serialized[key]
        assert Integration.is_json(serialized) is False

    def test_is_json_rejects_wrong_types(self, serialized):
        """Test wrongly typed values and unknown keys are rejected."""
        assert Integration.is_json({**serialized, "sourceKeys": "hatchedEgg"}) is False
        assert Integration.is_json({**serialized, "vanillaTag": 1}) is False
        assert Integration.is_json({**serialized, "extra": True}) is False
        assert Integration.is_json([serialized]) is False

    def test_round_trip(self, serialized):
        """Test from_json/to_json reproduces the input."""
        integration = Integration.from_json(serialized)
        assert integration.vanilla_tag == "central"
        assert integration.source_keys == ["hatchedEgg", "crackedEgg"]
        assert integration.to_json() == serialized
        assert list(integration.to_json()) == list(serialized)

    def test_from_json_copies_lists(self, serialized):
        """Test the entity does not share lists with its input."""
        integration = Integration.from_json(serialized)
        serialized["sourceKeys"].append("late")
        assert integration.source_keys == ["hatchedEgg", "crackedEgg"]


class TestProject:
    """Test Project entity."""

    @pytest.fixture
    def serialized(self):
        """Serialized project."""
        return {"integrationKey": "central", "mozconfigKey": "debug", "appDirKey": "hatchedEgg"}

    def test_is_json(self, serialized):
        """Test a complete project is accepted."""
        assert Project.is_json(serialized) is True

    @pytest.mark.parametrize("key", ["integrationKey", "mozconfigKey", "appDirKey"])
    def test_is_json_missing_key(self, serialized, key):
        """Test every key is required."""
        del serialized[key]
        assert Project.is_json(serialized) is False

    def test_is_json_rejects_non_strings(self, serialized):
        """Test keys must be strings."""
        assert Project.is_json({**serialized, "appDirKey": None}) is False

    def test_round_trip(self, serialized):
        """Test from_json/to_json reproduces the input."""
        project = Project.from_json(serialized)
        assert project.integration_key == "central"
        assert project.mozconfig_key == "debug"
        assert project.app_dir_key == "hatchedEgg"
        assert project.to_json() == serialized
