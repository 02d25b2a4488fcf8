"""Loading and staging of the configuration document for a project."""

import json
import logging
import os
from pathlib import Path

from .document import ConfigFileFormat
from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .fs_queue import FSQueue
from .paths import PathResolver
from .settings import Settings

logger = logging.getLogger(__name__)


class ConfigurationManager:
    """Reads a project's configuration document and stages it for writing.

    Reading happens immediately; writing is always deferred to an FSQueue
    created by this manager and committed by the caller.

    Args:
        settings: Project root and configuration file location
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def path_resolver(self) -> PathResolver:
        """Get a fresh resolver rooted at the project root."""
        return PathResolver(self.settings.project_root)

    def configuration_path(self) -> Path:
        """Get the absolute path of the configuration document."""
        return Path(self.path_resolver().get_path(True)) / self.settings.configuration_file

    def load(self) -> ConfigFileFormat:
        """Load the configuration document, or a blank one if none exists yet.

        File entries resolve relative to the document's directory.

        Returns:
            The parsed, integrity-checked document

        Raises:
            ConfigFileError: If the file cannot be read or is not JSON
            ConfigValidationError: If the document has the wrong shape
            ReferentialIntegrityError: If a key reference does not resolve
        """
        resolver = self.path_resolver()
        resolver.set_path(False, os.path.dirname(self.settings.configuration_file))

        path = self.configuration_path()
        if not path.exists():
            logger.info(f"No configuration at {path}, starting from a blank document")
            return ConfigFileFormat.from_json(resolver, ConfigFileFormat.blank())

        data = self._read_json(path)
        if not ConfigFileFormat.is_json(data):
            raise ConfigValidationError(f"Configuration at {path} is not a valid version 1.0.0 document")

        document = ConfigFileFormat.from_json(resolver, data)
        logger.info(f"Loaded configuration from {path}")
        return document

    def create_queue(self) -> FSQueue:
        """Create a queue rooted at the project root."""
        return FSQueue(self.path_resolver(), enable_warnings=self.settings.enable_warnings)

    def stage(self, queue: FSQueue, document: ConfigFileFormat) -> None:
        """Check the document and stage writing it on the queue.

        Raises:
            ReferentialIntegrityError: If a key reference does not resolve
        """
        document.validate()
        queue.write_configuration(document, self.settings.configuration_file)

    # ===== Private Helpers =====

    def _read_json(self, path: Path) -> object:
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigFileError(f"Failed to read configuration from {path}: {e}") from e
