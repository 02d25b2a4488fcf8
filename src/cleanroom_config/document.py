"""The versioned configuration document (format 1.0.0)."""

from typing import Any

from .exceptions import ReferentialIntegrityError
from .json_entity import JSONEntity
from .json_entity import construct
from .models import File
from .models import Integration
from .models import Project
from .models import StringSet
from .paths import PathResolver

FORMAT_VERSION = "1.0.0"

# Serialized key order; formatVersion always comes first.
_COLLECTIONS: dict[str, type[JSONEntity]] = {
    "sources": StringSet,
    "patches": File,
    "mozconfigs": File,
    "integrations": Integration,
    "projects": Project,
}

DanglingReference = tuple[str, str, str, str]


class ConfigFileFormat(JSONEntity, requires_resolver=True):
    """Top-level configuration document.

    Aggregates five named collections. Integrations and projects refer to
    other entries by key; every such reference must resolve.

    Attributes:
        format_version: Schema version string
        sources: Source directory sets by name
        patches: Patch files by name
        mozconfigs: Build-flag files by name
        integrations: Integration branches by name
        projects: Build targets by name
    """

    def __init__(self) -> None:
        self.format_version = FORMAT_VERSION
        self.sources: dict[str, StringSet] = {}
        self.patches: dict[str, File] = {}
        self.mozconfigs: dict[str, File] = {}
        self.integrations: dict[str, Integration] = {}
        self.projects: dict[str, Project] = {}

    # ===== JSON contract =====

    @classmethod
    def blank(cls) -> dict[str, Any]:
        """Return the serialized empty document."""
        return {"formatVersion": FORMAT_VERSION, **{name: {} for name in _COLLECTIONS}}

    @classmethod
    def is_json(cls, value: Any) -> bool:
        """Check the exact document shape, including every collection entry.

        Returns False for anything else; never raises.
        """
        if not isinstance(value, dict):
            return False
        if set(value) != {"formatVersion", *_COLLECTIONS}:
            return False
        if value["formatVersion"] != FORMAT_VERSION:
            return False

        for name, entity_cls in _COLLECTIONS.items():
            collection = value[name]
            if not isinstance(collection, dict):
                return False
            if not all(entity_cls.is_json(entry) for entry in collection.values()):
                return False
        return True

    @classmethod
    def from_json(cls, path_resolver: PathResolver, value: dict[str, Any]) -> "ConfigFileFormat":
        """Build a document from input that passed is_json.

        Every collection is populated first, so references may point at
        entries appearing later in the input. References are checked once
        all collections exist.

        Args:
            path_resolver: Resolver for the document's directory
            value: Parsed JSON document

        Raises:
            ReferentialIntegrityError: If any key reference does not resolve
        """
        document = cls()
        for name in _COLLECTIONS:
            target = getattr(document, name)
            entity_cls = _COLLECTIONS[name]
            for key, entry in value[name].items():
                target[key] = construct(entity_cls, path_resolver, entry)

        document.validate()
        return document

    def to_json(self) -> dict[str, Any]:
        serialized: dict[str, Any] = {"formatVersion": self.format_version}
        for name in _COLLECTIONS:
            serialized[name] = {key: entry.to_json() for key, entry in getattr(self, name).items()}
        return serialized

    # ===== Referential integrity =====

    def dangling_references(self) -> list[DanglingReference]:
        """List every unresolved key reference in document order.

        Returns:
            Tuples of (entity_kind, key, collection, missing_key)
        """
        dangling: list[DanglingReference] = []

        for key, integration in self.integrations.items():
            for source_key in integration.source_keys:
                if source_key not in self.sources:
                    dangling.append(("integration", key, "sources", source_key))
            for patch_key in integration.patch_keys:
                if patch_key not in self.patches:
                    dangling.append(("integration", key, "patches", patch_key))

        for key, project in self.projects.items():
            if project.integration_key not in self.integrations:
                dangling.append(("project", key, "integrations", project.integration_key))
            if project.mozconfig_key not in self.mozconfigs:
                dangling.append(("project", key, "mozconfigs", project.mozconfig_key))
            if project.app_dir_key not in self.sources:
                dangling.append(("project", key, "sources", project.app_dir_key))

        return dangling

    def validate(self) -> None:
        """Check every cross-collection reference.

        Raises:
            ReferentialIntegrityError: For the first dangling reference found
        """
        dangling = self.dangling_references()
        if dangling:
            raise ReferentialIntegrityError(*dangling[0])
