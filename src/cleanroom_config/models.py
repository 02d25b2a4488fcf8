"""Entities stored in the configuration document's named collections."""

import os
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from .json_entity import JSONEntity
from .paths import PathResolver
from .utils import is_string_list


class StringSet(JSONEntity, requires_resolver=False):
    """Ordered, deduplicated set of relative paths.

    Serialized as a JSON array of strings. Insertion order is preserved,
    and adding an existing entry leaves the order unchanged.
    """

    def __init__(self, items: Iterable[str] = ()):
        self._items: dict[str, None] = dict.fromkeys(items)

    @classmethod
    def is_json(cls, value: Any) -> bool:
        return is_string_list(value) and len(set(value)) == len(value)

    @classmethod
    def from_json(cls, value: list[str]) -> "StringSet":
        return cls(value)

    def to_json(self) -> list[str]:
        return list(self._items)

    def add(self, item: str) -> None:
        self._items[item] = None

    def discard(self, item: str) -> None:
        self._items.pop(item, None)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringSet):
            return NotImplemented
        return list(self._items) == list(other._items)

    def __repr__(self) -> str:
        return f"StringSet({list(self._items)!r})"


class File(JSONEntity, requires_resolver=True):
    """A single path, relative to the directory the resolver pointed at.

    The resolver is cloned at construction, so the directory the path is
    relative to is fixed then; later changes to the caller's resolver do
    not move the file.

    Args:
        path_resolver: Resolver pointing at the document's directory
        path: Relative path string, stored verbatim
    """

    def __init__(self, path_resolver: PathResolver, path: str):
        self._resolver = path_resolver.clone()
        self._path = path

    @classmethod
    def is_json(cls, value: Any) -> bool:
        return isinstance(value, str)

    @classmethod
    def from_json(cls, path_resolver: PathResolver, value: str) -> "File":
        return cls(path_resolver, value)

    def to_json(self) -> str:
        return self._path

    @property
    def path(self) -> str:
        """The stored relative path."""
        return self._path

    def absolute_path(self) -> str:
        """Resolve the stored path against the captured directory."""
        return os.path.normpath(os.path.join(self._resolver.get_path(True), self._path))

    def __repr__(self) -> str:
        return f"File({self._path!r})"


@dataclass
class Integration(JSONEntity, requires_resolver=False):
    """Overlay of a vanilla upstream tag with source and patch sets.

    Attributes:
        vanilla_tag: Upstream tag the integration starts from
        source_keys: Keys into the document's sources, in application order
        patch_keys: Keys into the document's patches, in application order
        target_directory: Where the integrated tree is assembled
    """

    vanilla_tag: str
    source_keys: list[str] = field(default_factory=list)
    patch_keys: list[str] = field(default_factory=list)
    target_directory: str = ""

    @classmethod
    def is_json(cls, value: Any) -> bool:
        if not isinstance(value, dict):
            return False
        if set(value) != {"vanillaTag", "sourceKeys", "patchKeys", "targetDirectory"}:
            return False
        return (
            isinstance(value["vanillaTag"], str)
            and is_string_list(value["sourceKeys"])
            and is_string_list(value["patchKeys"])
            and isinstance(value["targetDirectory"], str)
        )

    @classmethod
    def from_json(cls, value: dict[str, Any]) -> "Integration":
        return cls(
            vanilla_tag=value["vanillaTag"],
            source_keys=list(value["sourceKeys"]),
            patch_keys=list(value["patchKeys"]),
            target_directory=value["targetDirectory"],
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "vanillaTag": self.vanilla_tag,
            "sourceKeys": list(self.source_keys),
            "patchKeys": list(self.patch_keys),
            "targetDirectory": self.target_directory,
        }


@dataclass
class Project(JSONEntity, requires_resolver=False):
    """One buildable target.

    Attributes:
        integration_key: Key into the document's integrations
        mozconfig_key: Key into the document's mozconfigs
        app_dir_key: Key into the document's sources
    """

    integration_key: str
    mozconfig_key: str
    app_dir_key: str

    @classmethod
    def is_json(cls, value: Any) -> bool:
        if not isinstance(value, dict):
            return False
        keys = ("integrationKey", "mozconfigKey", "appDirKey")
        return set(value) == set(keys) and all(isinstance(value[k], str) for k in keys)

    @classmethod
    def from_json(cls, value: dict[str, str]) -> "Project":
        return cls(
            integration_key=value["integrationKey"],
            mozconfig_key=value["mozconfigKey"],
            app_dir_key=value["appDirKey"],
        )

    def to_json(self) -> dict[str, str]:
        return {
            "integrationKey": self.integration_key,
            "mozconfigKey": self.mozconfig_key,
            "appDirKey": self.app_dir_key,
        }
