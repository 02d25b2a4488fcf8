"""Bidirectional JSON contract shared by every document entity.

Each entity type provides three things:

- ``is_json(value)``: a predicate deciding whether an untyped value has the
  exact shape the entity serializes to. It never raises.
- ``from_json(...)``: a factory for input that already passed ``is_json``.
  Path-resolving entities take ``from_json(path_resolver, value)``; pure
  value entities take ``from_json(value)``.
- ``to_json()``: the plain JSON-compatible value, which satisfies
  ``is_json`` again.

Subclasses state which factory signature they use in the class statement::

    class StringSet(JSONEntity, requires_resolver=False):
        ...

The declaration is checked once, when the class is created.
"""

import inspect
from abc import ABC
from abc import abstractmethod
from typing import Any
from typing import ClassVar
from typing import TypeVar

from .paths import PathResolver

E = TypeVar("E", bound="JSONEntity")


class JSONEntity(ABC):
    """Base class for JSON round-trippable entities."""

    requires_resolver: ClassVar[bool]

    def __init_subclass__(cls, requires_resolver: bool | None = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if requires_resolver is None:
            # Intermediate base classes do not declare a factory shape.
            return
        cls.requires_resolver = requires_resolver
        assert_json_type(cls, requires_resolver)

    @classmethod
    @abstractmethod
    def is_json(cls, value: Any) -> bool:
        """Return True if value has the serialized shape of this entity."""

    @classmethod
    @abstractmethod
    def from_json(cls, *args: Any) -> "JSONEntity":
        """Build an entity from input that passed is_json."""

    @abstractmethod
    def to_json(self) -> Any:
        """Serialize to a plain JSON-compatible value."""


def assert_json_type(cls: type, requires_resolver: bool) -> None:
    """Check that cls implements the JSON contract with the declared factory shape.

    Args:
        cls: Entity class to check
        requires_resolver: Whether from_json must take a PathResolver first

    Raises:
        TypeError: If a contract method is missing or from_json has the wrong shape
    """
    for name in ("is_json", "from_json", "to_json"):
        if not callable(getattr(cls, name, None)):
            raise TypeError(f"{cls.__name__} does not implement {name}()")

    params = [
        p
        for p in inspect.signature(cls.from_json).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    expected = 2 if requires_resolver else 1
    if len(params) != expected:
        kind = "path-resolving" if requires_resolver else "pure value"
        raise TypeError(
            f"{cls.__name__}.from_json() takes {len(params)} positional argument(s), "
            f"but a {kind} entity takes {expected}"
        )
    if requires_resolver and params[0].name != "path_resolver":
        raise TypeError(f"{cls.__name__}.from_json() must take path_resolver as its first argument")


def construct(entity_cls: type[E], path_resolver: PathResolver, value: Any) -> E:
    """Call an entity's factory, passing a resolver clone only when it needs one."""
    if entity_cls.requires_resolver:
        return entity_cls.from_json(path_resolver.clone(), value)
    return entity_cls.from_json(value)
