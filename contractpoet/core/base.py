"""
Shared behaviour for built contract specs: tag storage and text identity.

Tags are keyed by type and never take part in rendering or equality.
"""

from types import MappingProxyType
from typing import Any, Dict, Optional, Type, TypeVar

T = TypeVar("T")


class TagMap:
    """Read-only snapshot of a builder's tags"""

    def __init__(self, tags: Dict[type, Any]):
        self._tags = MappingProxyType(dict(tags))

    def tag(self, tag_type: Type[T]) -> Optional[T]:
        return self._tags.get(tag_type)

    @property
    def tags(self):
        return self._tags


class TaggableSpec:
    """
    Base for immutable specs.

    Two specs of the same class are equal when their canonical text is
    equal, even if their fields differ.
    """

    _tag_map: TagMap

    def tag(self, tag_type: Type[T]) -> Optional[T]:
        return self._tag_map.tag(tag_type)

    def _canonical_text(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._canonical_text()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return self._canonical_text() == other._canonical_text()

    def __hash__(self) -> int:
        return hash(self._canonical_text())

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    def _freeze(self) -> None:
        object.__setattr__(self, "_frozen", True)
