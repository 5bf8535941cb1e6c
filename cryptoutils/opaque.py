"""A representation that hides an object's internal state."""

from __future__ import annotations


class OpaqueRepr:
    """Mixin whose ``repr`` shows only the class name, as ``Name { ... }``.

    Useful for objects holding secrets that must not leak through logging.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__} {{ ... }}"