"""A rebindable, possibly empty reference to another object."""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class Reference(Generic[T]):
    """Points at one object or at nothing; attribute access goes to the target."""

    def __init__(self, target: Optional[T] = None) -> None:
        object.__setattr__(self, "_target", target)

    def bind(self, target: T) -> None:
        """Point the reference at ``target``."""
        object.__setattr__(self, "_target", target)

    def reset(self) -> None:
        """Make the reference empty."""
        object.__setattr__(self, "_target", None)

    def get(self) -> Optional[T]:
        """Return the target, or ``None`` when the reference is empty."""
        return self._target

    def __bool__(self) -> bool:
        return self._target is not None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        target = self._target
        if target is None:
            raise AttributeError(f"empty reference has no attribute {name!r}")
        return getattr(target, name)

    def __repr__(self) -> str:
        return f"Reference({self._target!r})"