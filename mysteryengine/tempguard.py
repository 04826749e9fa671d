"""Temporarily replace an attribute and put the old value back afterwards."""

from __future__ import annotations

from typing import Any


class TempGuard:
    """Keep the current value of ``owner.name`` and restore it on exit.

    Used as a context manager: inside the block the attribute may be changed
    with :meth:`set`; leaving the block, normally or by an exception, puts the
    value it had when the guard was made back in place.
    """

    def __init__(self, owner: Any, name: str) -> None:
        self._owner = owner
        self._name = name
        self._old = getattr(owner, name)

    @property
    def saved(self) -> Any:
        """The value the attribute had when the guard was created."""
        return self._old

    def set(self, value: Any) -> None:
        """Give the guarded attribute a temporary value."""
        setattr(self._owner, self._name, value)

    def restore(self) -> None:
        """Put the saved value back."""
        setattr(self._owner, self._name, self._old)

    def __enter__(self) -> TempGuard:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore()
        return False