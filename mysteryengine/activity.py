"""A single screen of the program that runs inside a window."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mysteryengine.window import Window


class Activity(abc.ABC):
    """One interface shown in a :class:`~mysteryengine.window.Window`.

    The window calls :meth:`prepare` when the activity is about to take over,
    then :meth:`start`; :meth:`stop` when it is replaced or the window closes.
    While running it receives events and per-frame updates.
    """

    @abc.abstractmethod
    def prepare(self, window: "Window") -> bool:
        """Get ready to run in ``window``; return whether the activity can run."""

    @abc.abstractmethod
    def start(self) -> None:
        """The activity is about to run."""

    @abc.abstractmethod
    def stop(self) -> None:
        """The activity has finished and is about to be removed."""

    @abc.abstractmethod
    def handle_event(self, event: Any) -> bool:
        """Handle one event; return True to discard the rest of the queue."""

    @abc.abstractmethod
    def update(self, dt: float) -> None:
        """Advance (and draw) by ``dt`` seconds."""

    def on_enter_sysloop(self) -> None:
        """The system has entered a loop that blocks the main loop."""
        self._in_sysloop = True

    def on_exit_sysloop(self) -> None:
        """The system has left that loop."""
        self._in_sysloop = False

    @property
    def in_sysloop(self) -> bool:
        """Whether the last notice was that a system loop started."""
        return getattr(self, "_in_sysloop", False)