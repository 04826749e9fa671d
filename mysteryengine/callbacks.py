"""Hooks the windowing layer calls while the system runs its own loop."""

from __future__ import annotations

from typing import Callable


class EngineCallbacks:
    """The idle and system-loop hooks.

    ``on_idle`` is called on a timer while the system keeps the main loop
    blocked (moving or resizing a window, for example), so the program can
    keep updating. ``on_system_loop(enter)`` is called with ``True`` when such
    a loop starts and ``False`` when it ends. The default hooks only record
    what happened: ``idle_count`` counts idle calls and ``in_system_loop``
    follows the last system-loop notice. Whoever replaces the hooks should put
    the old ones back, for example with
    :class:`~mysteryengine.tempguard.TempGuard`.
    """

    def __init__(self) -> None:
        self.idle_count = 0
        self.in_system_loop = False
        self.on_idle: Callable[[], None] = self._default_idle
        self.on_system_loop: Callable[[bool], None] = self._default_system_loop

    def _default_idle(self) -> None:
        self.idle_count += 1

    def _default_system_loop(self, enter: bool) -> None:
        self.in_system_loop = bool(enter)

    def reset(self) -> None:
        """Restore both hooks to the defaults."""
        self.on_idle = self._default_idle
        self.on_system_loop = self._default_system_loop