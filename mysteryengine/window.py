"""A window that hosts one activity at a time and feeds it events."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Optional, Tuple

from mysteryengine.activity import Activity

Size = Tuple[int, int]


class WindowStatus(enum.Enum):
    """How the window occupies the screen."""

    WINDOWED = 0
    BORDERLESS = 1
    FULLSCREEN = 2


class EventType(enum.Enum):
    """Kinds of window events."""

    CLOSED = enum.auto()
    RESIZED = enum.auto()
    LOST_FOCUS = enum.auto()
    GAINED_FOCUS = enum.auto()
    TEXT_ENTERED = enum.auto()
    KEY_PRESSED = enum.auto()
    KEY_RELEASED = enum.auto()
    MOUSE_WHEEL_SCROLLED = enum.auto()
    MOUSE_BUTTON_PRESSED = enum.auto()
    MOUSE_BUTTON_RELEASED = enum.auto()
    MOUSE_MOVED = enum.auto()
    MOUSE_ENTERED = enum.auto()
    MOUSE_LEFT = enum.auto()


@dataclass(frozen=True)
class Event:
    """A window event; ``width`` and ``height`` are used by RESIZED events."""

    type: EventType
    width: int = 0
    height: int = 0
    data: Any = None


class Window:
    """A window with an event queue and a current activity.

    The base class keeps its surface in memory; a platform layer overrides
    ``_open_native`` and ``_realtime_size`` to back it with a real window.
    """

    def __init__(self) -> None:
        self._created = False
        self._sizing_as_resized = False
        self._wait_to_stop = False
        self._wait_to_change = False
        self._window_status = WindowStatus.WINDOWED
        self._activity: Optional[Activity] = None
        self._next_activity: Optional[Activity] = None
        self._open = False
        self._events: Deque[Event] = deque()
        self._size: Size = (0, 0)
        self._view: Tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
        self._old_size: Size = (0, 0)

    # -- lifetime -------------------------------------------------------------

    def _open_native(self, foreground: bool) -> bool:
        self._open = True
        return True

    def create(self, foreground: bool = True) -> bool:
        """Open the window; return whether it is open."""
        self._open_native(foreground)
        if not self.is_open():
            return False
        self._created = True
        return True

    def close(self) -> None:
        """Stop and drop the current activity and close the window."""
        if self._activity is not None:
            self._activity.stop()
            self._activity = None
        self._open = False
        self._events.clear()

    def is_open(self) -> bool:
        """Whether the window is open."""
        return self._open

    # -- activity -------------------------------------------------------------

    @property
    def activity(self) -> Optional[Activity]:
        """The running activity, if any."""
        return self._activity

    def change_activity(self, activity: Activity) -> None:
        """Queue ``activity`` to replace the current one before the next event pass."""
        if activity is None:
            raise ValueError("activity must not be None")
        self._wait_to_change = True
        self._next_activity = activity

    def available(self) -> bool:
        """Whether the window is created and has (or is about to get) an activity."""
        return self._created and (self._activity is not None or self._wait_to_change)

    def _require_activity(self) -> Activity:
        if self._activity is None:
            raise RuntimeError("window has no activity")
        return self._activity

    # -- size and view --------------------------------------------------------

    @property
    def sizing_as_resized(self) -> bool:
        """Whether size changes during a system loop reach the activity as RESIZED events."""
        return self._sizing_as_resized

    @sizing_as_resized.setter
    def sizing_as_resized(self, enabled: bool) -> None:
        self._sizing_as_resized = bool(enabled)

    @property
    def size(self) -> Size:
        """Size of the drawing surface."""
        return self._size

    @property
    def view(self) -> Tuple[float, float, float, float]:
        """Visible area as ``(left, top, width, height)``."""
        return self._view

    def set_view(self, width: float, height: float) -> None:
        """Show the area from the origin with the given width and height."""
        self._view = (0.0, 0.0, float(width), float(height))

    def resize_surface(self, size: Size) -> None:
        """Change the surface size without touching the view."""
        width, height = size
        self._size = (int(width), int(height))

    def set_size(self, size: Size) -> None:
        """Resize the window and its view; ignored unless windowed."""
        if self._window_status is WindowStatus.WINDOWED:
            self.resize_surface(size)
            self.set_view(*self._size)

    @property
    def window_status(self) -> WindowStatus:
        """Whether the window is windowed, borderless or fullscreen."""
        return self._window_status

    def _realtime_size(self) -> Size:
        return self._size

    def check_size_in_system_loop(self) -> None:
        """Pick up a size change made while the system loop blocked the main loop."""
        size = tuple(int(v) for v in self._realtime_size())
        if size == self._old_size:
            return
        self._old_size = size
        if self._sizing_as_resized:
            self.set_size(size)
            if self._activity is not None:
                self._activity.handle_event(Event(EventType.RESIZED, size[0], size[1]))
        else:
            self.resize_surface(size)

    # -- events ---------------------------------------------------------------

    def post_event(self, event: Event) -> None:
        """Append an event to the queue."""
        self._events.append(event)

    def poll_event(self) -> Optional[Event]:
        """Take the next queued event, or return None when there is none."""
        if not self._open or not self._events:
            return None
        return self._events.popleft()

    def handle_event(self) -> None:
        """Switch to a pending activity, then pass queued events to the current one."""
        while self._wait_to_change:
            self._wait_to_change = False
            candidate, self._next_activity = self._next_activity, None
            if candidate.prepare(self):
                if self._activity is not None:
                    self._activity.stop()
                self._activity = candidate
                candidate.start()
        while (event := self.poll_event()) is not None:
            if event.type is EventType.RESIZED:
                self.set_view(event.width, event.height)
            if self._require_activity().handle_event(event):
                while self.poll_event() is not None:
                    pass
                break

    def update(self, dt: float) -> None:
        """Update the activity by ``dt`` seconds."""
        self._require_activity().update(dt)

    def on_system_loop(self, enter: bool) -> None:
        """Tell the activity that a system loop starts (True) or ends (False)."""
        activity = self._require_activity()
        if enter:
            activity.on_enter_sysloop()
        else:
            activity.on_exit_sysloop()

    # -- stopping -------------------------------------------------------------

    def mark_waiting_for_stop(self) -> None:
        """Ask for the window to be closed."""
        self._wait_to_stop = True

    @property
    def waiting_for_stop(self) -> bool:
        """Whether the window has been asked to close."""
        return self._wait_to_stop