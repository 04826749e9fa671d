"""Runs the windows of the program in one main loop."""

from __future__ import annotations

import sys
import time
from collections import deque
from typing import Callable, ClassVar, Deque, Optional, Tuple, Union

from mysteryengine.activity import Activity
from mysteryengine.callbacks import EngineCallbacks
from mysteryengine.tempguard import TempGuard
from mysteryengine.window import Window

_ERROR_TITLE = "Mystery Engine: Error"
_WINDOW_EXCEPTION = "Window Exception:\n"


class Carnival:
    """Manages every window, in single-window or multiple-window mode.

    While :meth:`run` is active, ``callbacks`` points at this carnival's idle
    and system-loop handlers; the previous hooks are restored afterwards.
    """

    _instance: ClassVar[Optional["Carnival"]] = None

    def __init__(self, multiple_windows: bool = True) -> None:
        self._multiple = bool(multiple_windows)
        self._windows: Deque[Window] = deque()
        self._single: Optional[Window] = None
        self.callbacks = EngineCallbacks()
        self.clock: Callable[[], float] = time.monotonic
        self.window_factory: Callable[[], Window] = Window
        self._last_tick = 0.0
        self._sleep_enabled = True
        self._last_activity = 0.0
        self._messages: Deque[Callable[[], None]] = deque()

    # -- the shared instance ----------------------------------------------------

    @classmethod
    def setup(cls, instance: Union["Carnival", bool] = True) -> "Carnival":
        """Install the shared instance: a given carnival, or a new one in the given mode."""
        if not isinstance(instance, Carnival):
            instance = cls(bool(instance))
        Carnival._instance = instance
        return instance

    @classmethod
    def instance(cls) -> "Carnival":
        """The shared instance; raises RuntimeError before :meth:`setup`."""
        if Carnival._instance is None:
            raise RuntimeError("Carnival is not set up")
        return Carnival._instance

    @classmethod
    def drop(cls) -> None:
        """Discard the shared instance."""
        Carnival._instance = None

    # -- windows ------------------------------------------------------------------

    @property
    def multiple_windows(self) -> bool:
        return self._multiple

    @property
    def windows(self) -> Tuple[Window, ...]:
        """The managed windows, most recently added first."""
        if self._multiple:
            return tuple(self._windows)
        return (self._single,) if self._single is not None else ()

    def push_window(self, window: Window) -> None:
        """Add a created window that has an activity.

        Raises ValueError if the window is not ready and RuntimeError when a
        second window is added in single-window mode.
        """
        if not window.available():
            raise ValueError("window must be created and have an activity")
        if self._multiple:
            self._windows.appendleft(window)
        else:
            if self._single is not None:
                raise RuntimeError("single-window mode already has a window")
            self._single = window

    def emplace_window(self, activity: Activity, foreground: bool = False) -> None:
        """Create a window running ``activity`` and add it."""
        if activity is None:
            raise ValueError("activity must not be None")
        if not self._multiple and self._single is not None:
            raise RuntimeError("single-window mode already has a window")
        window = self.window_factory()
        if not window.create(foreground):
            raise RuntimeError("window creation failed")
        window.change_activity(activity)
        self.push_window(window)

    def remove_stopped_windows(self) -> None:
        """Close and drop every window waiting for stop."""
        kept = deque()
        for window in self._windows:
            if window.waiting_for_stop:
                window.close()
            else:
                kept.append(window)
        self._windows = kept

    # -- running --------------------------------------------------------------------

    def _restart_clock(self) -> float:
        now = self.clock()
        elapsed = now - self._last_tick
        self._last_tick = now
        return elapsed

    def run(self) -> None:
        """Run until every window has stopped; errors are reported, not raised."""
        callbacks = self.callbacks
        with TempGuard(callbacks, "on_idle") as idle, TempGuard(
            callbacks, "on_system_loop"
        ) as sysloop:
            if self._multiple:
                idle.set(self.on_idle)
                sysloop.set(self.on_system_loop)
            else:
                idle.set(self.on_idle_single)
                sysloop.set(self.on_system_loop_single)
            self._restart_clock()
            try:
                if self._multiple:
                    self._run_multiple()
                else:
                    self._run_single()
            except Exception as err:
                self.show_error_message_box(_ERROR_TITLE, _WINDOW_EXCEPTION + str(err))

    def _run_multiple(self) -> None:
        while self._windows:
            for window in list(self._windows):
                window.handle_event()
            dt = self._restart_clock()
            for window in list(self._windows):
                window.update(dt)
            self.remove_stopped_windows()
            self.system_message_pump()

    def _run_single(self) -> None:
        window = self._single
        if window is None:
            raise RuntimeError("no window to run")
        while not window.waiting_for_stop:
            window.handle_event()
            window.update(self._restart_clock())
            self.system_message_pump()
        window.close()
        self._single = None

    def on_idle(self) -> None:
        """Keep all windows running while the system loop blocks the main loop."""
        if not self._windows:
            return
        for window in list(self._windows):
            window.handle_event()
            window.check_size_in_system_loop()
        dt = self._restart_clock()
        for window in list(self._windows):
            window.update(dt)
        self.remove_stopped_windows()

    def on_idle_single(self) -> None:
        """Keep the single window running while the system loop blocks the main loop."""
        window = self._single
        if window is None:
            return
        if not window.waiting_for_stop:
            window.handle_event()
            window.check_size_in_system_loop()
            window.update(self._restart_clock())
        else:
            window.close()

    def on_system_loop(self, enter: bool) -> None:
        """Tell every window that a system loop starts or ends."""
        for window in list(self._windows):
            window.on_system_loop(enter)

    def on_system_loop_single(self, enter: bool) -> None:
        """Tell the single window that a system loop starts or ends."""
        if self._single is not None:
            self._single.on_system_loop(enter)

    # -- system services --------------------------------------------------------------

    def show_error_message_box(self, title: str, text: str) -> None:
        """Report an error to the user, independent of any window."""
        print(f"{title}\n{text}", file=sys.stderr)

    def reset_sleep_counter(self) -> None:
        """Restart the system idle countdown."""
        self._last_activity = self.clock()

    def set_sleep_enabled(self, allow_sleep: bool) -> None:
        """Allow or prevent the system (and screen) from sleeping."""
        self._sleep_enabled = bool(allow_sleep)

    @property
    def sleep_enabled(self) -> bool:
        return self._sleep_enabled

    def post_message(self, message: Callable[[], None]) -> None:
        """Queue a message to be dispatched by the next :meth:`system_message_pump`."""
        self._messages.append(message)

    @property
    def pending_messages(self) -> int:
        """How many posted messages wait to be dispatched."""
        return len(self._messages)

    def system_message_pump(self) -> None:
        """Dispatch every pending message, including ones posted while dispatching."""
        while self._messages:
            message = self._messages.popleft()
            message()