"""A shared music player driven from a background thread.

Commands are queued and carried out in order by a worker thread; a track
that is playing fades out before it is stopped or replaced.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Callable, Optional, Tuple

from mysteryengine.bgm import BGM, BGMStatus

_log = logging.getLogger(__name__)

_FADE_TIME = 0.2
_FADE_STEP = 0.01
_POLL_INTERVAL = 0.08

_Command = Tuple[str, Optional[str]]


class GlobalBGM:
    """Plays music on a worker thread; ``factory`` makes the player it uses."""

    def __init__(self, factory: Callable[[], BGM] = BGM) -> None:
        self._factory = factory
        self._thread: Optional[threading.Thread] = None
        self._quit = threading.Event()
        self._commands: "queue.Queue[_Command]" = queue.Queue()

    def setup(self) -> bool:
        """Start the worker thread if it is not running; return True."""
        if self._thread is not None:
            return True
        self._quit = threading.Event()
        self._commands = queue.Queue()
        self._thread = threading.Thread(
            target=self._run, args=(self._quit, self._commands), name="global-bgm", daemon=True
        )
        self._thread.start()
        return True

    def drop(self) -> None:
        """Stop the music and wait for the worker thread to finish."""
        if self._thread is None:
            return
        self._quit.set()
        self._thread.join()
        self._thread = None

    def _push(self, command: _Command) -> None:
        if self._thread is None:
            raise RuntimeError("global music player is not set up")
        self._commands.put(command)

    def play(self, file: str) -> None:
        """Queue a switch to ``file``; any playing track fades out first."""
        self._push(("play", str(file)))

    def stop(self) -> None:
        """Queue a fade-out of the playing track."""
        self._push(("stop", None))

    @property
    def running(self) -> bool:
        """Whether the worker thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    @staticmethod
    def _fade_out(bgm: BGM, quit_event: threading.Event) -> None:
        start = time.monotonic()
        while not quit_event.is_set():
            elapsed = time.monotonic() - start
            if elapsed >= _FADE_TIME:
                break
            bgm.volume = 100.0 * (1.0 - elapsed / _FADE_TIME)
            quit_event.wait(_FADE_STEP)
        bgm.stop()

    def _run(self, quit_event: threading.Event, commands: "queue.Queue[_Command]") -> None:
        bgm = self._factory()
        try:
            while not quit_event.is_set():
                try:
                    kind, file = commands.get(timeout=_POLL_INTERVAL)
                except queue.Empty:
                    continue
                if kind == "stop":
                    if bgm.status is BGMStatus.PLAYING:
                        self._fade_out(bgm, quit_event)
                elif kind == "play":
                    if bgm.status is BGMStatus.PLAYING:
                        self._fade_out(bgm, quit_event)
                    if quit_event.is_set():
                        break
                    try:
                        bgm.open_from_file(file)
                    except (OSError, ValueError) as err:
                        _log.warning("cannot open %s: %s", file, err)
                    bgm.volume = 100.0
                    bgm.play()
        finally:
            bgm.stop()