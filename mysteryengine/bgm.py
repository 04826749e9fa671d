"""Background music files: Ogg Vorbis with an embedded loop point.

A loop point is stored as a Vorbis comment ``OHMSSPC=>OFFSET:LENGTH<``,
both numbers in microseconds. :class:`BGM` opens such a file, reads the
stream parameters and the loop point, and keeps track of playback state
and position against a clock, looping over the loop span.
"""

from __future__ import annotations

import enum
import io
import logging
import re
import time
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, Tuple

_log = logging.getLogger(__name__)

_OGG_MAGIC = b"OggS"
_COMMENT_KEY = b"OHMSSPC="
_COMMENT_PACKET = 3
_IDENT_PACKET = 1
_LOOP_RE = re.compile(rb">(\d*):(\d*)<")
_TAIL_BYTES = 131072
_DEFAULT_MAX_LENGTH = 48


class BGMStatus(enum.Enum):
    """Playback state."""

    STOPPED = 0
    PAUSED = 1
    PLAYING = 2


class LoopPointError(ValueError):
    """The stream holds no usable loop point."""


@dataclass(frozen=True)
class LoopPoint:
    """Start and length of the looped span, in microseconds."""

    offset: int = 0
    length: int = 0

    @property
    def offset_seconds(self) -> float:
        return self.offset / 1_000_000

    @property
    def length_seconds(self) -> float:
        return self.length / 1_000_000


def _read_exact(stream: BinaryIO, count: int) -> bytes:
    data = stream.read(count)
    if data is None or len(data) != count:
        raise LoopPointError("unexpected end of stream")
    return data


def _u32(data: bytes) -> int:
    return int.from_bytes(data, "little")


def _stream_size(stream: BinaryIO) -> int:
    return stream.seek(0, io.SEEK_END)


def read_comment_data(stream: BinaryIO, max_length: int = _DEFAULT_MAX_LENGTH) -> bytes:
    """Return the value of the ``OHMSSPC`` comment of an Ogg stream.

    The value must be shorter than ``max_length`` bytes. Raises
    :class:`LoopPointError` if the stream is not Ogg, has no such comment,
    is truncated, or the value is too long.
    """
    size = _stream_size(stream)
    stream.seek(0)
    if stream.read(4) != _OGG_MAGIC:
        raise LoopPointError("wrong file type")
    stream.seek(0)
    while True:
        pos = stream.tell()
        if pos >= size:
            raise LoopPointError("no loop point comment")
        stream.seek(pos + 26)
        count = _read_exact(stream, 1)[0]
        seg_lengths = _read_exact(stream, count)
        for seg_len in seg_lengths:
            seg_start = stream.tell()
            seg_end = seg_start + seg_len
            if _read_exact(stream, 1)[0] != _COMMENT_PACKET:
                stream.seek(seg_end)
                continue
            stream.seek(seg_start + 7)
            vendor_len = _u32(_read_exact(stream, 4))
            stream.seek(seg_start + 11 + vendor_len + 4)
            while stream.tell() < seg_end:
                entry_pos = stream.tell()
                entry_len = _u32(_read_exact(stream, 4))
                if entry_len < 13 or _read_exact(stream, 8) != _COMMENT_KEY:
                    stream.seek(entry_pos + 4 + entry_len)
                    continue
                value_len = entry_len - len(_COMMENT_KEY)
                if value_len >= max_length:
                    raise LoopPointError("loop point comment too long")
                return _read_exact(stream, value_len)
            stream.seek(seg_end)


def read_loop_point(stream: BinaryIO) -> LoopPoint:
    """Read and parse the ``>OFFSET:LENGTH<`` loop point of an Ogg stream."""
    data = read_comment_data(stream, _DEFAULT_MAX_LENGTH)
    match = _LOOP_RE.match(data)
    if match is None:
        raise LoopPointError(f"malformed loop point {data!r}")
    offset, length = (int(group or b"0") for group in match.groups())
    return LoopPoint(offset, length)


@dataclass(frozen=True)
class _StreamInfo:
    channels: int
    sample_rate: int
    duration: float


def _read_stream_info(stream: BinaryIO) -> _StreamInfo:
    size = _stream_size(stream)
    stream.seek(0)
    header = stream.read(27)
    if len(header) != 27 or header[:4] != _OGG_MAGIC:
        raise ValueError("not an Ogg stream")
    seg_lengths = stream.read(header[26])
    if len(seg_lengths) != header[26] or not seg_lengths:
        raise ValueError("truncated Ogg page")
    packet = stream.read(seg_lengths[0])
    if len(packet) < 16 or packet[0] != _IDENT_PACKET or packet[1:7] != b"vorbis":
        raise ValueError("not an Ogg Vorbis stream")
    channels = packet[11]
    sample_rate = _u32(packet[12:16])
    if channels == 0 or sample_rate == 0:
        raise ValueError("invalid Vorbis identification header")
    stream.seek(max(0, size - _TAIL_BYTES))
    tail = stream.read()
    last = tail.rfind(_OGG_MAGIC)
    if last < 0 or last + 14 > len(tail):
        raise ValueError("no final Ogg page")
    granule = int.from_bytes(tail[last + 6:last + 14], "little", signed=True)
    return _StreamInfo(channels, sample_rate, max(granule, 0) / sample_rate)


class BGM:
    """Background music track with looping between loop points.

    Positions are in seconds; the volume runs from 0 to 100. ``clock`` is a
    function returning the current time in seconds.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._status = BGMStatus.STOPPED
        self._volume = 100.0
        self._offset = 0.0
        self._started = 0.0
        self._info: Optional[_StreamInfo] = None
        self._loop_span: Tuple[float, float] = (0.0, 0.0)
        self.loop = False
        self.filename: Optional[str] = None

    # -- opening -------------------------------------------------------------

    def open_from_file(self, filename: str) -> None:
        """Open a track; the loop point is applied when present and looping is on.

        Raises OSError if the file cannot be read and ValueError if it is not
        an Ogg Vorbis stream.
        """
        self.stop()
        with open(filename, "rb") as stream:
            try:
                loop_point: Optional[LoopPoint] = read_loop_point(stream)
            except LoopPointError as err:
                _log.warning("read comment failed: %s", err)
                loop_point = None
            info = _read_stream_info(stream)
        self._info = info
        self.filename = str(filename)
        self._loop_span = (0.0, info.duration)
        if loop_point is not None:
            self._set_loop_span(loop_point.offset_seconds, loop_point.length_seconds)
        self.loop = True

    def _set_loop_span(self, offset: float, length: float) -> None:
        duration = self.length
        if length <= 0.0 or duration <= 0.0:
            _log.warning("loop span has no length; ignored")
            return
        if offset >= duration:
            _log.warning("loop span starts past the end; ignored")
            return
        self._loop_span = (offset, min(length, duration - offset))

    # -- stream parameters ----------------------------------------------------

    @property
    def length(self) -> float:
        """Total duration in seconds (0 when nothing is open)."""
        return self._info.duration if self._info else 0.0

    @property
    def channel_count(self) -> int:
        return self._info.channels if self._info else 0

    @property
    def sample_rate(self) -> int:
        return self._info.sample_rate if self._info else 0

    @property
    def loop_points(self) -> Tuple[float, float]:
        """``(start, length)`` of the looped span, in seconds."""
        return self._loop_span

    # -- playback ------------------------------------------------------------

    def _sync(self) -> None:
        if self._status is not BGMStatus.PLAYING:
            return
        now = self._clock()
        position = self._offset + (now - self._started)
        duration = self.length
        if self.loop:
            start, span = self._loop_span
            end = start + span if self._offset < start + span else duration
            if position >= end:
                if span <= 0.0:
                    self._status = BGMStatus.STOPPED
                    self._offset = 0.0
                    return
                position = start + (position - end) % span
        elif position >= duration:
            self._status = BGMStatus.STOPPED
            self._offset = 0.0
            return
        self._offset = position
        self._started = now

    def play(self) -> None:
        """Resume a paused track, otherwise start from the beginning."""
        if self._info is None:
            return
        self._sync()
        if self._status is not BGMStatus.PAUSED:
            self._offset = 0.0
        self._started = self._clock()
        self._status = BGMStatus.PLAYING

    def pause(self) -> None:
        """Pause; a later :meth:`play` continues from here."""
        self._sync()
        if self._status is BGMStatus.PLAYING:
            self._status = BGMStatus.PAUSED

    def stop(self) -> None:
        """Stop and rewind to the beginning."""
        self._status = BGMStatus.STOPPED
        self._offset = 0.0

    @property
    def status(self) -> BGMStatus:
        self._sync()
        return self._status

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = float(value)

    @property
    def time(self) -> float:
        """Current playing position in seconds."""
        self._sync()
        return self._offset

    @time.setter
    def time(self, seconds: float) -> None:
        self._sync()
        self._offset = min(max(float(seconds), 0.0), self.length)
        self._started = self._clock()