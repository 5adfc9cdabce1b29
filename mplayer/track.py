"""Cursor over the event bytes of one track of a standard MIDI file."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TEMPO = 500_000  # microseconds per quarter note (120 BPM)

META = 0xFF
SYSEX = 0xF0
META_TEMPO = 0x51
META_END_OF_TRACK = 0x2F


@dataclass
class TempoState:
    """Tempo shared by all tracks during playback.

    ``tempo`` is in microseconds per quarter note; ``multiplier`` is the
    duration of one tick in 100 ns units.
    """

    multiplier: float = 0.0
    tempo: int = DEFAULT_TEMPO


class Track:
    """Reads events from a track chunk one at a time.

    ``message`` holds the current event packed little-endian: status byte in
    the low byte, then up to two data bytes.  Meta and SysEx payloads are kept
    in ``long_msg``.  A track whose data is ``None`` has finished.
    """

    def __init__(self, data: bytes | None = None) -> None:
        # An empty chunk has nothing to play.
        self.data: bytes | None = bytes(data) if data else None
        self.tick = 0
        self.offset = 0
        self.message = 0
        self.long_msg = b""

    def __repr__(self) -> str:
        return (
            f"Track(length={self.length}, offset={self.offset}, "
            f"tick={self.tick}, message={self.message:#x})"
        )

    @property
    def length(self) -> int:
        """Number of event bytes left in the track buffer."""
        return len(self.data) if self.data is not None else 0

    def active(self) -> bool:
        """Whether the track still has events to play."""
        return self.data is not None

    def _byte(self, index: int) -> int:
        data = self.data
        if data is None or index >= len(data):
            return 0
        return data[index]

    def decode_variable_length(self) -> int:
        """Read a variable-length quantity at the cursor and return it."""
        data = self.data
        if data is None or self.offset >= len(data):
            return 0
        result = 0
        while True:
            byte = data[self.offset]
            self.offset += 1
            result = (result << 7) | (byte & 0x7F)
            if not byte & 0x80 or self.offset >= len(data):
                return result

    def update_tick(self) -> None:
        """Advance the track's tick by the next delta time.

        A track with no bytes left after the delta is marked finished.
        """
        self.tick += self.decode_variable_length()
        if self.offset >= self.length:
            self.data = None

    def update_command(self) -> None:
        """Read a status byte if one is present; otherwise keep running status."""
        if not self.length:
            return
        status = self._byte(self.offset)
        if status >= 0x80:
            self.offset += 1
            self.message = status
        else:
            self.message &= 0xFF

    def update_message(self) -> None:
        """Read the data bytes of the current event into ``message``."""
        if not self.length:
            return
        status = self.message & 0xFF
        start = self.offset
        if status < 0xC0 or 0xE0 <= status < 0xF0:
            temp = self._byte(start) << 8 | self._byte(start + 1) << 16
            self.offset += 2
        elif status < 0xE0:
            temp = self._byte(start) << 8
            self.offset += 1
        elif status in (META, SYSEX):
            temp = self._byte(start) << 8 if status == META else 0
            self.offset += 1
            size = self.decode_variable_length()
            assert self.data is not None
            self.long_msg = self.data[self.offset:self.offset + size]
            self.offset += size
        else:
            temp = 0
        self.message |= temp

    def process_meta_event(self, state: TempoState, time_div: int) -> None:
        """Apply a tempo change or end-of-track meta event."""
        meta_type = (self.message >> 8) & 0xFF
        if meta_type == META_TEMPO:
            if time_div <= 0:
                raise ValueError("time division must be positive")
            payload = self.long_msg[:3].ljust(3, b"\x00")
            state.tempo = int.from_bytes(payload, "big")
            state.multiplier = max(state.tempo * 10 / time_div, 1.0)
        elif meta_type == META_END_OF_TRACK:
            self.data = None