"""Sending packed MIDI messages to a system MIDI output port."""

from __future__ import annotations

from types import TracebackType

import mido


def decode_message(message: int) -> mido.Message | None:
    """Turn a packed channel message into a ``mido.Message``.

    The status byte is the low byte, followed by two data bytes.  Messages
    that are not channel voice messages give ``None``.
    """
    status = message & 0xFF
    data1 = (message >> 8) & 0x7F
    data2 = (message >> 16) & 0x7F
    kind = status & 0xF0
    channel = status & 0x0F

    if kind == 0x80:
        return mido.Message("note_off", channel=channel, note=data1, velocity=data2)
    if kind == 0x90:
        return mido.Message("note_on", channel=channel, note=data1, velocity=data2)
    if kind == 0xA0:
        return mido.Message("polytouch", channel=channel, note=data1, value=data2)
    if kind == 0xB0:
        return mido.Message("control_change", channel=channel, control=data1, value=data2)
    if kind == 0xC0:
        return mido.Message("program_change", channel=channel, program=data1)
    if kind == 0xD0:
        return mido.Message("aftertouch", channel=channel, value=data1)
    if kind == 0xE0:
        return mido.Message("pitchwheel", channel=channel, pitch=((data2 << 7) | data1) - 8192)
    return None


class PortOutput:
    """An open MIDI output port that accepts packed messages."""

    def __init__(self, port_name: str) -> None:
        self.port_name = port_name
        try:
            self._port = mido.open_output(port_name)
        except (OSError, ImportError, ValueError) as exc:
            raise OSError(f"Failed to connect to MIDI port {port_name}") from exc
        self._closed = False

    def send(self, message: int) -> None:
        """Send a packed message; non-channel messages are ignored."""
        decoded = decode_message(message)
        if decoded is not None:
            self._port.send(decoded)

    def close(self) -> None:
        """Close the port; closing twice does nothing."""
        if not self._closed:
            self._port.close()
            self._closed = True

    def __enter__(self) -> PortOutput:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()