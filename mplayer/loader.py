"""Reading standard MIDI files into playable tracks."""

from __future__ import annotations

import io
import os
import struct
from dataclasses import dataclass, field

from mplayer.track import Track

_HEADER_ID = b"MThd"
_TRACK_ID = b"MTrk"
_HEADER_LENGTH = 6


class MidiFileError(Exception):
    """The file cannot be read or is not a supported MIDI file."""


@dataclass
class MidiFile:
    """A parsed MIDI file: header fields and the tracks found in it."""

    format: int
    time_div: int
    declared_tracks: int
    tracks: list[Track] = field(default_factory=list)


def parse_midi(data: bytes) -> MidiFile:
    """Parse the bytes of a standard MIDI file.

    Chunks that are not track chunks are skipped by their four-byte id.
    Each returned track is positioned after its first delta time.
    """
    stream = io.BytesIO(data)
    if stream.read(4) != _HEADER_ID:
        raise MidiFileError("Not a MIDI file")
    raw_length = stream.read(4)
    if len(raw_length) < 4 or int.from_bytes(raw_length, "big") != _HEADER_LENGTH:
        raise MidiFileError("Invalid header length")
    header = stream.read(_HEADER_LENGTH)
    if len(header) < _HEADER_LENGTH:
        raise MidiFileError("Truncated header")
    file_format, declared, time_div = struct.unpack(">HHH", header)
    if time_div >= 0x8000:
        raise MidiFileError("SMPTE timing not supported")

    tracks: list[Track] = []
    for _ in range(declared):
        if stream.read(4) != _TRACK_ID:
            continue
        raw_size = stream.read(4)
        if len(raw_size) < 4:
            break
        track = Track(stream.read(int.from_bytes(raw_size, "big")))
        track.update_tick()
        tracks.append(track)

    return MidiFile(
        format=file_format,
        time_div=time_div,
        declared_tracks=declared,
        tracks=tracks,
    )


def load_midi_file(path: str | os.PathLike[str]) -> MidiFile:
    """Read and parse the MIDI file at ``path``."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise MidiFileError(f"Could not open file: {os.fspath(path)}") from exc
    return parse_midi(data)