import struct

import pytest

from mplayer.loader import MidiFile, MidiFileError, load_midi_file, parse_midi


def _header(fmt, count, time_div):
    return b"MThd" + struct.pack(">IHHH", 6, fmt, count, time_div)


def _chunk(body):
    return b"MTrk" + struct.pack(">I", len(body)) + body


END = b"\xff\x2f\x00"


def test_parse_header_and_tracks():
    first = b"\x00\x90\x3c\x64" + b"\x00" + END
    second = b"\x60\x80\x3c\x00" + b"\x00" + END
    midi = parse_midi(_header(1, 2, 480) + _chunk(first) + _chunk(second))
    assert isinstance(midi, MidiFile)
    assert midi.format == 1
    assert midi.time_div == 480
    assert midi.declared_tracks == 2
    assert len(midi.tracks) == 2
    assert [t.tick for t in midi.tracks] == [0, 0x60]
    assert [t.offset for t in midi.tracks] == [1, 1]
    assert midi.tracks[0].data == first


def test_non_track_chunk_id_is_skipped():
    body = b"\x00" + END
    midi = parse_midi(_header(1, 2, 96) + b"XXXX" + _chunk(body))
    assert midi.declared_tracks == 2
    assert len(midi.tracks) == 1
    assert midi.tracks[0].data == body


def test_missing_tracks_are_not_invented():
    midi = parse_midi(_header(1, 3, 96) + _chunk(b"\x00" + END))
    assert len(midi.tracks) == 1


def test_truncated_track_keeps_available_bytes():
    body = b"\x00" + END
    data = _header(0, 1, 96) + b"MTrk" + struct.pack(">I", 100) + body
    midi = parse_midi(data)
    assert midi.tracks[0].data == body


@pytest.mark.parametrize(
    "data, message",
    [
        (b"RIFF" + b"\x00" * 10, "Not a MIDI file"),
        (b"", "Not a MIDI file"),
        (b"MThd" + struct.pack(">IHHHH", 8, 0, 1, 96, 0), "Invalid header length"),
        (b"MThd" + struct.pack(">IH", 6, 0), "Truncated header"),
        (_header(0, 1, 0xE728), "SMPTE timing not supported"),
    ],
)
def test_invalid_files_rejected(data, message):
    with pytest.raises(MidiFileError, match=message):
        parse_midi(data)


def test_load_from_disk(tmp_path):
    path = tmp_path / "song.mid"
    path.write_bytes(_header(0, 1, 192) + _chunk(b"\x00" + END))
    midi = load_midi_file(path)
    assert midi.time_div == 192
    assert len(midi.tracks) == 1
    assert midi.tracks[0].active()


def test_load_missing_file(tmp_path):
    with pytest.raises(MidiFileError, match="Could not open file"):
        load_midi_file(tmp_path / "absent.mid")