# mplayer

A small real-time player for Standard MIDI Files with PPQN timing. It reads
every track chunk of a file, walks the tracks together in tick order and
hands each channel message to an output as it comes due, following tempo
changes as it goes. While it plays it prints how many note-on events it
handled in each second.

## Installation

```
pip install .
```

Output goes through `mido`, which needs a working backend (for example
`python-rtmidi`) to open output ports.

## Command line

```
mplayer [options] -f <midi_file>
```

The same command can be run as `python -m mplayer.cli`.

Options:

- `--alsa`, `-p` — name of the output port to play on, as `mido` knows it.
  Without it, `mido`'s default output port is opened.
- `--minvel`, `--mv`, `-m` — minimum velocity, 0–127, default 1. A note-on is
  sent only when its velocity is above this value; every note-on is still
  counted in the notes-per-second report.
- `--file`, `-f` — the MIDI file to play. It may also be given as a single
  plain argument.
- `--help`, `-h` — print usage and exit.

A value can follow its option (`-m 10`) or be joined to it with `=`
(`--minvel=10`).

```
mplayer -f song.mid --alsa="Some Synth" --minvel=64
mplayer -p "Some Synth" -m 10 song.mid
```

Before playing, the command prints the number of tracks declared in the file
header and how long parsing took. It exits with status 1 on a bad command
line, a file that cannot be loaded, or a port that cannot be opened.

## Library use

Play a file and receive every outgoing message as a packed integer (status
byte in the low byte, then the first and second data bytes):

```python
from mplayer.cli import play_file

received = []
play_file("song.mid", received.append, 0)
```

`play_file` clamps `min_velocity` to 127, rejects a negative one with
`ValueError`, and returns the tick at which playback ended.

The steps can also be used separately:

```python
from mplayer.loader import load_midi_file
from mplayer.player import play_midi

midi = load_midi_file("song.mid")
play_midi(midi.tracks, midi.time_div, print, min_velocity=1)
```

- `mplayer.loader.load_midi_file(path)` and `parse_midi(data)` return a
  `MidiFile` with `format`, `time_div`, `declared_tracks` and `tracks`, and
  raise `MidiFileError` for a file that cannot be opened, is not a MIDI file,
  has a bad header or uses SMPTE timing.
- `mplayer.player.play_midi(...)` takes optional `clock` and `sleep`
  callables working in 100 ns units, and an optional
  `mplayer.timing.NoteRateLogger` for the notes-per-second report.
- `mplayer.track.Track` is the cursor over one track's event bytes;
  `TempoState` holds the current tempo.
- `mplayer.alsa.decode_message` turns a packed channel message into a
  `mido.Message` (or `None` for anything else), and `mplayer.alsa.PortOutput`
  sends packed messages to a named output port and works as a context
  manager.
- `mplayer.args.parse_args` parses a command line into `Options`, raising
  `HelpRequested` or `UsageError`; `format_usage` gives the help text.

## What it does not do

SMPTE-timed files are rejected. SysEx events are read past and never sent,
and meta events other than tempo and end of track are ignored. There is no
pausing, seeking or looping, and no way to list the available output ports.