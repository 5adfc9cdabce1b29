"""Command-line player and a callback-based entry point for playing MIDI files."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Sequence

from mplayer.alsa import PortOutput
from mplayer.args import DEFAULT_PROG, HelpRequested, UsageError, parse_args
from mplayer.loader import MidiFileError, load_midi_file
from mplayer.player import play_midi

MAX_VELOCITY = 127


def play_file(
    path: str,
    callback: Callable[[int], object],
    min_velocity: int = 0,
) -> int:
    """Play the MIDI file at ``path``, handing each packed message to ``callback``.

    ``min_velocity`` must not be negative and is clamped to 127.  Raises
    ``MidiFileError`` when the file cannot be loaded.  Returns the tick at
    which playback ended.
    """
    if not callable(callback):
        raise TypeError("Invalid callback function")
    if min_velocity < 0:
        raise ValueError("Invalid min_velocity value")
    velocity = min(min_velocity, MAX_VELOCITY)
    midi = load_midi_file(path)
    return play_midi(midi.tracks, midi.time_div, callback, velocity)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the player with ``argv`` (arguments without the program name)."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        opts = parse_args([DEFAULT_PROG, *args])
    except HelpRequested as help_request:
        sys.stdout.write(help_request.usage)
        return 0
    except UsageError as exc:
        print(exc, file=sys.stderr)
        if exc.usage:
            sys.stdout.write(exc.usage)
        return 1

    started = time.perf_counter()
    try:
        midi = load_midi_file(opts.filename)
    except MidiFileError as exc:
        print(exc, file=sys.stderr)
        print(f"Failed to load MIDI file: {opts.filename}", file=sys.stderr)
        return 1
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    print(f"mplayer: {midi.declared_tracks} tracks")
    print(f"mplayer: Parsed in {elapsed_ms}ms.")

    try:
        output = PortOutput(opts.alsa_port)  # None selects the default output
    except OSError as exc:
        print(exc, file=sys.stderr)
        if opts.alsa_port is None:
            print("Failed to initialize MIDI library", file=sys.stderr)
        return 1

    with output:
        if opts.alsa_port is not None:
            print(f"mplayer: Playing MIDI file: {opts.filename}", flush=True)
        play_midi(midi.tracks, midi.time_div, output.send, opts.min_velocity)
    return 0


if __name__ == "__main__":
    sys.exit(main())