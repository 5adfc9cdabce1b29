"""Command-line options of the player."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

DEFAULT_PROG = "mplayer"


class _Arg(Enum):
    ALSA = auto()
    MINVEL = auto()
    FILE = auto()


_KNOWN_KEYS: tuple[tuple[str, _Arg, str], ...] = (
    ("alsa", _Arg.ALSA, "Set ALSA output client:port"),
    ("p", _Arg.ALSA, "Short alias for --alsa"),
    ("minvel", _Arg.MINVEL, "Set minimum velocity (0-127)"),
    ("mv", _Arg.MINVEL, "Alias for --minvel"),
    ("m", _Arg.MINVEL, "Short alias for --minvel"),
    ("file", _Arg.FILE, "MIDI file to play"),
    ("f", _Arg.FILE, "Short alias for --file"),
)

_KEY_TYPES = {key: kind for key, kind, _ in _KNOWN_KEYS}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Options:
    """Settings chosen on the command line."""

    filename: str
    alsa_port: str | None = None
    min_velocity: int = 1


class UsageError(Exception):
    """The command line is invalid; ``usage`` holds help text when it applies."""

    def __init__(self, message: str, usage: str | None = None) -> None:
        super().__init__(message)
        self.usage = usage


class HelpRequested(Exception):
    """Help was asked for; ``usage`` holds the text to show."""

    def __init__(self, usage: str) -> None:
        super().__init__(usage)
        self.usage = usage


def _flag(key: str) -> str:
    return ("-" if len(key) == 1 else "--") + key


def format_usage(prog_name: str) -> str:
    """Return the help text for the program called ``prog_name``."""
    lines = [f"Usage: {prog_name} [options] -f <midi_file>", "", "Options:"]
    seen: set[_Arg] = set()
    for _, kind, desc in _KNOWN_KEYS:
        if kind in seen:
            continue
        seen.add(kind)
        flags = ", ".join(_flag(key) for key, other, _ in _KNOWN_KEYS if other is kind)
        lines.append(f"  {flags}")
        lines.append(f"      {desc}")
    lines += [
        "",
        "Examples:",
        f"  {prog_name} -f song.mid --alsa=14:0 --minvel=64",
        f"  {prog_name} -p 14:0 -m 10 song.mid",
    ]
    return "\n".join(lines) + "\n"


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_args(argv: Sequence[str]) -> Options:
    """Parse a command line given with the program name first, as in ``sys.argv``.

    Raises ``HelpRequested`` for ``-h``/``--help`` and ``UsageError`` for
    anything invalid.
    """
    prog = argv[0] if argv else DEFAULT_PROG
    filename: str | None = None
    alsa_port: str | None = None
    min_velocity = 1

    args = iter(argv[1:])
    for arg in args:
        if arg in ("--help", "-h"):
            raise HelpRequested(format_usage(prog))

        if not arg.startswith("-"):
            if filename is not None:
                raise UsageError(f"Unexpected argument: {arg}")
            filename = arg
            continue

        key = arg[2:] if arg.startswith("--") else arg[1:]
        key, eq, value = key.partition("=")
        if not eq:
            try:
                value = next(args)
            except StopIteration:
                raise UsageError(f"Missing value for option: {arg}") from None

        kind = _KEY_TYPES.get(key)
        if kind is _Arg.ALSA:
            alsa_port = value
        elif kind is _Arg.MINVEL:
            velocity = _to_int(value)
            if not 0 <= velocity <= 127:
                raise UsageError("minvel must be between 0 and 127")
            min_velocity = velocity
        elif kind is _Arg.FILE:
            filename = value
        else:
            raise UsageError(f"Unknown option: --{key}")

    if filename is None:
        raise UsageError("No MIDI file specified.", usage=format_usage(prog))

    return Options(filename=filename, alsa_port=alsa_port, min_velocity=min_velocity)