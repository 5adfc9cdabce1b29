"""Real-time Standard MIDI File player: loading, playback and MIDI port output."""

__version__ = "0.1.0"