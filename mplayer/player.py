"""Real-time playback of parsed MIDI tracks."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from mplayer.timing import NoteRateLogger, delay_100ns, time_100ns
from mplayer.track import META, TempoState, Track

MAX_DRIFT = 100_000  # 100 ns units the player may fall behind before catching up


def _play_event(
    track: Track,
    state: TempoState,
    time_div: int,
    send: Callable[[int], object],
    min_velocity: int,
    logger: NoteRateLogger,
) -> None:
    track.update_command()
    track.update_message()
    message = track.message
    status = message & 0xFF
    if status < 0xF0:
        if 0x90 <= status <= 0x9F:
            logger.increment()
            if (message >> 16) & 0xFF > min_velocity:
                send(message)
        else:
            send(message)
    elif status == META:
        track.process_meta_event(state, time_div)


def play_midi(
    tracks: Iterable[Track],
    time_div: int,
    send: Callable[[int], object],
    min_velocity: int = 1,
    *,
    clock: Callable[[], int] = time_100ns,
    sleep: Callable[[int], object] = delay_100ns,
    logger: NoteRateLogger | None = None,
) -> int:
    """Play ``tracks`` in real time, handing each channel message to ``send``.

    Messages are packed little-endian: status in the low byte, then the data
    bytes.  Note-on events are counted by ``logger`` and only sent when their
    velocity exceeds ``min_velocity``.  ``clock`` and ``sleep`` work in units
    of 100 ns.  Returns the tick at which playback ended.
    """
    tracks = list(tracks)
    state = TempoState()
    rate = logger if logger is not None else NoteRateLogger()

    tick = 0
    delta = 0
    old = 0
    last_time = clock()

    with rate:
        while True:
            pending: list[Track] = []
            for track in tracks:
                while track.active() and track.tick <= tick:
                    _play_event(track, state, time_div, send, min_velocity, rate)
                    if track.active():
                        track.update_tick()
                if track.active():
                    pending.append(track)

            if not pending:
                break

            delta_tick = min(track.tick - tick for track in pending)
            tick += delta_tick

            now = clock()
            elapsed = now - last_time
            last_time = now
            delta += elapsed - old
            old = int(delta_tick * state.multiplier)

            wait = old - delta if delta > 0 else old
            if wait <= 0:
                delta = min(delta, MAX_DRIFT)
            else:
                sleep(wait)

    return tick