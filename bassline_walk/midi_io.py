"""Utilities for writing basslines to MIDI files.

``create_midi_file`` renders a flat list of MIDI pitch numbers as a single
bass track, one note per beat by default, so phrases for a whole progression
can be concatenated and imported into a DAW for editing.

Example
-------
>>> from bassline_walk import Bassline, walk_progression
>>> from bassline_walk.midi_io import create_midi_file
>>> phrases = walk_progression(Bassline(), ["C7", "F7", "G7"], 4)
>>> notes = [n for phrase in phrases for n in phrase]
>>> create_midi_file(notes, 100, "walk.mid")  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Sequence, Tuple

if TYPE_CHECKING:
    # ``MidiFile`` is only needed for type checking to avoid requiring the
    # optional dependency at import time.
    from mido import MidiFile

__all__ = ["create_midi_file"]

# General MIDI "Electric Bass (finger)", zero-based.
BASS_PROGRAM = 33


def create_midi_file(
    notes: Sequence[int],
    bpm: int,
    output_file: str,
    *,
    duration: float = 1.0,
    program: int = BASS_PROGRAM,
    velocity: int = 90,
    time_signature: Tuple[int, int] = (4, 4),
) -> "MidiFile":
    """Write ``notes`` to ``output_file`` as a one-track MIDI file.

    Parameters
    ----------
    notes:
        MIDI pitch numbers in playing order.
    bpm:
        Tempo in beats per minute.  Must be positive.
    output_file:
        Destination path.  Missing parent directories are created.
    duration:
        Length of each note in beats.
    program:
        General MIDI program number for the track.
    velocity:
        Note-on velocity for every note.
    time_signature:
        Meter as ``(numerator, denominator)``.

    Returns
    -------
    MidiFile
        In-memory representation of the written file.

    Raises
    ------
    ImportError
        If ``mido`` is not installed.
    ValueError
        If any argument is out of range.
    """
    try:
        import mido
        from mido import Message, MidiFile, MidiTrack
    except ModuleNotFoundError as exc:
        raise ImportError(
            "mido is required to create MIDI files; install it with 'pip install mido'"
        ) from exc

    if bpm <= 0:
        raise ValueError("bpm must be a positive integer")
    if duration <= 0:
        raise ValueError("duration must be positive")
    if not 0 <= program <= 127:
        raise ValueError("program must be between 0 and 127")
    if not 0 < velocity <= 127:
        raise ValueError("velocity must be between 1 and 127")
    bad = [n for n in notes if not 0 <= n <= 127]
    if bad:
        raise ValueError(f"MIDI notes out of range 0-127: {bad}")
    valid_denoms = {1, 2, 4, 8, 16}
    if time_signature[0] <= 0 or time_signature[1] not in valid_denoms:
        raise ValueError(
            "time_signature denominator must be one of 1, 2, 4, 8 or 16 and numerator must be > 0"
        )

    ticks_per_beat = 480
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm)))
    track.append(
        mido.MetaMessage(
            "time_signature", numerator=time_signature[0], denominator=time_signature[1]
        )
    )
    track.append(Message("program_change", program=program, time=0))

    note_ticks = int(duration * ticks_per_beat)
    for note in notes:
        track.append(Message("note_on", note=note, velocity=velocity, time=0))
        track.append(Message("note_off", note=note, velocity=velocity, time=note_ticks))

    Path(output_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
    mid.save(output_file)
    logging.info("MIDI file saved to %s", output_file)
    return mid
