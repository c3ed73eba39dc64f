"""Utility functions for translating note names to MIDI numbers.

This module groups helpers dealing with note representation conversions.
The bassline generator works on MIDI numbers internally and only turns them
back into names when comparing against scale degrees or when reporting
progress.

Example
-------
>>> from bassline_walk.note_utils import note_to_midi, respell
>>> note_to_midi("C2")
36
>>> respell("C#")
'Db'
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from . import FLAT_NOTES, NOTE_TO_SEMITONE, NOTES

__all__ = [
    "is_pitch_class",
    "note_to_midi",
    "midi_to_note",
    "pitch_name",
    "respell",
]

PITCH_CLASS_RE = re.compile(r"[A-G][#b]?")

# Semitone correction for spellings that cross the B-C octave boundary.
_OCTAVE_WRAP = {"Cb": -12, "B#": 12}


def is_pitch_class(name: object) -> bool:
    """Return ``True`` when ``name`` is one of the accepted root spellings."""

    return isinstance(name, str) and PITCH_CLASS_RE.fullmatch(name) is not None


@lru_cache(maxsize=None)
def note_to_midi(note: str) -> int:
    """Convert a note string such as ``C#2`` into a MIDI number.

    Parameters
    ----------
    note:
        Pitch class followed by a signed integer octave.  ``C2`` is ``36``
        and ``E2`` is ``40``.

    Returns
    -------
    int
        MIDI note number in the range ``0-127``.

    Raises
    ------
    ValueError
        If ``note`` is malformed or the computed value falls outside the
        ``0-127`` range.
    """

    match = re.fullmatch(r"([A-G][#b]?)(-?\d+)", note)
    if not match:
        logging.error("Invalid note format: %s", note)
        raise ValueError(f"Invalid note format: {note}")

    name, octave_str = match.groups()
    # MIDI's octave numbers are offset by one relative to scientific pitch
    # notation, hence the ``+ 1`` adjustment.  ``Cb`` and ``B#`` belong to
    # the octave below and above their written number respectively.
    midi_val = NOTE_TO_SEMITONE[name] + _OCTAVE_WRAP.get(name, 0) + (int(octave_str) + 1) * 12

    if not 0 <= midi_val <= 127:
        logging.error("MIDI value out of range: %s -> %d", note, midi_val)
        raise ValueError(
            f"Computed MIDI value {midi_val} out of range 0-127 for note {note}"
        )
    return midi_val


def pitch_name(midi_note: int, *, flats: bool = False) -> str:
    """Return the pitch-class name of ``midi_note`` without an octave.

    Sharps are used unless ``flats`` is ``True``.
    """

    names = FLAT_NOTES if flats else NOTES
    return names[midi_note % 12]


def midi_to_note(midi_note: int, *, flats: bool = False) -> str:
    """Convert a MIDI number into a note name with octave.

    Raises
    ------
    ValueError
        If ``midi_note`` is outside the inclusive ``0-127`` range.

    Examples
    --------
    >>> midi_to_note(36)
    'C2'
    >>> midi_to_note(46, flats=True)
    'Bb2'
    """

    if not 0 <= midi_note <= 127:
        raise ValueError(f"MIDI note {midi_note} out of range 0-127")
    octave = midi_note // 12 - 1
    return f"{pitch_name(midi_note, flats=flats)}{octave}"


def respell(name: str) -> str:
    """Return the opposite-accidental spelling of ``name``.

    Sharps become flats and flats become sharps (``C#`` -> ``Db``,
    ``Bb`` -> ``A#``).  Natural names are returned unchanged.  Spellings such
    as ``E#`` or ``Cb`` collapse onto their natural equivalent.
    """

    if not is_pitch_class(name):
        raise ValueError(f"Invalid pitch class: {name}")
    semitone = NOTE_TO_SEMITONE[name]
    if "#" in name:
        return FLAT_NOTES[semitone]
    if "b" in name:
        return NOTES[semitone]
    return name
