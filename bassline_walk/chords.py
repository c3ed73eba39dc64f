"""Chord symbol parsing and chord-tone lookup.

A chord symbol is a root pitch class followed by a *flavor* suffix, e.g.
``F7b5`` is the root ``F`` with the flavor ``7b5``.  :data:`CHORDS` maps each
known flavor to the semitone offsets of its tones above the root.  Offsets of
twelve or more reach into the next octave, which is how ninths, elevenths and
thirteenths are voiced.

Example
-------
>>> parse_chord("F7b5")
('F', '7b5')
>>> chord_pitches("C7", 2)
[36, 40, 43, 46]
"""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

from .errors import InvalidChordError, UnknownChordError
from .note_utils import note_to_midi

__all__ = ["CHORDS", "parse_chord", "chord_offsets", "chord_pitches"]

_CHORD_RE = re.compile(r"([A-G][#b]?)(.*)", re.DOTALL)

# Triads
_TRIADS: Dict[str, Tuple[int, ...]] = {
    "": (0, 4, 7),
    "M": (0, 4, 7),
    "maj": (0, 4, 7),
    "m": (0, 3, 7),
    "min": (0, 3, 7),
    "-": (0, 3, 7),
    "5": (0, 7),
    "b5": (0, 4, 6),
    "-5": (0, 4, 6),
    "(b5)": (0, 4, 6),
    "#5": (0, 4, 8),
    "+5": (0, 4, 8),
    "m-5": (0, 3, 6),
    "mb5": (0, 3, 6),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
    "+": (0, 4, 8),
    "sus2": (0, 2, 7),
    "sus4": (0, 5, 7),
    "sus": (0, 5, 7),
}

# Sixths and sevenths
_SEVENTHS: Dict[str, Tuple[int, ...]] = {
    "6": (0, 4, 7, 9),
    "m6": (0, 3, 7, 9),
    "7": (0, 4, 7, 10),
    "M7": (0, 4, 7, 11),
    "maj7": (0, 4, 7, 11),
    "m7": (0, 3, 7, 10),
    "min7": (0, 3, 7, 10),
    "mM7": (0, 3, 7, 11),
    "m(M7)": (0, 3, 7, 11),
    "7b5": (0, 4, 6, 10),
    "7-5": (0, 4, 6, 10),
    "7(b5)": (0, 4, 6, 10),
    "7#5": (0, 4, 8, 10),
    "7+5": (0, 4, 8, 10),
    "7(#5)": (0, 4, 8, 10),
    "aug7": (0, 4, 8, 10),
    "M7#5": (0, 4, 8, 11),
    "m7b5": (0, 3, 6, 10),
    "m7-5": (0, 3, 6, 10),
    "m7(b5)": (0, 3, 6, 10),
    "dim7": (0, 3, 6, 9),
    "7sus4": (0, 5, 7, 10),
}

# Extensions and alterations above the octave
_EXTENDED: Dict[str, Tuple[int, ...]] = {
    "add9": (0, 4, 7, 14),
    "madd9": (0, 3, 7, 14),
    "69": (0, 4, 7, 9, 14),
    "6(9)": (0, 4, 7, 9, 14),
    "m69": (0, 3, 7, 9, 14),
    "9": (0, 4, 7, 10, 14),
    "7(9)": (0, 4, 7, 10, 14),
    "M9": (0, 4, 7, 11, 14),
    "maj9": (0, 4, 7, 11, 14),
    "M7(9)": (0, 4, 7, 11, 14),
    "m9": (0, 3, 7, 10, 14),
    "m7(9)": (0, 3, 7, 10, 14),
    "7b9": (0, 4, 7, 10, 13),
    "7(b9)": (0, 4, 7, 10, 13),
    "7#9": (0, 4, 7, 10, 15),
    "7(#9)": (0, 4, 7, 10, 15),
    "7b5b9": (0, 4, 6, 10, 13),
    "7#5#9": (0, 4, 8, 10, 15),
    "11": (0, 4, 7, 10, 14, 17),
    "m11": (0, 3, 7, 10, 14, 17),
    "7#11": (0, 4, 7, 10, 18),
    "7(#11)": (0, 4, 7, 10, 18),
    "M7#11": (0, 4, 7, 11, 18),
    "13": (0, 4, 7, 10, 14, 21),
    "7(13)": (0, 4, 7, 10, 21),
    "7b13": (0, 4, 7, 10, 20),
    "7(b13)": (0, 4, 7, 10, 20),
    "M13": (0, 4, 7, 11, 14, 21),
    "m13": (0, 3, 7, 10, 14, 21),
}

CHORDS: Dict[str, Tuple[int, ...]] = {**_TRIADS, **_SEVENTHS, **_EXTENDED}


def parse_chord(chord: str) -> Tuple[str, str]:
    """Split ``chord`` into ``(root, flavor)``.

    Raises
    ------
    InvalidChordError
        If ``chord`` is not a string starting with ``[A-G][#b]?``.
    """

    if not isinstance(chord, str):
        raise InvalidChordError(chord)
    match = _CHORD_RE.fullmatch(chord)
    if not match:
        raise InvalidChordError(chord)
    return match.group(1), match.group(2)


def chord_offsets(chord: str) -> Tuple[int, ...]:
    """Return the semitone offsets of ``chord``'s tones above its root.

    Raises
    ------
    InvalidChordError
        If the root cannot be parsed.
    UnknownChordError
        If the flavor is missing from :data:`CHORDS`.  An empty tone set is
        never returned so typos in chord charts surface immediately.
    """

    _root, flavor = parse_chord(chord)
    try:
        return CHORDS[flavor]
    except KeyError:
        raise UnknownChordError(chord, flavor) from None


def chord_pitches(chord: str, octave: int) -> List[int]:
    """Return the MIDI numbers of ``chord`` voiced upward from ``octave``."""

    root, _flavor = parse_chord(chord)
    base = note_to_midi(f"{root}{octave}")
    return [base + offset for offset in chord_offsets(chord)]
