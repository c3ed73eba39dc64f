"""Scale lookup, modal selection and scale-selector presets.

Scales are stored as semitone offsets from their root.  Note names are
spelled with a single accidental style per scale: flats when the root itself
is flat or when the scale's parent major key is a flat key (``D minor``
borrows the spelling of ``F major``), sharps otherwise.  The flavor pruner
compares pitches against these names in both spellings so the choice only
matters for modal lookups, which match names exactly.

Example
-------
>>> scale_notes("D", "dorian")
['D', 'E', 'F', 'G', 'A', 'B', 'C']
>>> scale_midi("C", 2, "major")
[36, 38, 40, 41, 43, 45, 47]
>>> modal_scale("C", "D")
'dorian'
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Tuple

from . import FLAT_NOTES, NOTE_TO_SEMITONE, NOTES
from .errors import ValidationError
from .note_utils import is_pitch_class, note_to_midi

__all__ = [
    "MODES",
    "SCALES",
    "SCALE_SELECTORS",
    "ScaleSelector",
    "scale_notes",
    "scale_midi",
    "modal_scale",
    "default_scale",
    "chromatic_scale",
    "pentatonic_scale",
    "chord_only_scale",
]

ScaleSelector = Callable[[str], str]

# The seven rotations of the major scale in degree order.  A chord root found
# at position ``i`` of the key center's ionian scale is accompanied by
# ``MODES[i]``.
MODES: Tuple[str, ...] = (
    "ionian",
    "dorian",
    "phrygian",
    "lydian",
    "mixolydian",
    "aeolian",
    "locrian",
)

SCALES: Dict[str, Tuple[int, ...]] = {
    "major": (0, 2, 4, 5, 7, 9, 11),
    "ionian": (0, 2, 4, 5, 7, 9, 11),
    "dorian": (0, 2, 3, 5, 7, 9, 10),
    "phrygian": (0, 1, 3, 5, 7, 8, 10),
    "lydian": (0, 2, 4, 6, 7, 9, 11),
    "mixolydian": (0, 2, 4, 5, 7, 9, 10),
    "minor": (0, 2, 3, 5, 7, 8, 10),
    "aeolian": (0, 2, 3, 5, 7, 8, 10),
    "locrian": (0, 1, 3, 5, 6, 8, 10),
    "hminor": (0, 2, 3, 5, 7, 8, 11),
    "mminor": (0, 2, 3, 5, 7, 9, 11),
    "pentatonic": (0, 2, 4, 7, 9),
    "pminor": (0, 3, 5, 7, 10),
    "blues": (0, 3, 5, 6, 7, 10),
    "chromatic": tuple(range(12)),
}

# Semitones from a scale's root down to the root of the major key whose
# spelling it borrows.  Scales not listed borrow from their own root.
_PARENT_OFFSETS: Dict[str, int] = {
    "dorian": 2,
    "phrygian": 4,
    "lydian": 5,
    "mixolydian": 7,
    "minor": 9,
    "aeolian": 9,
    "locrian": 11,
    "hminor": 9,
    "mminor": 9,
    "pminor": 9,
    "blues": 9,
}

_FLAT_KEYS = frozenset({5, 10, 3, 8, 1, 6})  # F Bb Eb Ab Db Gb

_MINOR_CHORD_RE = re.compile(r"[A-G][#b]?m(?!aj)")


def _prefers_flats(root: str, name: str) -> bool:
    if "b" in root:
        return True
    if "#" in root:
        return False
    parent = (NOTE_TO_SEMITONE[root] - _PARENT_OFFSETS.get(name, 0)) % 12
    return parent in _FLAT_KEYS


def _intervals(name: str) -> Tuple[int, ...]:
    try:
        return SCALES[name]
    except KeyError:
        raise ValidationError("scale", f"unknown scale name: {name!r}") from None


def scale_notes(root: str, name: str) -> List[str]:
    """Return the note names of scale ``name`` starting on ``root``.

    An empty ``name`` means "no scale" and yields an empty list.

    Raises
    ------
    ValidationError
        If ``name`` is not in :data:`SCALES`.
    ValueError
        If ``root`` is not a valid pitch class.
    """

    if not name:
        return []
    if not is_pitch_class(root):
        raise ValueError(f"Invalid pitch class: {root}")
    names = FLAT_NOTES if _prefers_flats(root, name) else NOTES
    start = NOTE_TO_SEMITONE[root]
    return [names[(start + step) % 12] for step in _intervals(name)]


def scale_midi(root: str, octave: int, name: str) -> List[int]:
    """Return the MIDI numbers of scale ``name`` on ``root`` at ``octave``.

    The pitches ascend from the root and span a single octave.
    """

    if not name:
        return []
    base = note_to_midi(f"{root}{octave}")
    return [base + step for step in _intervals(name)]


def modal_scale(key_center: str, root: str) -> str:
    """Return the mode accompanying ``root`` within ``key_center``.

    The root is looked up by exact spelling among the key center's ionian
    notes, so an enharmonic respelling of a diatonic note (``A#`` in
    ``Bb``) is not found and falls back to ``"ionian"``.
    """

    key_notes = scale_notes(key_center, MODES[0])
    if root in key_notes:
        return MODES[key_notes.index(root)]
    return MODES[0]


def default_scale(chord: str) -> str:
    """Walk the natural minor scale over minor chords, major otherwise."""

    return "minor" if _MINOR_CHORD_RE.match(chord) else "major"


def chromatic_scale(chord: str) -> str:
    """Walk the chromatic scale whatever the chord."""

    return "chromatic"


def pentatonic_scale(chord: str) -> str:
    """Walk the minor or major pentatonic scale."""

    return "pminor" if _MINOR_CHORD_RE.match(chord) else "pentatonic"


def chord_only_scale(chord: str) -> str:
    """Use no scale so only the chord tones are walked."""

    return ""


SCALE_SELECTORS: Dict[str, ScaleSelector] = {
    "default": default_scale,
    "chromatic": chromatic_scale,
    "pentatonic": pentatonic_scale,
    "chord": chord_only_scale,
}
