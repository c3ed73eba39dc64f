"""Build the pool of pitches a bassline may walk over.

The pool for one chord is assembled in three stages:

``candidate_pool``
    Scale pitches for the chord root plus any chord tones the scale lacks,
    sorted ascending.
``prune_flavor``
    Drop scale degrees that clash with the chord's extensions, e.g. the
    natural fifth under a ``7b5`` chord.
``normalize_range``
    Optionally lift notes below ``E2`` into guitar range and remove
    duplicates.

:func:`build_pitch_pool` runs all three.  Every function returns a new list
and keeps no state between calls, so identical inputs always produce
identical pools.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from . import GUITAR_LOWEST
from .chords import chord_pitches
from .config import WalkConfig
from .errors import EmptyPoolError
from .note_utils import midi_to_note, pitch_name, respell
from .scales import scale_midi, scale_notes

__all__ = [
    "replaced_degrees",
    "scale_pitches",
    "candidate_pool",
    "prune_flavor",
    "normalize_range",
    "build_pitch_pool",
    "next_pitch_pool",
]

# Flavor pattern -> zero-based scale degrees it replaces.  The seventh rule
# skips ``M7`` and ``m7`` and also the longhand ``maj7`` and ``min7``, so
# ``Cmaj7`` keeps its B.  ``dim7`` falls under the ``m7`` exemption.
_FLAVOR_RULES = (
    (re.compile(r"[#b]5"), (4,)),
    (re.compile(r"^(?!.*(?:[Mm]|maj|min)7).*7"), (6,)),
    (re.compile(r"[#b]9"), (1,)),
    (re.compile(r"dim"), (2, 6)),
    (re.compile(r"aug"), (6,)),
)

_PRUNED_SCALES = ("major", "minor")


def _report(verbose: bool):
    return logging.info if verbose else logging.debug


def _names(pitches: Iterable[int]) -> List[str]:
    return [midi_to_note(p) for p in pitches]


def replaced_degrees(flavor: str) -> List[int]:
    """Return the sorted scale degrees replaced by ``flavor``."""

    degrees = set()
    for pattern, indices in _FLAVOR_RULES:
        if pattern.search(flavor):
            degrees.update(indices)
    return sorted(degrees)


def scale_pitches(
    root: Optional[str],
    scale: str,
    octave: int,
    degrees: Optional[Iterable[int]] = None,
) -> List[int]:
    """Return the MIDI pitches of ``scale`` on ``root``.

    ``degrees`` restricts the result to those zero-based scale positions.
    A missing root or an empty scale name yields an empty list.
    """

    if not root or not scale:
        return []
    pitches = scale_midi(root, octave, scale)
    if degrees is None:
        return pitches
    keep = set(degrees)
    return [p for i, p in enumerate(pitches) if i in keep]


def candidate_pool(
    chord: str,
    root: str,
    scale: str,
    config: WalkConfig,
) -> List[int]:
    """Merge scale pitches and chord tones into a sorted candidate pool."""

    report = _report(config.verbose)
    pitches = scale_pitches(root, scale, config.octave, config.degrees)
    notes = chord_pitches(chord, config.octave)

    if config.chord_notes:
        report("CHORD NOTES")
        for n in notes:
            if n not in pitches:
                pitches.append(n)
                report("\tADD: %s", midi_to_note(n))
    return sorted(pitches)


def prune_flavor(
    pitches: Sequence[int],
    root: str,
    scale: str,
    flavor: str,
    *,
    prune_all_scales: bool = True,
    verbose: bool = False,
) -> List[int]:
    """Remove pitches on scale degrees replaced by the chord ``flavor``.

    Each pitch is compared by name, in both its sharp spelling and the
    opposite-accidental respelling, against the scale degree tones of
    ``root``/``scale``.

    Parameters
    ----------
    pitches:
        Candidate pool in ascending order.
    root, scale:
        Chord root and the scale name chosen for it.  An empty scale has no
        degrees and nothing is pruned.
    flavor:
        Chord suffix such as ``"7b5"`` or ``"dim"``.
    prune_all_scales:
        When ``False`` pruning only applies to the ``major`` and ``minor``
        scales.

    Returns
    -------
    List[int]
        The remaining pitches in their original order.
    """

    report = _report(verbose)
    if not prune_all_scales and scale not in _PRUNED_SCALES:
        return list(pitches)
    tones = scale_notes(root, scale)
    if not tones:
        return list(pitches)
    report("\t%s SCALE: %s", scale, tones)

    replaced = {tones[i] for i in replaced_degrees(flavor) if i < len(tones)}
    fixed = []
    for p in pitches:
        x = pitch_name(p)
        y = respell(x)
        if x in replaced or y in replaced:
            report("\tDROP: %s", x)
            continue
        fixed.append(p)
    return fixed


def normalize_range(pitches: Sequence[int], guitar: bool = False) -> List[int]:
    """Apply guitar transposition and remove duplicates.

    Raises
    ------
    EmptyPoolError
        If no pitches remain.
    """

    if guitar:
        pitches = [p + 12 if p < GUITAR_LOWEST else p for p in pitches]
    fixed = sorted(set(pitches))
    if not fixed:
        raise EmptyPoolError("No pitches available for the walk")
    return fixed


def build_pitch_pool(
    chord: str,
    root: str,
    flavor: str,
    scale: str,
    config: WalkConfig,
) -> List[int]:
    """Return the fixed pitch pool for ``chord`` under ``config``."""

    pool = candidate_pool(chord, root, scale, config)
    pool = prune_flavor(
        pool,
        root,
        scale,
        flavor,
        prune_all_scales=config.prune_all_scales,
        verbose=config.verbose,
    )
    pool = normalize_range(pool, config.guitar)
    _report(config.verbose)("\tNOTES: %s", _names(pool))
    return pool


def next_pitch_pool(root: Optional[str], scale: str, config: WalkConfig) -> List[int]:
    """Return the scale pitches of the following chord.

    Only the next chord's scale is used, without its chord tones or any
    pruning, since it only serves to find notes shared with the current
    chord.
    """

    return scale_pitches(root, scale, config.octave, config.degrees)
