"""Walking bassline phrase generation.

:class:`Bassline` turns a chord symbol into a short phrase of MIDI pitches.
The phrase is a constrained random walk over the chord's pitch pool (see
:mod:`bassline_walk.pitch_set`) with two optional adjustments:

* **Tonic bias** replaces the first note with the I, III or V of the pool
  (the first three pool notes for pentatonic scales), whichever lies nearest
  the second note.
* **Next-chord anticipation** replaces the last note with a pitch shared by
  the current pool and the next chord's scale, nearest the penultimate note,
  so the line leads smoothly into the following bar.

If the ``modal`` option is off (the default), notes are chosen as if the key
changed to every chord.  With ``modal`` on, each chord root is accompanied by
its mode within the configured key center.

Example
-------
>>> bass = Bassline(guitar=True, modal=True, key_center="Bb")
>>> notes = bass.generate("F7b5", 8)
>>> len(notes)
8
"""

from __future__ import annotations

import logging
import random
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence

from .chords import parse_chord
from .config import WalkConfig
from .errors import ValidationError
from .note_utils import midi_to_note
from .pitch_set import build_pitch_pool, next_pitch_pool
from .scales import modal_scale
from .voice_gen import VoiceGen, closest

__all__ = ["Bassline", "ParsedChord", "generate", "walk_progression"]

# Pool positions eligible for the first note under tonic bias.
_TONIC_POSITIONS = {
    "major": (0, 2, 4),
    "minor": (0, 2, 4),
    "pentatonic": (0, 1, 2),
    "pminor": (0, 1, 2),
}


class ParsedChord(NamedTuple):
    """A chord symbol split into the parts the generator needs."""

    root: str
    flavor: str
    scale: str
    next_root: Optional[str]
    next_scale: str


class Bassline:
    """Generate walking bassline phrases.

    Parameters
    ----------
    config:
        Options controlling the walk.  When omitted a :class:`WalkConfig` is
        built from ``options``.
    rng:
        Random source for the walk and its tie-breaks.  Pass a seeded
        ``random.Random`` for reproducible phrases.
    **options:
        Keyword arguments forwarded to :class:`WalkConfig` when ``config`` is
        not supplied.
    """

    def __init__(
        self,
        config: Optional[WalkConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        **options: Any,
    ) -> None:
        if config is not None and options:
            raise TypeError("pass either a WalkConfig or keyword options, not both")
        if config is not None and not isinstance(config, WalkConfig):
            raise TypeError("config must be a WalkConfig")
        self.config = config if config is not None else WalkConfig(**options)
        self.rng = rng or random.Random()

    def _report(self, msg: str, *args: Any) -> None:
        level = logging.INFO if self.config.verbose else logging.DEBUG
        logging.log(level, msg, *args)

    def _report_notes(self, title: str, notes: Iterable[int]) -> None:
        self._report("\t%s: %s", title, [midi_to_note(n) for n in notes])

    def parse(self, chord: str, next_chord: Optional[str] = None) -> ParsedChord:
        """Split ``chord`` and choose the scales for it and ``next_chord``.

        Raises
        ------
        InvalidChordError
            If either chord symbol does not start with a pitch class.
        """

        root, flavor = parse_chord(chord)
        next_root = parse_chord(next_chord)[0] if next_chord is not None else None

        if self.config.modal:
            self._report("MODAL")
            scale = modal_scale(self.config.key_center, root)
            next_scale = modal_scale(self.config.key_center, next_root) if next_root else ""
        else:
            scale = self.config.scale(chord)
            next_scale = self.config.scale(next_chord) if next_chord is not None else ""
        return ParsedChord(root, flavor, scale, next_root, next_scale)

    def pitch_pool(self, chord: str, next_chord: Optional[str] = None) -> List[int]:
        """Return the fixed pitch pool the walk over ``chord`` would use."""

        parsed = self.parse(chord, next_chord)
        return build_pitch_pool(chord, parsed.root, parsed.flavor, parsed.scale, self.config)

    def generate(
        self,
        chord: str = "C",
        count: int = 4,
        next_chord: Optional[str] = None,
    ) -> List[int]:
        """Generate ``count`` MIDI pitch numbers for ``chord``.

        Parameters
        ----------
        chord:
            Chord symbol such as ``"C"``, ``"Dm7"`` or ``"F7b5"``.
        count:
            Number of notes.  ``0`` yields an empty phrase.
        next_chord:
            Optional chord that follows.  When given, the last note is moved
            to a pitch shared with the next chord's scale if one exists.

        Returns
        -------
        List[int]
            Exactly ``count`` pitches, each a member of the chord's pool.

        Raises
        ------
        ValidationError
            If ``count`` is not a non-negative integer.
        InvalidChordError, UnknownChordError, EmptyPoolError
            If the chords cannot be turned into a pitch pool.
        """

        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise ValidationError("count", "must be a non-negative integer")

        self._report("CHORD: %s", chord)
        if next_chord is not None:
            self._report("NEXT: %s", next_chord)

        parsed = self.parse(chord, next_chord)
        fixed = build_pitch_pool(chord, parsed.root, parsed.flavor, parsed.scale, self.config)
        next_pitches = next_pitch_pool(parsed.next_root, parsed.next_scale, self.config)

        if count == 0:
            return []

        voice = VoiceGen(fixed, self.config.intervals, rng=self.rng)
        # Start the phrase from the middle of the pool.
        voice.context = fixed[len(fixed) // 2]
        chosen = voice.walk(count)

        if self.config.tonic:
            self._tonic_bias(chosen, fixed, parsed.scale)
        if next_pitches:
            self._anticipate(chosen, fixed, next_pitches)

        self._report_notes("CHOSEN", chosen)
        return chosen

    def _tonic_bias(self, chosen: List[int], fixed: Sequence[int], scale: str) -> None:
        positions = _TONIC_POSITIONS.get(scale)
        if positions is None or len(chosen) < 2:
            return
        candidates = [fixed[i] for i in positions if i < len(fixed)]
        first = closest(chosen[1], candidates, self.rng)
        if first is not None:
            chosen[0] = first

    def _anticipate(self, chosen: List[int], fixed: Sequence[int], next_pitches: Sequence[int]) -> None:
        shared = set(next_pitches)
        intersect = [p for p in fixed if p in shared]
        self._report_notes("INTERSECT", intersect)
        if not intersect:
            return
        key = chosen[-2] if len(chosen) >= 2 else chosen[-1]
        last = closest(key, intersect, self.rng)
        if last is not None:
            chosen[-1] = last


def generate(
    chord: str = "C",
    count: int = 4,
    next_chord: Optional[str] = None,
    *,
    rng: Optional[random.Random] = None,
    **options: Any,
) -> List[int]:
    """Generate one phrase with a throwaway :class:`Bassline`.

    ``options`` are :class:`WalkConfig` fields.
    """

    return Bassline(rng=rng, **options).generate(chord, count, next_chord)


def walk_progression(
    bassline: Bassline,
    chords: Sequence[str],
    count: int = 4,
) -> List[List[int]]:
    """Generate one phrase per chord of ``chords``.

    Each chord is walked with its successor as ``next_chord`` so every phrase
    anticipates the following bar.  The last chord has no successor.
    """

    phrases = []
    for i, chord in enumerate(chords):
        next_chord = chords[i + 1] if i + 1 < len(chords) else None
        phrases.append(bassline.generate(chord, count, next_chord))
    return phrases
