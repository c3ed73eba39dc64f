#!/usr/bin/env python3
"""Bassline Walk library.

This package generates randomized walking basslines.  A typical workflow is
to build a :class:`Bassline` (optionally from a :class:`WalkConfig`), call
:meth:`Bassline.generate` with a chord symbol, the number of notes and the
chord that follows, then feed the resulting MIDI numbers into
:func:`create_midi_file` to produce a track for a DAW.

The logic can produce some sour notes.  It is an approximate composition
tool rather than a drop-in bass player, so rendered files are meant to be
imported and edited until they sound right.

Underlying Algorithm
--------------------
The "formula" is: play any notes of the chord, the modal chord scale or the
chord-root scale, and drop any notes replaced by extended jazz chords::

    root, flavor = parse_chord(chord)
    scale = modal_scale(key_center, root) if modal else selector(chord)
    pool = sorted(scale_pitches + chord_pitches)
    pool = prune_flavor(pool, root, scale, flavor)
    pool = normalize_range(pool, guitar)
    voice = VoiceGen(pool, intervals)
    voice.context = pool[len(pool) // 2]
    chosen = [voice.rand() for _ in range(count)]
    apply_tonic_bias(chosen)
    anticipate_next_chord(chosen)

Each step of the walk picks a random interval and snaps to the pool pitch
nearest the target, so the line moves by small steps instead of jumping
around the register.

Features include:
- Modal accompaniment keyed to a key center.
- Chord-tone merging and flavor-aware pruning of clashing scale degrees.
- Guitar-range transposition of notes below E2.
- Tonic bias for the first note and next-chord anticipation for the last.
- MIDI rendering with ``mido`` and a small command line interface.
"""

__version__ = "0.1.0"

from typing import Dict, List

# ``NOTE_TO_SEMITONE`` maps sharp, flat and natural spellings to their
# semitone offset within an octave so enharmonic names resolve identically.
NOTE_TO_SEMITONE: Dict[str, int] = {
    "C": 0,
    "B#": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
}

# Pitch-class names indexed by semitone, one list per accidental preference.
NOTES: List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLAT_NOTES: List[str] = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# Octave limits for pitch derivation.  Octave 6 is the highest where every
# root voiced with a thirteenth stays inside MIDI's 0-127 range.
MIN_OCTAVE = 1
MAX_OCTAVE = 6

# Notes below E2 are moved up an octave in guitar mode.
GUITAR_LOWEST = 40

from .errors import (  # noqa: E402
    BasslineError,
    EmptyPoolError,
    InvalidChordError,
    UnknownChordError,
    ValidationError,
)
from .note_utils import midi_to_note, note_to_midi, pitch_name, respell  # noqa: E402
from .chords import CHORDS, chord_pitches, parse_chord  # noqa: E402
from .scales import (  # noqa: E402
    MODES,
    SCALES,
    SCALE_SELECTORS,
    modal_scale,
    scale_midi,
    scale_notes,
)
from .config import WalkConfig, load_settings, save_settings  # noqa: E402
from .voice_gen import VoiceGen, closest  # noqa: E402
from .walk import Bassline, ParsedChord, generate, walk_progression  # noqa: E402
from .midi_io import create_midi_file  # noqa: E402


def main() -> None:
    """Entry point for the ``bassline-walk`` console script."""

    from .cli import main as _main

    _main()


__all__ = [
    "Bassline",
    "BasslineError",
    "CHORDS",
    "EmptyPoolError",
    "InvalidChordError",
    "MODES",
    "ParsedChord",
    "SCALES",
    "SCALE_SELECTORS",
    "UnknownChordError",
    "ValidationError",
    "VoiceGen",
    "WalkConfig",
    "chord_pitches",
    "closest",
    "create_midi_file",
    "generate",
    "load_settings",
    "midi_to_note",
    "modal_scale",
    "note_to_midi",
    "parse_chord",
    "pitch_name",
    "respell",
    "save_settings",
    "scale_midi",
    "scale_notes",
    "walk_progression",
]
