"""Command line interface for Bassline Walk.

``run_cli`` parses arguments, walks every chord of the progression and either
prints the generated MIDI numbers (one line per chord) or writes them to a
MIDI file.  Options not given on the command line fall back to the JSON
settings file, then to the :class:`~bassline_walk.config.WalkConfig`
defaults.

Example
-------
Running ``python -m bassline_walk --chords C7,F7,G7,C7 --notes 4 --guitar \
    --tonic --seed 42 --output walk.mid`` writes a four-bar walking line to
``walk.mid``.  Dropping ``--output`` prints the pitches instead.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from . import CHORDS
from .config import DEFAULT_SETTINGS_FILE, WalkConfig, load_settings, save_settings
from .errors import BasslineError
from .scales import SCALE_SELECTORS
from .walk import Bassline, walk_progression

__all__ = ["run_cli", "main"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a walking bassline for a chord progression."
    )
    parser.add_argument("--list-chords", action="store_true", help="List all supported chord flavors and exit")
    parser.add_argument("--chords", type=str, help="Comma-separated chord progression (e.g., C7,F7,G7).")
    parser.add_argument("--notes", type=int, default=4, help="Number of notes per chord (default: 4).")
    parser.add_argument("--guitar", action="store_true", default=None, help="Transpose notes below E2 up an octave.")
    parser.add_argument("--modal", action="store_true", default=None, help="Pick notes from the chord's mode in --keycenter.")
    parser.add_argument("--keycenter", dest="key_center", type=str, help="Key center for modal accompaniment (default: C).")
    parser.add_argument("--octave", type=int, help="Lowest octave for the bassline (default: 2).")
    parser.add_argument(
        "--intervals",
        type=int,
        nargs="+",
        metavar="STEP",
        help="Semitone steps the walk may take, e.g. --intervals -3 -2 -1 1 2 3 (the default).",
    )
    parser.add_argument("--scale", choices=sorted(SCALE_SELECTORS), help="Scale preset for non-modal walks.")
    parser.add_argument("--no-chord-notes", dest="chord_notes", action="store_false", default=None, help="Do not add chord tones outside the scale.")
    parser.add_argument("--tonic", action="store_true", default=None, help="Start each phrase on the I, III or V.")
    parser.add_argument("--verbose", action="store_true", default=None, help="Show generation progress.")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument("--output", type=str, help="Output MIDI file path. Prints pitches when omitted.")
    parser.add_argument("--bpm", type=int, default=100, help="Tempo of the MIDI file (default: 100).")
    parser.add_argument(
        "--settings-file",
        type=str,
        help="Path to a JSON settings file with default options",
    )
    parser.add_argument("--save-settings", action="store_true", help="Store the resulting options in the settings file")
    return parser


def run_cli(argv: Optional[List[str]] = None) -> None:
    """Parse CLI arguments and generate the bassline.

    Invalid chords or options are logged and the process exits with status
    ``1`` so calling scripts can react.
    """

    args = _build_parser().parse_args(argv)

    if args.list_chords:
        print("\n".join(sorted(CHORDS)))
        return
    if not args.chords:
        logging.error("A chord progression is required (use --chords).")
        sys.exit(1)
    if args.notes < 0:
        logging.error("Number of notes must not be negative.")
        sys.exit(1)

    settings_path = (
        Path(args.settings_file).expanduser() if args.settings_file else DEFAULT_SETTINGS_FILE
    )
    settings = load_settings(settings_path)
    for name in (
        "guitar",
        "modal",
        "key_center",
        "octave",
        "intervals",
        "scale",
        "chord_notes",
        "tonic",
        "verbose",
    ):
        value = getattr(args, name)
        if value is not None:
            settings[name] = value

    try:
        config = WalkConfig.from_settings(settings)
    except BasslineError as exc:
        logging.error("Invalid option %s", exc)
        sys.exit(1)

    if args.save_settings:
        save_settings(config.to_settings(), settings_path)

    chords = [chord.strip() for chord in args.chords.split(",") if chord.strip()]
    bassline = Bassline(config, rng=random.Random(args.seed))
    try:
        phrases = walk_progression(bassline, chords, args.notes)
    except BasslineError as exc:
        logging.error(str(exc))
        sys.exit(1)

    if not args.output:
        for chord, phrase in zip(chords, phrases):
            print(f"{chord}: {' '.join(str(n) for n in phrase)}")
        return

    from .midi_io import create_midi_file

    notes = [n for phrase in phrases for n in phrase]
    try:
        create_midi_file(notes, args.bpm, args.output)
    except ValueError as exc:
        logging.error(str(exc))
        sys.exit(1)
    except OSError as exc:
        logging.error("Could not write MIDI file: %s", exc)
        sys.exit(1)
    logging.info("Bassline generation complete.")


def main() -> None:
    """Configure logging and run the command line interface."""

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    run_cli()
