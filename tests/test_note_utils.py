"""Unit tests for note name <-> MIDI conversion helpers.

These tests exercise :func:`note_to_midi`, :func:`midi_to_note` and the
enharmonic :func:`respell` helper used by the flavor pruner.  Invalid inputs
must raise descriptive errors instead of failing silently.
"""

import importlib
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

note_utils = importlib.import_module("bassline_walk.note_utils")
note_to_midi = note_utils.note_to_midi
midi_to_note = note_utils.midi_to_note
respell = note_utils.respell


def test_bass_register_conversion():
    """``C2`` and ``E2`` anchor the bass register used by the generator."""
    assert note_to_midi("C2") == 36
    assert note_to_midi("E2") == 40


def test_flat_conversion():
    """Flat notes produce the same value as their enharmonic sharps."""
    assert note_to_midi("Db4") == note_to_midi("C#4") == 61


def test_octave_boundary_spellings():
    """``Cb`` and ``B#`` follow scientific pitch across the B-C boundary."""
    assert note_to_midi("Cb2") == note_to_midi("B1") == 35
    assert note_to_midi("B#2") == note_to_midi("C3") == 48
    assert note_to_midi("Fb2") == note_to_midi("E2") == 40
    assert note_to_midi("E#2") == note_to_midi("F2") == 41


def test_out_of_range_notes_raise():
    """Notes outside MIDI's 0-127 range raise ``ValueError``."""
    assert note_to_midi("C-1") == 0
    with pytest.raises(ValueError, match="out of range"):
        note_to_midi("C-2")
    with pytest.raises(ValueError, match="out of range"):
        note_to_midi("C10")


def test_malformed_note_raises():
    """Lowercase or missing octaves are not accepted."""
    with pytest.raises(ValueError, match="Invalid note format"):
        note_to_midi("H2")
    with pytest.raises(ValueError, match="Invalid note format"):
        note_to_midi("C")


def test_midi_to_note_spellings():
    """``midi_to_note`` uses sharps unless flats are requested."""
    assert midi_to_note(36) == "C2"
    assert midi_to_note(46) == "A#2"
    assert midi_to_note(46, flats=True) == "Bb2"
    with pytest.raises(ValueError, match="out of range"):
        midi_to_note(128)


@pytest.mark.parametrize(
    "name, expected",
    [("C#", "Db"), ("Db", "C#"), ("A#", "Bb"), ("Bb", "A#"), ("G", "G"), ("E#", "F")],
)
def test_respell(name, expected):
    """``respell`` swaps the accidental and leaves naturals alone."""
    assert respell(name) == expected


def test_respell_rejects_invalid_names():
    """Names outside ``[A-G][#b]?`` are rejected."""
    with pytest.raises(ValueError):
        respell("X")


def test_is_pitch_class():
    """Only capitalised pitch classes with at most one accidental are valid."""
    assert note_utils.is_pitch_class("Bb")
    assert not note_utils.is_pitch_class("bb")
    assert not note_utils.is_pitch_class("C##")
    assert not note_utils.is_pitch_class(None)
