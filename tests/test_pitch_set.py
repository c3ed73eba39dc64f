"""Tests for pitch pool construction, flavor pruning and range handling."""

import importlib
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

pitch_set = importlib.import_module("bassline_walk.pitch_set")
config_mod = importlib.import_module("bassline_walk.config")
errors = importlib.import_module("bassline_walk.errors")
WalkConfig = config_mod.WalkConfig

C_MAJOR = [36, 38, 40, 41, 43, 45, 47]


def _pool(chord, scale="major", **options):
    config = WalkConfig(**options)
    root, flavor = chord[0], chord[1:]
    return pitch_set.build_pitch_pool(chord, root, flavor, scale, config)


def test_candidate_pool_merges_chord_tones():
    """Chord tones missing from the scale are added and the pool sorted."""
    pool = pitch_set.candidate_pool("C7b5", "C", "major", WalkConfig())
    assert pool == [36, 38, 40, 41, 42, 43, 45, 46, 47]


def test_candidate_pool_without_chord_notes():
    """Disabling chord notes leaves the bare scale."""
    pool = pitch_set.candidate_pool("C7b5", "C", "major", WalkConfig(chord_notes=False))
    assert pool == C_MAJOR


def test_candidate_pool_degrees():
    """Restricting degrees keeps only those scale positions."""
    config = WalkConfig(chord_notes=False, degrees={0, 2, 4})
    assert pitch_set.candidate_pool("C", "C", "major", config) == [36, 40, 43]


def test_flat_five_drops_natural_fifth():
    """``C7b5`` drops G (43) and the diatonic seventh B (47)."""
    pool = _pool("C7b5")
    assert 43 not in pool
    assert 47 not in pool
    assert 42 in pool


def test_major_seventh_keeps_seventh():
    """Major sevenths are exempt from the dominant seventh rule."""
    assert 47 in _pool("CM7")
    assert 47 in _pool("Cmaj7")


@pytest.mark.parametrize(
    "flavor, degrees",
    [
        ("", []),
        ("7", [6]),
        ("M7", []),
        ("m7", []),
        ("7b5", [4, 6]),
        ("7#9", [1, 6]),
        ("dim", [2, 6]),
        ("aug", [6]),
        ("m7b5", [4]),
        ("maj7", []),
        ("min7", []),
        ("dim7", [2, 6]),
    ],
)
def test_replaced_degrees(flavor, degrees):
    """Flavor patterns map to the scale degrees they replace."""
    assert pitch_set.replaced_degrees(flavor) == degrees


def test_prune_compares_both_spellings():
    """Flat scale tones match sharp-spelled pitches through respelling."""
    # F minor is spelled with flats; G#2 (44) and D#3 (51) are its Ab and Eb.
    pool = pitch_set.prune_flavor([41, 43, 44, 46, 48, 49, 51], "F", "minor", "dim")
    assert pool == [41, 43, 46, 48, 49]


def test_prune_flat_nine():
    """``F7b9`` drops the diatonic second and seventh."""
    pool = pitch_set.prune_flavor([41, 43, 45, 46, 48, 50, 52], "F", "major", "7b9")
    assert pool == [41, 45, 46, 48, 50]


def test_prune_gating_for_other_scales():
    """Pruning of non major/minor scales can be switched off."""
    pool = [38, 40, 41, 43, 45, 47, 48]
    assert 45 not in pitch_set.prune_flavor(pool, "D", "dorian", "7b5")
    kept = pitch_set.prune_flavor(pool, "D", "dorian", "7b5", prune_all_scales=False)
    assert kept == pool


def test_prune_without_scale_is_noop():
    """Chord-only walks have no scale degrees to prune."""
    assert pitch_set.prune_flavor([36, 40, 43], "C", "", "7b5") == [36, 40, 43]


def test_guitar_mode_transposes_low_notes():
    """Pitches below E2 move up an octave and never appear untransposed."""
    low = [p for p in C_MAJOR if p < 40]
    pool = _pool("C", guitar=True)
    for p in low:
        assert p not in pool
        assert p + 12 in pool
    assert pool == sorted(pool)
    assert all(p >= 40 for p in pool)


def test_normalize_range_deduplicates():
    """Transposed duplicates collapse into one pitch."""
    assert pitch_set.normalize_range([36, 48, 40], guitar=True) == [40, 48]


def test_empty_pool_raises():
    """A pool with no pitches cannot be walked."""
    with pytest.raises(errors.EmptyPoolError):
        pitch_set.normalize_range([], guitar=False)


def test_chord_only_without_chord_notes_is_empty():
    """No scale and no chord tones leaves nothing to play."""
    with pytest.raises(errors.EmptyPoolError):
        _pool("C", scale="", chord_notes=False)


def test_pool_construction_is_repeatable():
    """Identical inputs always yield identical pools."""
    assert _pool("C7b5", guitar=True) == _pool("C7b5", guitar=True)


def test_next_pitch_pool():
    """The next chord contributes only its scale pitches."""
    assert pitch_set.next_pitch_pool("F", "major", WalkConfig()) == [41, 43, 45, 46, 48, 50, 52]
    assert pitch_set.next_pitch_pool(None, "", WalkConfig()) == []
