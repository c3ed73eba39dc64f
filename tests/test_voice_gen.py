"""Tests for the constrained random walk and the closest-pitch resolver."""

import importlib
import random
import sys
from collections import Counter
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

voice_gen = importlib.import_module("bassline_walk.voice_gen")
closest = voice_gen.closest
VoiceGen = voice_gen.VoiceGen


def test_closest_excludes_key():
    """The key itself is never returned."""
    assert closest(40, [40]) is None
    assert closest(40, []) is None
    assert closest(40, [40, 43]) == 43


def test_closest_picks_minimum_difference():
    """The nearest candidate wins when there is no tie."""
    assert closest(41, [36, 40, 43], random.Random(0)) == 40


def test_closest_tie_break_is_fair():
    """Equally close candidates are chosen with equal probability."""
    rng = random.Random(1234)
    counts = Counter(closest(0, [3, -3, 5], rng) for _ in range(2000))
    assert set(counts) == {3, -3}
    assert 800 < counts[3] < 1200
    assert 800 < counts[-3] < 1200


def test_walk_stays_in_pool():
    """Every generated pitch belongs to the pool."""
    pool = [36, 38, 40, 41, 43, 45, 47]
    voice = VoiceGen(pool, [-3, -2, -1, 1, 2, 3], rng=random.Random(7))
    notes = voice.walk(200)
    assert len(notes) == 200
    assert set(notes) <= set(pool)


def test_walk_starts_from_middle_context():
    """The context defaults to the middle of the pool."""
    voice = VoiceGen([36, 38, 40, 41, 43], [1])
    assert voice.context == 40


def test_walk_steps_are_local():
    """Single semitone steps over a chromatic pool move by one semitone."""
    pool = list(range(36, 60))
    voice = VoiceGen(pool, [-1, 1], rng=random.Random(3))
    voice.context = 48
    previous = voice.context
    for note in voice.walk(50):
        assert abs(note - previous) == 1 or note in (36, 59)
        previous = note


def test_walk_snaps_to_nearest_pitch():
    """A target between pool pitches snaps to the nearest one."""
    voice = VoiceGen([36, 43], [2], rng=random.Random(0))
    voice.context = 36
    assert voice.rand() == 36  # 38 is nearer 36 than 43


def test_walk_is_reproducible_with_seed():
    """Identical seeds give identical walks."""
    pool = [36, 38, 40, 41, 43, 45, 47]
    first = VoiceGen(pool, [-2, 2], rng=random.Random(99)).walk(16)
    second = VoiceGen(pool, [-2, 2], rng=random.Random(99)).walk(16)
    assert first == second


def test_empty_inputs_rejected():
    """A walk needs pitches and intervals."""
    with pytest.raises(ValueError):
        VoiceGen([], [1])
    with pytest.raises(ValueError):
        VoiceGen([36], [])
