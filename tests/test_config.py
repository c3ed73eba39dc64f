"""Validation and persistence tests for :class:`WalkConfig`.

Every option is checked when the configuration is built so mistakes surface
before any bassline is generated.  The settings helpers must tolerate
missing or corrupt files without interrupting generation.
"""

from __future__ import annotations

import dataclasses
import importlib
import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

config_mod = importlib.import_module("bassline_walk.config")
scales = importlib.import_module("bassline_walk.scales")
errors = importlib.import_module("bassline_walk.errors")
WalkConfig = config_mod.WalkConfig


def test_defaults():
    """Defaults mirror the documented behaviour."""
    config = WalkConfig()
    assert config.guitar is False
    assert config.modal is False
    assert config.chord_notes is True
    assert config.key_center == "C"
    assert config.intervals == (-3, -2, -1, 1, 2, 3)
    assert config.octave == 2
    assert config.scale is scales.default_scale
    assert config.tonic is False
    assert config.degrees is None


@pytest.mark.parametrize(
    "options, field",
    [
        ({"guitar": 1}, "guitar"),
        ({"guitar": "0"}, "guitar"),
        ({"modal": "yes"}, "modal"),
        ({"tonic": None}, "tonic"),
        ({"key_center": "H"}, "key_center"),
        ({"key_center": "c"}, "key_center"),
        ({"key_center": "C##"}, "key_center"),
        ({"intervals": []}, "intervals"),
        ({"intervals": [1, "2"]}, "intervals"),
        ({"intervals": "123"}, "intervals"),
        ({"octave": 0}, "octave"),
        ({"octave": -1}, "octave"),
        ({"octave": 2.5}, "octave"),
        ({"scale": "dorian-ish"}, "scale"),
        ({"scale": 42}, "scale"),
        ({"degrees": [0, -1]}, "degrees"),
    ],
)
def test_invalid_options_name_the_field(options, field):
    """Each invalid option raises ``ValidationError`` naming the field."""
    with pytest.raises(errors.ValidationError) as excinfo:
        WalkConfig(**options)
    assert excinfo.value.field == field
    assert field in str(excinfo.value)


def test_octave_bounds():
    """Octaves 1 to 6 are accepted and 7 is the first rejected value."""
    assert WalkConfig(octave=1).octave == 1
    assert WalkConfig(octave=6).octave == 6
    with pytest.raises(errors.ValidationError) as excinfo:
        WalkConfig(octave=7)
    assert excinfo.value.field == "octave"


def test_config_is_immutable():
    """Configurations cannot be changed after construction."""
    config = WalkConfig(intervals=[-1, 1], degrees=[0, 2, 4])
    assert config.intervals == (-1, 1)
    assert config.degrees == frozenset({0, 2, 4})
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.guitar = True


def test_scale_accepts_callable_and_preset():
    """Scale selectors may be presets or custom callables."""
    assert WalkConfig(scale="pentatonic").scale is scales.pentatonic_scale

    def custom(chord: str) -> str:
        return "mixolydian"

    assert WalkConfig(scale=custom).scale is custom


def test_from_settings_round_trip():
    """``to_settings`` output rebuilds an equal configuration."""
    config = WalkConfig(guitar=True, modal=True, key_center="Bb", scale="chromatic", degrees={0, 4})
    rebuilt = WalkConfig.from_settings(json.loads(json.dumps(config.to_settings())))
    assert rebuilt == config


def test_from_settings_rejects_unknown_keys():
    """Typos in settings files are reported instead of ignored."""
    with pytest.raises(errors.ValidationError) as excinfo:
        WalkConfig.from_settings({"guitr": True})
    assert excinfo.value.field == "guitr"


def test_settings_file_round_trip(tmp_path):
    """Saved settings load back unchanged."""
    path = tmp_path / "settings.json"
    config_mod.save_settings({"guitar": True, "octave": 3}, path)
    assert config_mod.load_settings(path) == {"guitar": True, "octave": 3}


def test_missing_settings_file(tmp_path):
    """A missing file yields empty settings."""
    assert config_mod.load_settings(tmp_path / "absent.json") == {}


def test_corrupt_settings_file_is_logged(tmp_path, caplog):
    """Unreadable JSON is logged and ignored."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        assert config_mod.load_settings(path) == {}
    assert "Could not load settings" in caplog.text
