"""Walk configuration and persisted user settings.

:class:`WalkConfig` gathers every option that shapes a bassline.  It is
validated once at construction and frozen afterwards, so a single instance
can be shared by any number of :class:`~bassline_walk.walk.Bassline`
objects.  ``scale`` accepts either a callable ``(chord) -> scale name`` or
the name of one of the presets in :data:`~bassline_walk.scales.SCALE_SELECTORS`;
names are resolved to their callable during validation.

Settings persist as JSON so the command line tool can reuse preferred
options between runs.  The default location is
``~/.bassline_walk_settings.json`` unless ``BASSLINE_SETTINGS_FILE`` points
elsewhere.

Example
-------
>>> config = WalkConfig(guitar=True, modal=True, key_center="Bb")
>>> config.intervals
(-3, -2, -1, 1, 2, 3)
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, FrozenSet, Mapping, Optional, Tuple, Union

from . import MAX_OCTAVE, MIN_OCTAVE
from .errors import ValidationError
from .note_utils import is_pitch_class
from .scales import SCALE_SELECTORS, ScaleSelector

__all__ = [
    "DEFAULT_SETTINGS_FILE",
    "WalkConfig",
    "load_settings",
    "save_settings",
]

env_path = os.environ.get("BASSLINE_SETTINGS_FILE")
if env_path:
    DEFAULT_SETTINGS_FILE = Path(env_path).expanduser()
else:
    DEFAULT_SETTINGS_FILE = Path.home() / ".bassline_walk_settings.json"

_BOOLEAN_FIELDS = ("guitar", "modal", "chord_notes", "tonic", "verbose", "prune_all_scales")


def _is_int(value: Any) -> bool:
    # ``bool`` subclasses ``int`` but ``True`` is never a meaningful step.
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class WalkConfig:
    """Immutable options for bassline generation.

    Attributes
    ----------
    guitar:
        Transpose notes below ``E2`` (``40``) up an octave.
    modal:
        Choose notes from the mode of the chord root within ``key_center``
        instead of re-keying the scale to every chord.
    chord_notes:
        Merge chord tones lying outside the scale (e.g. a ``b5``) into the
        note choices.
    key_center:
        Key center for modal accompaniment, ``[A-G][#b]?``.
    intervals:
        Semitone steps the walk may take.  Stored as a tuple.
    octave:
        Lowest octave used to derive pitches.
    scale:
        Scale selector for non-modal walks, a callable or a preset name.
    tonic:
        Start the phrase on the I, III or V of the scale.
    degrees:
        Optional set of zero-based scale positions to keep.  ``None`` keeps
        every degree.
    verbose:
        Report progress at ``INFO`` level instead of ``DEBUG``.
    prune_all_scales:
        Drop flavor-replaced degrees for every scale.  When ``False`` only
        the major and minor scales are pruned.
    """

    guitar: bool = False
    modal: bool = False
    chord_notes: bool = True
    key_center: str = "C"
    intervals: Tuple[int, ...] = (-3, -2, -1, 1, 2, 3)
    octave: int = 2
    scale: Union[str, ScaleSelector] = "default"
    tonic: bool = False
    degrees: Optional[FrozenSet[int]] = None
    verbose: bool = False
    prune_all_scales: bool = True

    def __post_init__(self) -> None:
        for name in _BOOLEAN_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise ValidationError(name, "not a boolean")

        if not is_pitch_class(self.key_center):
            raise ValidationError("key_center", f"not a valid key: {self.key_center!r}")

        if isinstance(self.intervals, (str, bytes)) or not isinstance(self.intervals, Iterable):
            raise ValidationError("intervals", "not a sequence of integers")
        intervals = tuple(self.intervals)
        if not intervals:
            raise ValidationError("intervals", "must not be empty")
        if not all(_is_int(step) for step in intervals):
            raise ValidationError("intervals", "every interval must be an integer")
        object.__setattr__(self, "intervals", intervals)

        if not _is_int(self.octave) or not MIN_OCTAVE <= self.octave <= MAX_OCTAVE:
            raise ValidationError(
                "octave", f"must be an integer between {MIN_OCTAVE} and {MAX_OCTAVE}"
            )

        object.__setattr__(self, "scale", self._resolve_scale(self.scale))

        if self.degrees is not None:
            if isinstance(self.degrees, (str, bytes)) or not isinstance(self.degrees, Iterable):
                raise ValidationError("degrees", "not a set of integers")
            degrees = frozenset(self.degrees)
            if not all(_is_int(d) and 0 <= d <= 11 for d in degrees):
                raise ValidationError("degrees", "scale positions must be integers from 0 to 11")
            object.__setattr__(self, "degrees", degrees)

    @staticmethod
    def _resolve_scale(scale: Union[str, ScaleSelector]) -> ScaleSelector:
        if isinstance(scale, str):
            try:
                return SCALE_SELECTORS[scale]
            except KeyError:
                choices = ", ".join(sorted(SCALE_SELECTORS))
                raise ValidationError(
                    "scale", f"unknown preset {scale!r} (choose from {choices})"
                ) from None
        if not callable(scale):
            raise ValidationError("scale", "not a callable or preset name")
        return scale

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "WalkConfig":
        """Build a configuration from a plain mapping such as saved JSON.

        Keys must match the dataclass field names.  ``None`` values are
        ignored so partially filled settings fall back to the defaults.
        """

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(settings) - known)
        if unknown:
            raise ValidationError(unknown[0], "unknown setting")
        options = {k: v for k, v in settings.items() if v is not None}
        return cls(**options)

    def to_settings(self) -> dict:
        """Return a JSON-serialisable mapping of this configuration.

        A custom scale selector cannot be stored, so it is omitted and the
        preset name is written only for built-in selectors.
        """

        data: dict = {
            "guitar": self.guitar,
            "modal": self.modal,
            "chord_notes": self.chord_notes,
            "key_center": self.key_center,
            "intervals": list(self.intervals),
            "octave": self.octave,
            "tonic": self.tonic,
            "verbose": self.verbose,
            "prune_all_scales": self.prune_all_scales,
        }
        for name, selector in SCALE_SELECTORS.items():
            if selector is self.scale:
                data["scale"] = name
                break
        if self.degrees is not None:
            data["degrees"] = sorted(self.degrees)
        return data


def load_settings(path: Path = DEFAULT_SETTINGS_FILE) -> dict:
    """Load saved user settings from ``path`` if it exists.

    @param path (Path): Location of the settings file.
    @returns dict: Loaded settings or an empty dictionary when unavailable.
    """
    if path.is_file():
        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logging.error("Could not load settings: %s", exc)
            return {}
        if isinstance(data, dict):
            return data
        logging.error("Ignoring settings in %s: expected a JSON object", path)
    return {}


def save_settings(settings: dict, path: Path = DEFAULT_SETTINGS_FILE) -> None:
    """Save user ``settings`` to ``path`` as JSON.

    Failing to write preferences is logged and never interrupts generation.
    """
    try:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(settings, fh, indent=2)
    except OSError as exc:
        logging.error("Could not save settings: %s", exc)
