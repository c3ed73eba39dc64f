"""Exception types raised by the bassline generator.

Every error derives from :class:`BasslineError`, itself a ``ValueError``, so
callers that already guard generation with ``except ValueError`` keep
working while newer code can distinguish the individual failure modes.
"""

from __future__ import annotations

__all__ = [
    "BasslineError",
    "ValidationError",
    "InvalidChordError",
    "UnknownChordError",
    "EmptyPoolError",
]


class BasslineError(ValueError):
    """Base class for all bassline generation failures."""


class ValidationError(BasslineError):
    """A configuration field holds an unusable value.

    ``field`` names the offending option so user interfaces can point at the
    right input.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class InvalidChordError(BasslineError):
    """A chord symbol does not start with a valid pitch class."""

    def __init__(self, chord: object) -> None:
        self.chord = chord
        super().__init__(f"Invalid chord symbol: {chord!r}")


class UnknownChordError(BasslineError):
    """The chord root parsed but its flavor is missing from the chord table."""

    def __init__(self, chord: str, flavor: str) -> None:
        self.chord = chord
        self.flavor = flavor
        super().__init__(f"Unknown chord flavor {flavor!r} in {chord!r}")


class EmptyPoolError(BasslineError):
    """No pitches remain for the walk after pruning and normalisation."""
