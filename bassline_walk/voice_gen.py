"""Constrained random walk over a fixed set of pitches.

:class:`VoiceGen` produces a quasi-random line: every step picks one of the
allowed intervals, adds it to the current pitch and snaps the result to the
nearest member of the pitch pool.  The line therefore moves by small steps
within the pool instead of sampling the register uniformly.

:func:`closest` is the tie-breaking helper shared by the tonic bias and the
next-chord anticipation.  It ignores the reference pitch itself so the
replacement note always differs from its neighbour.

Both take a ``random.Random`` instance so callers can seed the walk and
reproduce a phrase exactly.

Example
-------
>>> import random
>>> voice = VoiceGen([36, 38, 40, 41, 43], [-2, -1, 1, 2], rng=random.Random(1))
>>> voice.context = 40
>>> voice.rand() in {36, 38, 40, 41, 43}
True
>>> closest(0, [3, -3, 5], random.Random(0)) in (3, -3)
True
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

__all__ = ["VoiceGen", "closest"]


def _nearest(target: int, pitches: Sequence[int], rng: random.Random) -> int:
    """Return the member of ``pitches`` nearest ``target``, ties broken at random."""

    best = min(abs(target - p) for p in pitches)
    ties = [p for p in pitches if abs(target - p) == best]
    return ties[0] if len(ties) == 1 else rng.choice(ties)


def closest(key: int, candidates: Sequence[int], rng: Optional[random.Random] = None) -> Optional[int]:
    """Return the candidate nearest ``key``, excluding ``key`` itself.

    Parameters
    ----------
    key:
        Reference pitch.
    candidates:
        Pitches to choose from.  Entries equal to ``key`` are skipped.
    rng:
        Random source used to break ties between equally close candidates.
        The module level generator is used when omitted.

    Returns
    -------
    int | None
        One of the closest candidates chosen uniformly at random, or ``None``
        when no candidate other than ``key`` exists.  Callers treat ``None``
        as "leave the note unchanged".
    """

    remaining = [c for c in candidates if c != key]
    if not remaining:
        return None
    return _nearest(key, remaining, rng or random)


class VoiceGen:
    """Random walk restricted to ``pitches`` and stepping by ``intervals``.

    ``context`` holds the pitch the next step starts from.  It defaults to
    the middle of the pool and is updated with every generated note.
    """

    def __init__(
        self,
        pitches: Sequence[int],
        intervals: Sequence[int],
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not pitches:
            raise ValueError("pitches must not be empty")
        if not intervals:
            raise ValueError("intervals must not be empty")
        self.pitches: List[int] = sorted(set(pitches))
        self.intervals: List[int] = list(intervals)
        self.rng = rng or random.Random()
        self.context: int = self.pitches[len(self.pitches) // 2]

    def rand(self) -> int:
        """Take one step of the walk and return the new pitch."""

        target = self.context + self.rng.choice(self.intervals)
        self.context = _nearest(target, self.pitches, self.rng)
        return self.context

    def walk(self, count: int) -> List[int]:
        """Return ``count`` successive steps."""

        return [self.rand() for _ in range(count)]
