"""Replaceable sources of uniform random integers for report synthesis."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """Anything that can draw a uniform integer from an inclusive range."""

    def randint(self, low: int, high: int) -> int:
        """Return an integer *n* with ``low <= n <= high``."""
        ...


class NumpyRandomSource:
    """Default source backed by a NumPy ``Generator``.

    Pass *seed* for reproducible runs; ``None`` draws fresh OS entropy.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = np.random.default_rng(seed)

    def randint(self, low: int, high: int) -> int:
        if low > high:
            raise ValueError(f"empty range [{low}, {high}]")
        return int(self._rng.integers(low, high, endpoint=True))


class SequenceRandomSource:
    """Replays a fixed sequence of draws, for tests and demos.

    Each value must fall inside the range it is drawn for; running out of
    values is an error rather than a silent wrap-around.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values: Iterator[int] = iter(values)

    def randint(self, low: int, high: int) -> int:
        try:
            value = next(self._values)
        except StopIteration:
            raise ValueError("random sequence exhausted") from None
        if not low <= value <= high:
            raise ValueError(f"sequence value {value} outside [{low}, {high}]")
        return value
