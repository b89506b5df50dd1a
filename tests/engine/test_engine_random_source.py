"""Tests for engine.random_source."""

import pytest

from repomirror.engine.random_source import NumpyRandomSource, SequenceRandomSource


class TestNumpyRandomSource:
    def test_inclusive_bounds(self):
        source = NumpyRandomSource(seed=42)
        values = {source.randint(0, 3) for _ in range(500)}
        assert values == {0, 1, 2, 3}

    def test_returns_plain_int(self):
        assert type(NumpyRandomSource(seed=1).randint(0, 10)) is int

    def test_single_value_range(self):
        assert NumpyRandomSource().randint(5, 5) == 5

    def test_empty_range_rejected(self):
        with pytest.raises(ValueError):
            NumpyRandomSource().randint(3, 2)


class TestSequenceRandomSource:
    def test_replays_values(self):
        source = SequenceRandomSource([1, 2, 3])
        assert [source.randint(0, 5) for _ in range(3)] == [1, 2, 3]

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="outside"):
            SequenceRandomSource([20]).randint(0, 19)

    def test_exhaustion(self):
        source = SequenceRandomSource([])
        with pytest.raises(ValueError, match="exhausted"):
            source.randint(0, 1)
