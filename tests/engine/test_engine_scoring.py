"""Tests for engine.scoring: rating bands and metric offsets."""

import pytest

from repomirror.engine.random_source import NumpyRandomSource, SequenceRandomSource
from repomirror.engine.scoring import (
    SCORE_BASE,
    SCORE_SPREAD,
    derive_metrics,
    rating_for,
    sample_overall_score,
)


class TestRating:
    """Rating bands, including the one the generator cannot reach."""

    @pytest.mark.parametrize("score", range(70, 85))
    def test_good_band(self, score):
        assert rating_for(score) == "Good"

    @pytest.mark.parametrize("score", range(65, 70))
    def test_fair_band(self, score):
        assert rating_for(score) == "Fair"

    def test_boundary_at_seventy(self):
        assert rating_for(69) == "Fair"
        assert rating_for(70) == "Good"

    def test_excellent_only_from_85(self):
        assert rating_for(84) == "Good"
        assert rating_for(85) == "Excellent"

    def test_excellent_unreachable_from_sampling(self):
        highest = SCORE_BASE + SCORE_SPREAD
        assert highest == 84
        assert all(rating_for(s) != "Excellent" for s in range(SCORE_BASE, highest + 1))


class TestSampling:
    def test_twenty_possible_scores(self):
        source = NumpyRandomSource(seed=0)
        seen = {sample_overall_score(source) for _ in range(2000)}
        assert seen == set(range(65, 85))

    def test_score_from_draw(self):
        assert sample_overall_score(SequenceRandomSource([19])) == 84


class TestMetrics:
    def test_offsets(self):
        metrics = derive_metrics(70)
        assert metrics.to_dict() == {
            "codeQuality": 65,
            "projectStructure": 67,
            "documentation": 55,
            "testCoverage": 50,
            "commitHistory": 62,
            "techStack": 70,
        }

    def test_no_clamping_below_zero(self):
        metrics = derive_metrics(10)
        assert metrics.test_coverage == -10
        assert metrics.documentation == -5

    def test_no_clamping_above_hundred(self):
        assert derive_metrics(110).tech_stack == 110
