"""Score synthesis: overall score sampling, rating bands, metric offsets.

All metrics derive from one sampled overall score. Offsets are applied
without clamping, so a low enough score yields negative sub-scores.
"""

from __future__ import annotations

from ..models import QualityMetrics, RepoStats
from .random_source import RandomSource

SCORE_BASE = 65
SCORE_SPREAD = 19  # inclusive: 20 possible scores, 65..84

EXCELLENT_THRESHOLD = 85
GOOD_THRESHOLD = 70

FILES_RANGE = (20, 59)
COMMITS_RANGE = (30, 149)
BRANCHES_RANGE = (1, 4)

METRIC_OFFSETS = {
    "code_quality": -5,
    "project_structure": -3,
    "documentation": -15,
    "test_coverage": -20,
    "commit_history": -8,
    "tech_stack": 0,
}


def sample_overall_score(random_source: RandomSource) -> int:
    return SCORE_BASE + random_source.randint(0, SCORE_SPREAD)


def rating_for(score: int) -> str:
    """Map a score to its rating band.

    ``Excellent`` starts at 85, above the sampled range, so the generator
    never produces it.
    """
    if score >= EXCELLENT_THRESHOLD:
        return "Excellent"
    if score >= GOOD_THRESHOLD:
        return "Good"
    return "Fair"


def derive_metrics(score: int) -> QualityMetrics:
    return QualityMetrics(**{name: score + offset for name, offset in METRIC_OFFSETS.items()})


def sample_stats(random_source: RandomSource, languages: int) -> RepoStats:
    """Draw files, commits and branches in that order."""
    files = _sample(random_source, FILES_RANGE)
    commits = _sample(random_source, COMMITS_RANGE)
    branches = _sample(random_source, BRANCHES_RANGE)
    return RepoStats(files=files, commits=commits, branches=branches, languages=languages)


def _sample(random_source: RandomSource, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return low + random_source.randint(0, high - low)
