"""Mock analysis engine: synthesizes a complete report from a repository name.

Nothing is fetched or measured. The overall score is sampled once and every
metric is a fixed offset from it; stats are independent draws; the tech
stack comes from keyword matching on the name. Two calls for the same
repository return different reports; only the shape is stable.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..models import AnalysisReport
from .random_source import NumpyRandomSource, RandomSource
from .roadmap import build_roadmap
from .scoring import derive_metrics, rating_for, sample_overall_score, sample_stats
from .techstack import resolve_tech_stack

logger = logging.getLogger(__name__)

SUMMARY = (
    "The repository demonstrates a structured approach with clear intent. Core functionality "
    "is implemented well, but documentation, testing, and workflow automation can be improved "
    "to meet industry standards."
)


class AnalysisEngine:
    """Produces :class:`AnalysisReport` values from an injected random source."""

    def __init__(self, random_source: Optional[RandomSource] = None) -> None:
        self.random_source: RandomSource = random_source or NumpyRandomSource()

    def analyze(self, owner: str, name: str) -> AnalysisReport:
        """Build a report for ``owner/name``.

        Callers validate that both parts are non-empty; this method does not
        fail for well-formed input.
        """
        tech_stack = resolve_tech_stack(name)
        score = sample_overall_score(self.random_source)
        stats = sample_stats(self.random_source, languages=len(tech_stack))

        report = AnalysisReport(
            overall_score=score,
            rating=rating_for(score),
            summary=SUMMARY,
            stats=stats,
            metrics=derive_metrics(score),
            roadmap=build_roadmap(),
            tech_stack=tech_stack,
        )
        logger.debug(
            "Synthesized report for %s/%s: score=%d rating=%s stack=%s",
            owner,
            name,
            score,
            report.rating,
            ",".join(tech_stack),
        )
        return report


def analyze(
    owner: str, name: str, random_source: Optional[RandomSource] = None
) -> AnalysisReport:
    """Convenience wrapper around :meth:`AnalysisEngine.analyze`."""
    return AnalysisEngine(random_source).analyze(owner, name)
