"""Report-generation engine."""

from .analyzer import SUMMARY, AnalysisEngine, analyze
from .random_source import NumpyRandomSource, RandomSource, SequenceRandomSource
from .roadmap import DEFAULT_ROADMAP
from .scoring import derive_metrics, rating_for
from .techstack import DEFAULT_TECH_STACK, TECH_STACK_BUCKETS, resolve_tech_stack

__all__ = [
    "AnalysisEngine",
    "analyze",
    "SUMMARY",
    "RandomSource",
    "NumpyRandomSource",
    "SequenceRandomSource",
    "DEFAULT_ROADMAP",
    "derive_metrics",
    "rating_for",
    "resolve_tech_stack",
    "TECH_STACK_BUCKETS",
    "DEFAULT_TECH_STACK",
]
