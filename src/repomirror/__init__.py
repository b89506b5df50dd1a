"""
RepoMirror - GitHub Repository Quality Reports

Turns a GitHub repository URL into a quality report: an overall score and
rating, six sub-metrics, repository stats, a detected tech stack and an
improvement roadmap. Scores are synthesized by a mock engine; nothing is
cloned or measured.
"""

__version__ = "0.1.0"

from .engine import AnalysisEngine, analyze
from .models import AnalysisReport, AnalysisResult, RepositoryRef
from .parsing import parse_repository_url
from .session import AnalysisSession, AnalysisSessionController, SessionState

__all__ = [
    "analyze",  # Main entry point
    "AnalysisEngine",
    "AnalysisReport",
    "AnalysisResult",
    "RepositoryRef",
    "parse_repository_url",
    "AnalysisSession",
    "AnalysisSessionController",
    "SessionState",
]
