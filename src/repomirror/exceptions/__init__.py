"""Exception hierarchy for RepoMirror."""

from .analysis import AnalysisError, EngineError, TransportError, ValidationError
from .base import RepoMirrorError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "RepoMirrorError",
    "ValidationError",
    "AnalysisError",
    "TransportError",
    "EngineError",
    "ConfigurationError",
    "InvalidConfigError",
]
