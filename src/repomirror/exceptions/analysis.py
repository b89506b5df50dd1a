"""Analysis-related exceptions: input validation, transport, engine failures."""

from typing import Optional

from .base import RepoMirrorError


class ValidationError(RepoMirrorError):
    """Raised when a repository identifier cannot be parsed.

    Resolved entirely on the client: no request is sent for an input that
    fails validation.
    """

    def __init__(self, value: str, reason: str = "not a GitHub repository URL"):
        super().__init__(
            "Invalid GitHub URL. Please enter a valid repository URL.",
            details={"value": value, "reason": reason},
        )
        self.value = value
        self.reason = reason


class AnalysisError(RepoMirrorError):
    """Base class for failures that end a running session."""

    pass


class TransportError(AnalysisError):
    """Raised when the analysis request fails, times out or returns garbage."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        details = {"reason": reason}
        if status_code is not None:
            details["status_code"] = str(status_code)

        super().__init__("Failed to analyze repository. Please try again.", details=details)
        self.reason = reason
        self.status_code = status_code


class EngineError(AnalysisError):
    """Raised by an analysis engine that cannot produce a report.

    The mock engine never raises this; real analyzers would for missing
    repositories or rate limits.
    """

    def __init__(self, owner: str, name: str, reason: str):
        super().__init__(
            f"Analysis failed for {owner}/{name}",
            details={"repository": f"{owner}/{name}", "reason": reason},
        )
        self.owner = owner
        self.name = name
        self.reason = reason
