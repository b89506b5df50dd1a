"""Data models for repository analysis — immutable records of one report.

Every field is a plain value or a tuple of plain values so a report can be
serialised to the ``/analyze`` JSON payload and read back without any
schema machinery. Wire names are camelCase; attribute names are snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

GITHUB_BASE_URL = "https://github.com"


@dataclass(frozen=True)
class RepositoryRef:
    """Owner/name pair identifying a GitHub repository."""

    owner: str
    name: str

    def __post_init__(self) -> None:
        for label, value in (("owner", self.owner), ("name", self.name)):
            if not value or "/" in value:
                raise ValueError(f"repository {label} must be non-empty and contain no '/'")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def url(self) -> str:
        return f"{GITHUB_BASE_URL}/{self.owner}/{self.name}"


@dataclass(frozen=True)
class RepoStats:
    files: int
    commits: int
    branches: int
    languages: int

    def to_dict(self) -> dict[str, int]:
        return {
            "files": self.files,
            "commits": self.commits,
            "branches": self.branches,
            "languages": self.languages,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RepoStats:
        return cls(
            files=_as_int(data, "files"),
            commits=_as_int(data, "commits"),
            branches=_as_int(data, "branches"),
            languages=_as_int(data, "languages"),
        )


@dataclass(frozen=True)
class QualityMetrics:
    """Six sub-scores, each a fixed offset from the overall score.

    Values are not clamped and may leave the 0-100 range.
    """

    code_quality: int
    project_structure: int
    documentation: int
    test_coverage: int
    commit_history: int
    tech_stack: int

    def to_dict(self) -> dict[str, int]:
        return {
            "codeQuality": self.code_quality,
            "projectStructure": self.project_structure,
            "documentation": self.documentation,
            "testCoverage": self.test_coverage,
            "commitHistory": self.commit_history,
            "techStack": self.tech_stack,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QualityMetrics:
        return cls(
            code_quality=_as_int(data, "codeQuality"),
            project_structure=_as_int(data, "projectStructure"),
            documentation=_as_int(data, "documentation"),
            test_coverage=_as_int(data, "testCoverage"),
            commit_history=_as_int(data, "commitHistory"),
            tech_stack=_as_int(data, "techStack"),
        )


@dataclass(frozen=True)
class RoadmapItem:
    title: str
    priority: str
    description: str
    icon: str

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "priority": self.priority,
            "description": self.description,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RoadmapItem:
        return cls(
            title=_as_str(data, "title"),
            priority=_as_str(data, "priority"),
            description=_as_str(data, "description"),
            icon=_as_str(data, "icon"),
        )


@dataclass(frozen=True)
class AnalysisReport:
    """Complete, immutable result of one engine run."""

    overall_score: int
    rating: str
    summary: str
    stats: RepoStats
    metrics: QualityMetrics
    roadmap: tuple[RoadmapItem, ...]
    tech_stack: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the ``/analyze`` response body."""
        return {
            "overallScore": self.overall_score,
            "rating": self.rating,
            "summary": self.summary,
            "stats": self.stats.to_dict(),
            "metrics": self.metrics.to_dict(),
            "roadmap": [item.to_dict() for item in self.roadmap],
            "techStack": list(self.tech_stack),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysisReport:
        """Parse an ``/analyze`` response body.

        Raises:
            ValueError: If any field is missing or has the wrong type. A report
                is all-or-nothing, so nothing is defaulted.
        """
        if not isinstance(data, Mapping):
            raise ValueError("report must be a JSON object")
        roadmap = data.get("roadmap")
        tech_stack = data.get("techStack")
        if not isinstance(roadmap, list):
            raise ValueError("field 'roadmap' must be a list")
        if not isinstance(tech_stack, list) or not all(isinstance(t, str) for t in tech_stack):
            raise ValueError("field 'techStack' must be a list of strings")
        return cls(
            overall_score=_as_int(data, "overallScore"),
            rating=_as_str(data, "rating"),
            summary=_as_str(data, "summary"),
            stats=RepoStats.from_dict(_as_mapping(data.get("stats"), "stats")),
            metrics=QualityMetrics.from_dict(_as_mapping(data.get("metrics"), "metrics")),
            roadmap=tuple(RoadmapItem.from_dict(_as_mapping(item, "roadmap")) for item in roadmap),
            tech_stack=tuple(tech_stack),
        )


@dataclass(frozen=True)
class AnalysisResult:
    """A report bound to the repository it describes, ready for display."""

    repository: RepositoryRef
    report: AnalysisReport

    @property
    def repo_full_name(self) -> str:
        return self.repository.full_name

    @property
    def repo_url(self) -> str:
        return self.repository.url

    def to_dict(self) -> dict[str, Any]:
        data = self.report.to_dict()
        data.update(
            {
                "repoName": self.repository.name,
                "repoOwner": self.repository.owner,
                "repoFullName": self.repo_full_name,
                "repoUrl": self.repo_url,
            }
        )
        return data


# ── Field coercion helpers ──────────────────────────────────────────────


def _as_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    # bool is an int subclass; reject it explicitly
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"field '{key}' must be an integer")
    return value


def _as_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string")
    return value


def _as_mapping(value: Any, key: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"field '{key}' must be an object")
    return value
