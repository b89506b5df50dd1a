"""The improvement roadmap attached to every report.

Identical for all repositories and always in this order; it is not
ranked by score.
"""

from __future__ import annotations

from typing import Tuple

from ..models import RoadmapItem

HIGH_PRIORITY = "High Priority"
MEDIUM_PRIORITY = "Medium Priority"
SUGGESTED = "Suggested"

DEFAULT_ROADMAP: Tuple[RoadmapItem, ...] = (
    RoadmapItem(
        title="Improve README documentation",
        priority=HIGH_PRIORITY,
        description=(
            "Add a clear project overview, setup instructions, and usage examples to help "
            "reviewers and collaborators understand the project quickly."
        ),
        icon="readme",
    ),
    RoadmapItem(
        title="Add unit and integration tests",
        priority=HIGH_PRIORITY,
        description=(
            "Introduce testing using Jest or similar frameworks to ensure reliability and "
            "long-term maintainability."
        ),
        icon="linting",
    ),
    RoadmapItem(
        title="Refactor folder structure",
        priority=MEDIUM_PRIORITY,
        description=(
            "Organize components, services, and utilities into dedicated folders for better "
            "scalability."
        ),
        icon="package",
    ),
    RoadmapItem(
        title="Adopt Git best practices",
        priority=MEDIUM_PRIORITY,
        description=(
            "Use feature branches, meaningful commit messages, and pull requests to reflect "
            "professional workflows."
        ),
        icon="gitignore",
    ),
    RoadmapItem(
        title="Add CI/CD pipeline",
        priority=SUGGESTED,
        description=(
            "Automate testing and linting using GitHub Actions to improve code quality and "
            "deployment readiness."
        ),
        icon="license",
    ),
)


def build_roadmap() -> Tuple[RoadmapItem, ...]:
    return DEFAULT_ROADMAP
