"""Keyword-based tech stack detection from a repository name."""

from __future__ import annotations

from typing import Tuple

# Ordered: the first keyword contained in the name wins, even when a later
# one also matches ("react-next-app" resolves to react).
TECH_STACK_BUCKETS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("react", ("React", "JavaScript", "JSX")),
    ("next", ("Next.js", "React", "Node.js")),
    ("api", ("Node.js", "Express", "REST API")),
    ("ml", ("Python", "Machine Learning", "NumPy")),
)

DEFAULT_BUCKET = "default"
DEFAULT_TECH_STACK: Tuple[str, ...] = ("JavaScript", "HTML", "CSS")


def match_bucket(repo_name: str) -> str:
    """Return the keyword of the first bucket matching *repo_name*."""
    lowered = repo_name.lower()
    for keyword, _ in TECH_STACK_BUCKETS:
        if keyword in lowered:
            return keyword
    return DEFAULT_BUCKET


def resolve_tech_stack(repo_name: str) -> Tuple[str, ...]:
    keyword = match_bucket(repo_name)
    return dict(TECH_STACK_BUCKETS).get(keyword, DEFAULT_TECH_STACK)
