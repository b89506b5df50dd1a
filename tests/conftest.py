"""Shared test fixtures for RepoMirror tests."""

import pytest

from repomirror.config import MirrorConfig
from repomirror.engine import AnalysisEngine, SequenceRandomSource


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def _draws(score, files, commits, branches):
    return [score - 65, files - 20, commits - 30, branches - 1]


@pytest.fixture
def engine_for():
    """Factory for engines whose next report has the given score and stats."""

    def _make(score=80, files=42, commits=100, branches=3, repeat=1):
        return AnalysisEngine(SequenceRandomSource(_draws(score, files, commits, branches) * repeat))

    return _make


@pytest.fixture
def fixed_engine(engine_for):
    """Engine whose next report has score 80, 42 files, 100 commits, 3 branches."""
    return engine_for()


@pytest.fixture
def fast_config():
    """Millisecond-scale timeline so session tests finish quickly."""
    return MirrorConfig(
        phase_delays=(0.01, 0.01, 0.01, 0.01, 0.01, 0.01),
        min_display_seconds=0.1,
    )


@pytest.fixture
def instant_config():
    """No timeline delays and no display floor."""
    return MirrorConfig(phase_delays=(0.0,) * 6, min_display_seconds=0.0)
