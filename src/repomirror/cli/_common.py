"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import PHASE_COUNT, MirrorConfig, load_config

console = Console()

EXAMPLE_REPOS = (
    "facebook/react",
    "vercel/next.js",
    "tailwindlabs/tailwindcss",
)


def resolve_config(
    config: Optional[Path] = None,
    api_url: Optional[str] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    instant: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> MirrorConfig:
    """Build configuration from CLI options."""
    overrides = {
        "api_url": api_url,
        "host": host,
        "port": port,
        "verbose": verbose,
        "quiet": quiet,
    }
    if instant:
        overrides["phase_delays"] = (0.0,) * PHASE_COUNT
        overrides["min_display_seconds"] = 0.0
    return load_config(config_file=config, **overrides)
