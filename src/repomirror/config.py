"""Configuration loading and management for RepoMirror.

Configuration sources are merged in priority order:
    1. Defaults (defined in MirrorConfig)
    2. Global config (~/.repomirror.toml)
    3. Project config (./repomirror.toml)
    4. Explicit config file
    5. Environment variables (REPOMIRROR_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(port=5050)
    >>> config.port
    5050
    >>> config.phase_delays
    (0.8, 1.2, 1.0, 1.4, 0.9, 1.5)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, Tuple, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

PHASE_COUNT = 6


@dataclass(frozen=True)
class MirrorConfig:
    """Configuration for the analysis service and the session controller.

    Attributes:
        Service:
            host: Interface the ``/analyze`` service binds to
            port: Port the ``/analyze`` service binds to
            cors_origins: Origins allowed to call the service

        Client:
            api_url: Base URL the remote transport posts to
            request_timeout_seconds: Timeout for one ``/analyze`` request

        Session timeline:
            phase_delays: Seconds each of the six progress phases stays active
            min_display_seconds: Floor before a result or failure is committed

        Output control:
            verbosity: Logging verbosity level
    """

    # Service
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: Tuple[str, ...] = ("*",)

    # Client
    api_url: str = "http://localhost:5000"
    request_timeout_seconds: float = 30.0

    # Session timeline
    phase_delays: Tuple[float, ...] = (0.8, 1.2, 1.0, 1.4, 0.9, 1.5)
    min_display_seconds: float = 8.0

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 1 <= self.port <= 65535:
            raise ValueError("port must be between 1 and 65535")
        if not self.host:
            raise ValueError("host must not be empty")

        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError("api_url must be an http(s) URL")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")

        if isinstance(self.cors_origins, str) or not isinstance(self.cors_origins, (list, tuple)):
            raise ValueError("cors_origins must be a list of origins")
        object.__setattr__(self, "cors_origins", tuple(self.cors_origins))
        if not all(isinstance(origin, str) and origin for origin in self.cors_origins):
            raise ValueError("cors_origins entries must be non-empty strings")

        # TOML arrays arrive as lists
        object.__setattr__(self, "phase_delays", tuple(self.phase_delays))
        if len(self.phase_delays) != PHASE_COUNT:
            raise ValueError(f"phase_delays must have exactly {PHASE_COUNT} entries")
        if any(delay < 0 for delay in self.phase_delays):
            raise ValueError("phase_delays must be non-negative")
        if self.min_display_seconds < 0:
            raise ValueError("min_display_seconds must be non-negative")
        if self.min_display_seconds < self.timeline_seconds:
            raise ValueError(
                f"min_display_seconds ({self.min_display_seconds}) must cover the phase "
                f"timeline ({self.timeline_seconds:g}s)"
            )

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")

    @property
    def timeline_seconds(self) -> float:
        """Total time the phase timeline takes to play out."""
        return sum(self.phase_delays)

    @property
    def analyze_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/analyze"


def load_config(config_file: Optional[Path] = None, **overrides) -> MirrorConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated MirrorConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or the
            merged values fail validation
    """
    merged: dict = {}

    # 1. Global config
    global_config = Path.home() / ".repomirror.toml"
    if global_config.exists():
        merged.update(_load_toml_or_raise(global_config, "global config"))

    # 2. Project config
    project_config = Path.cwd() / "repomirror.toml"
    if project_config.exists():
        merged.update(_load_toml_or_raise(project_config, "project config"))

    # 3. Explicit config file
    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_or_raise(config_file, "config file"))

    # 4. Environment variables
    merged.update(_load_env_vars())

    # 5. CLI overrides; boolean verbosity flags become a level
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"
    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(merged) - set(MirrorConfig.__dataclass_fields__))
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    try:
        return MirrorConfig(**merged)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from REPOMIRROR_* environment variables.

    Supported environment variables:
        REPOMIRROR_HOST: str
        REPOMIRROR_PORT: int
        REPOMIRROR_API_URL: str
        REPOMIRROR_REQUEST_TIMEOUT_SECONDS: float
        REPOMIRROR_MIN_DISPLAY_SECONDS: float
        REPOMIRROR_VERBOSITY: quiet/normal/verbose

    List and tuple fields are file-only.
    """
    type_hints = get_type_hints(MirrorConfig)

    result: dict[str, Any] = {}

    for field_name in MirrorConfig.__dataclass_fields__:
        env_key = f"REPOMIRROR_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single string.

    Raises:
        ValueError: If value can't be parsed to the expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if origin in (list, tuple) or type_hint in (list, tuple):
        return None

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_or_raise(path: Path, label: str) -> dict:
    try:
        return _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {label} '{path}': {e}")


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
