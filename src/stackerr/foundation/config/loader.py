"""Stackerr configuration management.

Loads configuration from .stackerr/config.yaml with sensible defaults.
All settings can be overridden via environment variables (STACKERR_*).

Config locations (in priority order):
1. Environment variables (STACKERR_LOG_LEVEL, STACKERR_DEBUG, ...)
2. Explicit path passed to load_config()
3. .stackerr/config.yaml (project-local)
4. ~/.stackerr/config.yaml (user-global)
5. Built-in defaults

Configuration only affects the logging and CLI layers. Error constructors
never read it, so creating an error never touches the filesystem.

Thread Safety:
    Uses threading.Lock for thread-safe lazy initialization in
    free-threaded Python (3.14t).
"""

import logging
import os
import threading
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from stackerr.foundation.errors import ConfigError, ErrorCode, config_error

logger = logging.getLogger(__name__)

_ENV_PREFIX = "STACKERR_"
TRUTHY = frozenset({"true", "1", "yes", "on"})
FALSY = frozenset({"false", "0", "no", "off"})
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_RENDER_CHOICES = ("verbose", "compact")


@dataclass(frozen=True, slots=True)
class StackerrConfig:
    """Root configuration for stackerr."""

    log_level: str = "WARNING"
    """Console log level used by configure_logging()."""

    debug: bool = False
    """Enable DEBUG logging with the detailed format."""

    log_render: str = "verbose"
    """How PathFormatter renders captured paths: "verbose" or "compact"."""

    chain_in_logs: bool = True
    """Render the captured path of every layer in the cause chain."""


# Global config instance (lazy-loaded, thread-safe)
_config: StackerrConfig | None = None
_config_lock = threading.Lock()


def _default_paths() -> list[Path]:
    return [
        Path(".stackerr/config.yaml"),
        Path.home() / ".stackerr" / "config.yaml",
    ]


def _validate(data: dict[str, Any], source: str) -> None:
    """Check keys and value types against StackerrConfig."""
    field_types = {f.name: f.type for f in fields(StackerrConfig)}
    for key, value in data.items():
        expected = field_types.get(key)
        if expected is None:
            raise config_error(ErrorCode.CONFIG_UNKNOWN_KEY, path=source, key=key)
        if not isinstance(value, expected):
            raise config_error(
                ErrorCode.CONFIG_INVALID_VALUE,
                path=source,
                key=key,
                detail=f"expected {expected.__name__}, got {type(value).__name__}",
            )

    if "log_render" in data and data["log_render"] not in _RENDER_CHOICES:
        raise config_error(
            ErrorCode.CONFIG_INVALID_VALUE,
            path=source,
            key="log_render",
            detail=f"must be one of {', '.join(_RENDER_CHOICES)}",
        )
    if "log_level" in data and data["log_level"].upper() not in _LOG_LEVELS:
        raise config_error(
            ErrorCode.CONFIG_INVALID_VALUE,
            path=source,
            key="log_level",
            detail=f"must be one of {', '.join(_LOG_LEVELS)}",
        )


def _read_file(path: Path) -> dict[str, Any]:
    """Read and validate one YAML config file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise config_error(
            ErrorCode.CONFIG_UNREADABLE, path=str(path), detail=str(e), cause=e
        ) from e

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise config_error(
            ErrorCode.CONFIG_INVALID_YAML, path=str(path), detail=str(e), cause=e
        ) from e

    if not isinstance(data, dict):
        raise config_error(
            ErrorCode.CONFIG_INVALID_YAML,
            path=str(path),
            detail="top level must be a mapping",
        )

    _validate(data, str(path))
    return data


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    Each field maps to STACKERR_<FIELD>, e.g. STACKERR_LOG_RENDER=compact.
    Boolean fields accept true/false, 1/0, yes/no, on/off.
    """
    overrides: dict[str, Any] = {}
    for f in fields(StackerrConfig):
        var = _ENV_PREFIX + f.name.upper()
        raw = os.environ.get(var)
        if raw is None:
            continue

        if f.type is bool:
            lowered = raw.strip().lower()
            if lowered in TRUTHY:
                overrides[f.name] = True
            elif lowered in FALSY:
                overrides[f.name] = False
            else:
                raise config_error(
                    ErrorCode.CONFIG_INVALID_VALUE,
                    path=var,
                    key=f.name,
                    detail=f"expected a boolean, got {raw!r}",
                )
        else:
            overrides[f.name] = raw.strip()

    _validate(overrides, "environment")
    config_dict.update(overrides)
    return config_dict


def load_config(path: str | Path | None = None) -> StackerrConfig:
    """Load configuration from file with defaults and env overrides.

    An explicit path must exist and be valid. Invalid files found in the
    default locations are skipped with a warning.

    Args:
        path: Optional explicit config file path.

    Returns:
        Merged StackerrConfig instance.

    Raises:
        ConfigError: If the explicit file is missing or invalid, or an
            environment override has the wrong type.
    """
    global _config

    config_dict: dict[str, Any] = asdict(StackerrConfig())

    if path is not None:
        explicit = Path(path)
        if not explicit.exists():
            raise config_error(ErrorCode.FILE_NOT_FOUND, path=str(explicit))
        config_dict.update(_read_file(explicit))
    else:
        for candidate in _default_paths():
            if not candidate.exists():
                continue
            try:
                config_dict.update(_read_file(candidate))
            except ConfigError as e:
                logger.warning("Skipping config file %s: %s", candidate, e.message)
                continue
            break  # Use first valid config

    config_dict = _apply_env_overrides(config_dict)

    _config = StackerrConfig(**config_dict)
    return _config


def get_config() -> StackerrConfig:
    """Get the current configuration, loading if needed.

    Thread-safe with double-check locking for free-threaded Python.
    """
    global _config

    # Fast path: already initialized
    if _config is not None:
        return _config

    # Slow path: acquire lock, double-check, load
    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def reset_config() -> None:
    """Reset the global config (useful for testing).

    Thread-safe for free-threaded Python.
    """
    global _config
    with _config_lock:
        _config = None


def save_default_config(path: str | Path = ".stackerr/config.yaml") -> Path:
    """Save the default configuration to a file.

    Args:
        path: Where to save the config.

    Returns:
        Path to the saved config file.
    """
    defaults = StackerrConfig()
    config_content = f"""# stackerr configuration
#
# Every key is optional; delete any you don't want to override.
# Environment variables (STACKERR_LOG_LEVEL, STACKERR_DEBUG, ...) win over
# this file.

# Console log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
log_level: {defaults.log_level}

# Shortcut for DEBUG logging with timestamps
debug: {str(defaults.debug).lower()}

# How captured paths appear under logged exceptions:
#   verbose - every frame (name, then tab-indented file:line)
#   compact - only the innermost frame of each layer
log_render: {defaults.log_render}

# Include captured paths from every wrapped layer, not just the outermost
chain_in_logs: {str(defaults.chain_in_logs).lower()}
"""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config_content)
    return path
