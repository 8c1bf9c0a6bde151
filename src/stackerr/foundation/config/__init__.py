"""Configuration management for stackerr."""

from stackerr.foundation.config.loader import (
    FALSY,
    TRUTHY,
    StackerrConfig,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)

__all__ = [
    "FALSY",
    "TRUTHY",
    "StackerrConfig",
    "get_config",
    "load_config",
    "reset_config",
    "save_default_config",
]
