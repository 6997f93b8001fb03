"""Configuration management for Archivist."""

from .loader import Config, apply_env_overrides, load_config, save_config
from .models import (
    AuthorConfig,
    ConfigModel,
    FilterConfig,
    SearchConfig,
    StorageConfig,
    VerificationConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "AuthorConfig",
    "SearchConfig",
    "VerificationConfig",
    "FilterConfig",
    "StorageConfig",
    "apply_env_overrides",
    "load_config",
    "save_config",
]
