"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, optional_int_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .seed import SeedConfig, get_seed_config
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "SeedConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_database_uri",
    "get_seed_config",
    "get_storage_config",
    "optional_env_var",
    "optional_int_env_var",
]
