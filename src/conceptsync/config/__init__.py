"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, positive_int_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError, SeedFileError
from .http_resilience import RateLimit, ResilienceConfig
from .logging import configure_logging
from .ocl import OclConfig, get_ocl_config, normalize_path

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "OclConfig",
    "RateLimit",
    "ResilienceConfig",
    "SeedFileError",
    "configure_logging",
    "get_ocl_config",
    "normalize_path",
    "optional_env_var",
    "positive_int_env_var",
    "require_env_vars",
]
