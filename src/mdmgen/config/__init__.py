"""Application configuration helpers."""

from __future__ import annotations

from .env import env_non_negative_int, optional_env_var
from .errors import ConfigurationError, InvalidConfigurationError
from .generation import GenerationConfig, get_generation_config
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "GenerationConfig",
    "InvalidConfigurationError",
    "configure_logging",
    "env_non_negative_int",
    "get_generation_config",
    "optional_env_var",
]
