"""Errors raised while reading ``MDMGEN_*`` settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Base class for problems with ``MDMGEN_*`` settings."""


class InvalidConfigurationError(ConfigurationError):
    """Raised when an ``MDMGEN_*`` variable holds a value the run cannot use."""

    def __init__(self, name: str, value: str, expected: str) -> None:
        self.name = name
        self.value = value
        self.expected = expected
        super().__init__(f"Invalid value for {name}: {value!r} (expected {expected})")
