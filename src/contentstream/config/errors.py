"""Configuration errors."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when an environment setting is present but unusable."""
