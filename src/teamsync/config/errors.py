"""Configuration error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """Raised when a configuration value is present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required settings are absent or blank.

    ``names`` lists the environment variables (or files) that were looked at.
    """

    def __init__(self, names: Iterable[str], *, hint: str | None = None) -> None:
        self.names = tuple(sorted(names))
        message = f"Missing configuration for: {', '.join(self.names)}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)
