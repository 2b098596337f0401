"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def read_env(name: str) -> str | None:
    """Return the stripped value of ``name``; blank counts as unset."""

    value = os.getenv(name, "").strip()
    return value or None


def require_env_vars(names: Sequence[str], *, hint: str | None = None) -> dict[str, str]:
    values = {name: read_env(name) for name in names}
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise MissingConfigurationError(missing, hint=hint)
    return {name: value for name, value in values.items() if value is not None}


def require_env_var(name: str, *, hint: str | None = None) -> str:
    return require_env_vars([name], hint=hint)[name]


def optional_env_var(name: str, default: str) -> str:
    return read_env(name) or default
