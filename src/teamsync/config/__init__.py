"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, read_env, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .github import GitHubConfig, get_github_config, parse_repository, read_credentials_file
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .sync import HISTORY_MANIFEST_FILENAME, SyncConfig, bundled_history_dir

__all__ = [
    "HISTORY_MANIFEST_FILENAME",
    "CacheConfig",
    "ConfigurationError",
    "GitHubConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SyncConfig",
    "bundled_history_dir",
    "get_github_config",
    "optional_env_var",
    "parse_repository",
    "read_credentials_file",
    "read_env",
    "require_env_var",
    "require_env_vars",
]
