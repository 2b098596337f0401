"""GitHub API configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .env import optional_env_var, require_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_COMMIT_REPOSITORY = "NixOS/nixpkgs"
GITHUB_API_VERSION = "2022-11-28"
QUOTA_WARNING_THRESHOLD = 100


def _is_commit_payload(payload: object) -> bool:
    # Commits are immutable; team, member and user payloads must never be served stale.
    return isinstance(payload, dict) and "sha" in payload and "commit" in payload


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    token: str
    resilience: ResilienceConfig
    commit_owner: str
    commit_repo: str


def read_credentials_file(path: Path) -> str:
    """Return the token stored on the first non-blank line of ``path``."""

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read credentials file {path}: {exc}") from exc
    for line in content.splitlines():
        if line.strip():
            return line.strip()
    raise MissingConfigurationError([str(path)], hint="the credentials file holds no token")


def parse_repository(value: str) -> tuple[str, str]:
    owner, sep, repo = value.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigurationError(f"Repository must look like 'owner/name', got {value!r}")
    return owner, repo


def get_github_config(*, credentials_file: Path | None = None) -> GitHubConfig:
    token = (
        read_credentials_file(credentials_file)
        if credentials_file is not None
        else require_env_var("GITHUB_TOKEN", hint="or pass --credentials")
    )
    base_url = optional_env_var("GITHUB_API_URL", DEFAULT_GITHUB_API_URL)
    owner, repo = parse_repository(
        optional_env_var("TEAMSYNC_COMMIT_REPOSITORY", DEFAULT_COMMIT_REPOSITORY)
    )

    resilience = ResilienceConfig(
        name="github",
        base_url=base_url,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        retry=RetryPolicy(attempts=4),
        cache=CacheConfig(should_cache=_is_commit_payload),
        default_headers={
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": "teamsync",
        },
        quota_warning_threshold=QUOTA_WARNING_THRESHOLD,
    )
    return GitHubConfig(token=token, resilience=resilience, commit_owner=owner, commit_repo=repo)
