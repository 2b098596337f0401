"""Async HTTP client with retries, client-side throttling and an optional response cache."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from teamsync.common.storage import get_http_cache_path
from teamsync.config.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    ShouldCacheHook,
)

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

__all__ = [
    "CacheConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]

log = getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.attempts,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=sorted(policy.idempotent_methods),
        status_forcelist=sorted(policy.retry_statuses),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.jitter,
    )


class ResilientClient:
    """One ``httpx.AsyncClient`` behind a retrying transport and a rate limiter.

    Retries issued by the transport do not pass through the limiter.
    """

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        self._client = _build_client(config)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        if self._limiter is None:
            response = await self._client.request(method, url, params=params, json=json)
        else:
            async with self._limiter:
                response = await self._client.request(method, url, params=params, json=json)
        self._check_quota(response)
        return response

    def _check_quota(self, response: httpx.Response) -> None:
        threshold = self.config.quota_warning_threshold
        remaining = response.headers.get("x-ratelimit-remaining")
        if threshold is None or remaining is None or not remaining.isdigit():
            return
        if int(remaining) < threshold:
            log.warning(
                "%s quota running low: %s requests left, resets at %s",
                self.config.name,
                remaining,
                response.headers.get("x-ratelimit-reset", "unknown"),
            )


def _build_client(config: ResilienceConfig) -> httpx.AsyncClient:
    transport = RetryTransport(retry=build_retry(config.retry))
    headers = dict(config.default_headers or {})
    base_url = config.base_url or ""

    if config.cache is None:
        return httpx.AsyncClient(
            base_url=base_url,
            timeout=config.timeout_seconds,
            headers=headers,
            transport=transport,
        )

    storage, policy = _build_cache_components(config.cache)
    return AsyncCacheClient(
        base_url=base_url,
        timeout=config.timeout_seconds,
        headers=headers,
        transport=transport,
        storage=storage,
        policy=policy,
    )


class _PayloadFilter(BaseFilter[HishelCacheResponse]):
    """Cache only responses whose decoded JSON body satisfies ``predicate``."""

    def __init__(self, predicate: ShouldCacheHook) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if not body:
            return False
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return bool(self._predicate(payload))


def _build_cache_components(cache: CacheConfig) -> tuple[AsyncSqliteStorage, FilterPolicy | None]:
    database_path = cache.path or get_http_cache_path()
    storage = AsyncSqliteStorage(
        database_path=str(database_path),
        default_ttl=cache.ttl_seconds,
        refresh_ttl_on_access=cache.refresh_ttl_on_access,
    )
    if cache.should_cache is None:
        return storage, None
    return storage, FilterPolicy(response_filters=[_PayloadFilter(cache.should_cache)])
