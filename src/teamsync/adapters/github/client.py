"""GitHub REST client implementing the directory and commit lookup ports."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from teamsync.adapters.http_resilience import ResilientClient
from teamsync.domain.model import (
    ActualMember,
    DirectoryErrorKind,
    PendingInvitation,
    RemoteIdentity,
    Team,
)
from teamsync.domain.ports import DirectoryError

from .schema import (
    GitHubBaseModel,
    GitHubCommit,
    GitHubErrorResponse,
    GitHubInvitation,
    GitHubTeam,
    GitHubUser,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from types import TracebackType

    from teamsync.config.github import GitHubConfig
    from teamsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

PAGE_SIZE = 100


def _error_kind(response: httpx.Response) -> DirectoryErrorKind:
    status = response.status_code
    if status == httpx.codes.NOT_FOUND:
        return DirectoryErrorKind.NOT_FOUND
    if status == httpx.codes.FORBIDDEN and response.headers.get("x-ratelimit-remaining") == "0":
        return DirectoryErrorKind.TRANSIENT
    if status in {
        httpx.codes.UNAUTHORIZED,
        httpx.codes.FORBIDDEN,
        httpx.codes.UNPROCESSABLE_ENTITY,
    }:
        return DirectoryErrorKind.PERMISSION
    return DirectoryErrorKind.TRANSIENT


def _error_message(response: httpx.Response) -> str:
    try:
        detail = GitHubErrorResponse.model_validate(response.json()).message
    except (ValueError, ValidationError):
        detail = response.reason_phrase
    request = response.request
    status = response.status_code
    return f"GitHub {request.method} {request.url.path} failed with {status}: {detail}"


class GitHubClient:
    """Synchronous facade over the async resilient client.

    Implements both ``DirectoryClient`` and ``CommitAuthorLookup``.

    All calls of one run share one event loop and one HTTP client, so requests
    are issued strictly one after another. Use as a context manager, or call
    :meth:`close` when done.
    """

    def __init__(
        self,
        *,
        config: GitHubConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._runner = asyncio.Runner()
        self._http: ResilientClient | None = None

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._http is not None:
            self._runner.run(self._http.aclose())
            self._http = None
        self._runner.close()

    # DirectoryClient

    def get_team(self, team_id: int) -> Team:
        payload = self._run(self._get_json(f"teams/{team_id}"))
        return _team(self._validate(GitHubTeam, payload))

    def list_teams(self, organization: str) -> list[Team]:
        payloads = self._run(self._get_pages(f"orgs/{quote(organization, safe='')}/teams"))
        return [_team(self._validate(GitHubTeam, payload)) for payload in payloads]

    def list_members(self, team: Team) -> list[ActualMember]:
        payloads = self._run(self._get_pages(f"teams/{team.id}/members"))
        members: list[ActualMember] = []
        for payload in payloads:
            user = self._validate(GitHubUser, payload)
            members.append(ActualMember(id=user.id, name=user.login))
        return members

    def list_pending_invitations(self, organization: str) -> list[PendingInvitation]:
        payloads = self._run(self._get_pages(f"orgs/{quote(organization, safe='')}/invitations"))
        invitations: list[PendingInvitation] = []
        for payload in payloads:
            invitation = self._validate(GitHubInvitation, payload)
            if invitation.login is not None:
                invitations.append(PendingInvitation(name=invitation.login))
        return invitations

    def lookup_user(self, name: str) -> RemoteIdentity:
        payload = self._run(self._get_json(f"users/{quote(name, safe='')}"))
        user = self._validate(GitHubUser, payload)
        return RemoteIdentity(name=user.login, id=user.id)

    def add_member(self, team: Team, name: str) -> None:
        path = f"teams/{team.id}/memberships/{quote(name, safe='')}"
        self._run(self._send("PUT", path, json={"role": "member"}))

    def remove_member(self, team: Team, name: str) -> None:
        path = f"teams/{team.id}/memberships/{quote(name, safe='')}"
        self._run(self._send("DELETE", path))

    # CommitAuthorLookup

    def get_commit_author(self, revision: str) -> RemoteIdentity | None:
        owner = quote(self._config.commit_owner, safe="")
        repo = quote(self._config.commit_repo, safe="")
        payload = self._run(self._get_json(f"repos/{owner}/{repo}/commits/{revision}"))
        commit = self._validate(GitHubCommit, payload)
        if commit.author is None:
            return None
        return RemoteIdentity(name=commit.author.login, id=commit.author.id)

    # plumbing

    def _run[T](self, coro: Coroutine[object, object, T]) -> T:
        return self._runner.run(coro)

    async def _client(self) -> ResilientClient:
        if self._http is None:
            if self._resilience.base_url is None:
                raise DirectoryError(
                    "Missing GitHub base_url in resilience configuration",
                    kind=DirectoryErrorKind.PERMISSION,
                )
            self._http = self._client_factory(self._resilience)
        return self._http

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        client = await self._client()
        try:
            response = await client.request(method, url, params=params, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise DirectoryError(
                _error_message(exc.response), kind=_error_kind(exc.response)
            ) from exc
        except httpx.HTTPError as exc:
            raise DirectoryError(
                f"GitHub {method} {url} failed: {exc}", kind=DirectoryErrorKind.TRANSIENT
            ) from exc
        return response

    async def _get_json(self, url: str) -> object:
        response = await self._send("GET", url)
        return _decode(response)

    async def _get_pages(self, url: str) -> list[object]:
        items: list[object] = []
        next_url: str | None = url
        params: dict[str, str] | None = {"per_page": str(PAGE_SIZE)}
        while next_url is not None:
            response = await self._send("GET", next_url, params=params)
            payload = _decode(response)
            if not isinstance(payload, list):
                raise DirectoryError(
                    f"Expected a list from {next_url}", kind=DirectoryErrorKind.TRANSIENT
                )
            items.extend(payload)
            # the next link already carries the query string
            next_url = response.links.get("next", {}).get("url")
            params = None
        return items

    @staticmethod
    def _validate[M: GitHubBaseModel](model: type[M], payload: object) -> M:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            log.error("Unexpected GitHub %s payload: %s", model.__name__, exc)
            raise DirectoryError(
                f"Unexpected GitHub {model.__name__} payload", kind=DirectoryErrorKind.TRANSIENT
            ) from exc


def _decode(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise DirectoryError(
            f"GitHub returned invalid JSON for {response.request.url.path}",
            kind=DirectoryErrorKind.TRANSIENT,
        ) from exc


def _team(payload: GitHubTeam) -> Team:
    return Team(id=payload.id, name=payload.name, slug=payload.slug)

