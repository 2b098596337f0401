"""Pydantic models describing the GitHub REST payloads we consume."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GitHubUser(GitHubBaseModel):
    login: str
    id: int = Field(ge=0)


class GitHubTeam(GitHubBaseModel):
    id: int
    name: str
    slug: str | None = None


class GitHubInvitation(GitHubBaseModel):
    id: int
    # email-only invitations carry no login
    login: str | None = None


class GitHubCommit(GitHubBaseModel):
    sha: str
    # null when the commit email is not linked to an account
    author: GitHubUser | None = None


class GitHubErrorResponse(GitHubBaseModel):
    message: str
    documentation_url: str | None = None
