"""Load the desired membership from a maintainer list."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from teamsync.domain.model import MaintainerRecord

from .evaluate import NixEvaluationError, instantiate_expr, instantiate_file

if TYPE_CHECKING:
    from pathlib import Path

    from teamsync.domain.model import Handle

log = getLogger(__name__)

# Maps every handle to the (one-based) line its attribute is defined on.
_POSITIONS_EXPR = """
{ maintainerFile }:
let
  maintainers = import maintainerFile;
  handles = builtins.attrNames maintainers;
in builtins.listToAttrs
(builtins.map
  (handle: {
    name = handle;
    value = (builtins.unsafeGetAttrPos handle maintainers).line;
   })
  handles)
"""


class MaintainerSourceError(RuntimeError):
    """Raised when the maintainer list cannot be read or parsed."""


class MaintainerEntry(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    email: str | None = None
    name: str | None = None
    github: str | None = None
    github_id: int | None = Field(default=None, alias="githubId", ge=0)


_ENTRIES = TypeAdapter(dict[str, MaintainerEntry])
_POSITIONS = TypeAdapter(dict[str, int])


def _read_source(path: Path) -> object:
    if path.suffix == ".json":
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise MaintainerSourceError(f"Cannot read maintainer list {path}: {exc}") from exc
    try:
        return instantiate_file(path)
    except NixEvaluationError as exc:
        raise MaintainerSourceError(f"Cannot evaluate maintainer list {path}: {exc}") from exc


def load_maintainers(path: Path) -> dict[Handle, MaintainerRecord]:
    """Return the maintainer list at ``path`` keyed by handle.

    ``.json`` files are read as-is; anything else is evaluated with Nix.
    """

    log.info("Loading maintainer information from %s", path.resolve())
    try:
        entries = _ENTRIES.validate_python(_read_source(path))
    except ValidationError as exc:
        raise MaintainerSourceError(f"Malformed maintainer list {path}: {exc}") from exc

    return {
        handle: MaintainerRecord(
            handle=handle,
            name=entry.github,
            id=entry.github_id,
            display_name=entry.name,
            email=entry.email,
        )
        for handle, entry in entries.items()
    }


def maintainer_positions(path: Path) -> dict[Handle, int]:
    """Return the zero-based line each handle is defined on in ``path``."""

    try:
        raw = instantiate_expr(_POSITIONS_EXPR, {"maintainerFile": path})
        positions = _POSITIONS.validate_python(raw)
    except (NixEvaluationError, ValidationError) as exc:
        raise MaintainerSourceError(f"Cannot locate handles in {path}: {exc}") from exc
    return {handle: line - 1 for handle, line in positions.items()}
