"""Thin wrappers around ``nix-instantiate --eval --strict --json``."""

from __future__ import annotations

import json
import subprocess
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

log = getLogger(__name__)

NIX_INSTANTIATE = "nix-instantiate"
_EVAL_FLAGS = ("--eval", "--strict", "--json")


class NixEvaluationError(RuntimeError):
    """Raised when nix-instantiate cannot be run or fails to evaluate."""


def instantiate_file(path: Path) -> object:
    """Evaluate the Nix file at ``path`` and return the decoded JSON value."""

    return _run([NIX_INSTANTIATE, *_EVAL_FLAGS, str(path)])


def instantiate_expr(expr: str, args: Mapping[str, Path]) -> object:
    """Evaluate the function ``expr`` with path-valued ``--arg`` arguments."""

    command = [NIX_INSTANTIATE, *_EVAL_FLAGS, "--expr", expr]
    for name, value in args.items():
        command.extend(["--arg", name, str(value.resolve())])
    return _run(command)


def _run(command: list[str]) -> object:
    try:
        completed = subprocess.run(command, capture_output=True, check=False)  # noqa: S603
    except OSError as exc:
        raise NixEvaluationError(f"Failed to start {command[0]}: {exc}") from exc

    stderr = completed.stderr.decode("utf-8", errors="replace").strip()
    if stderr:
        log.warning("Stderr from nix-instantiate: %s", stderr)
    if completed.returncode != 0:
        raise NixEvaluationError(f"nix-instantiate exited with {completed.returncode}: {stderr}")

    try:
        return json.loads(completed.stdout)
    except json.JSONDecodeError as exc:
        raise NixEvaluationError(f"nix-instantiate produced invalid JSON: {exc}") from exc
