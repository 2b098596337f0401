from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003

import pytest

from teamsync.adapters.nix import MaintainerSourceError, NixEvaluationError, load_maintainers
from teamsync.adapters.nix import maintainers as maintainers_module
from teamsync.domain.model import MaintainerRecord


def test_load_maintainers_reads_json_export(tmp_path: Path) -> None:
    path = tmp_path / "maintainers.json"
    path.write_text(
        json.dumps(
            {
                "alice": {
                    "email": "alice@example.org",
                    "github": "alice",
                    "githubId": 1,
                    "name": "Alice Liddell",
                    "keys": [{"fingerprint": "ABCD"}],
                },
                "bob": {"github": "bob"},
                "carol": {"email": "carol@example.org"},
            }
        )
    )

    result = load_maintainers(path)

    assert result["alice"] == MaintainerRecord(
        handle="alice",
        name="alice",
        id=1,
        display_name="Alice Liddell",
        email="alice@example.org",
    )
    assert result["bob"].identity is None
    assert result["carol"].name is None


@pytest.mark.parametrize(
    "content",
    ["not json", '{"alice": {"githubId": "one"}}', '{"alice": {"githubId": -1}}', "[]"],
)
def test_load_maintainers_rejects_malformed_input(tmp_path: Path, content: str) -> None:
    path = tmp_path / "maintainers.json"
    path.write_text(content)

    with pytest.raises(MaintainerSourceError):
        load_maintainers(path)


def test_load_maintainers_evaluates_nix_files(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    path = tmp_path / "maintainer-list.nix"
    evaluated: list[Path] = []

    def fake_instantiate(source: Path) -> object:
        evaluated.append(source)
        return {"bob": {"github": "bob", "githubId": 2}}

    monkeypatch.setattr(maintainers_module, "instantiate_file", fake_instantiate)

    result = load_maintainers(path)

    assert evaluated == [path]
    assert result["bob"].id == 2


def test_load_maintainers_wraps_evaluation_errors(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def failing(_: Path) -> object:
        raise NixEvaluationError("nix-instantiate exited with 1")

    monkeypatch.setattr(maintainers_module, "instantiate_file", failing)

    with pytest.raises(MaintainerSourceError):
        load_maintainers(tmp_path / "maintainer-list.nix")


def test_maintainer_positions_are_zero_based(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fake_expr(expr: str, args: dict[str, Path]) -> object:
        assert "unsafeGetAttrPos" in expr
        assert args == {"maintainerFile": tmp_path / "list.nix"}
        return {"alice": 3, "bob": 8}

    monkeypatch.setattr(maintainers_module, "instantiate_expr", fake_expr)

    assert maintainers_module.maintainer_positions(tmp_path / "list.nix") == {"alice": 2, "bob": 7}
