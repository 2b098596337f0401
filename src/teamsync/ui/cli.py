from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from teamsync.app import (
    backfill_ids,
    blame_authors,
    check_maintainer_handles,
    list_teams,
    sync_team,
)
from teamsync.common import configure_logging
from teamsync.config import SyncConfig

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="teamsync",
        description="Keep a GitHub team in line with the nixpkgs maintainer list",
    )
    parser.add_argument(
        "-m",
        "--maintainers",
        type=Path,
        help="Path to maintainer-list.nix (or an already evaluated JSON export)",
    )
    parser.add_argument(
        "-c",
        "--credentials",
        type=Path,
        help="File whose first line is the GitHub token (defaults to GITHUB_TOKEN)",
    )
    parser.add_argument(
        "--dump-metrics",
        action="store_true",
        help="Print the run's counters as JSON to stdout when done",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "check-handles",
        help="Report maintainers missing an account name or id",
    )
    subparsers.add_parser(
        "backfill-ids",
        help="Print the maintainer file with missing account ids filled in",
    )

    blame = subparsers.add_parser(
        "blame-author",
        help="Check recorded accounts against the authors who added them",
    )
    blame.add_argument(
        "--history-dir",
        type=Path,
        help=(
            "Directory of archived blame snapshots; the bundled one is empty, so without "
            "this only the live git blame of the maintainer file is consulted"
        ),
    )

    sync = subparsers.add_parser("sync-team", help="Synchronise a team with the maintainers")
    sync.add_argument("organization", help="Organization owning the team")
    sync.add_argument("team_id", type=int, help="Numeric id of the team")
    sync.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and log every change without mutating the team",
    )
    sync.add_argument(
        "--limit",
        type=int,
        help="Maximum number of additions and removals before stopping",
    )
    sync.add_argument(
        "--invited-list",
        type=Path,
        help="File of ids invited in earlier runs (created when missing)",
    )
    sync.add_argument(
        "--verify-provenance",
        action="store_true",
        help="Skip additions whose account claim disagrees with its commit author",
    )
    sync.add_argument(
        "--history-dir",
        type=Path,
        help=(
            "Directory of archived blame snapshots; the bundled one is empty, so without "
            "this only the live git blame of the maintainer file is consulted"
        ),
    )

    teams = subparsers.add_parser("list-teams", help="List the teams of an organization")
    teams.add_argument("organization", help="Organization to list")

    return parser.parse_args(list(argv))


def _build_sync_config(args: argparse.Namespace) -> SyncConfig:
    return SyncConfig(
        dry_run=args.dry_run,
        limit=args.limit,
        invited_list=args.invited_list,
        verify_provenance=args.verify_provenance,
        history_dir=args.history_dir,
    )


def _check_maintainers(args: argparse.Namespace) -> None:
    if args.command != "list-teams" and args.maintainers is None:
        raise ValueError(f"{args.command} needs --maintainers")


def _dump(payload: Mapping[str, object]) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, sort_keys=True) + "\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(verbose=parsed_args.verbose)
        settings = _build_sync_config(parsed_args) if parsed_args.command == "sync-team" else None
        _check_maintainers(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    maintainers: Path = parsed_args.maintainers
    credentials = parsed_args.credentials
    try:
        if parsed_args.command == "check-handles":
            report = check_maintainer_handles(maintainers_file=maintainers)
            if parsed_args.dump_metrics:
                _dump(asdict(report))
        elif parsed_args.command == "backfill-ids":
            sys.stdout.write(
                backfill_ids(maintainers_file=maintainers, credentials_file=credentials)
            )
        elif parsed_args.command == "blame-author":
            provenance = blame_authors(
                maintainers_file=maintainers,
                history_dir=parsed_args.history_dir,
                credentials_file=credentials,
            )
            for confidence, count in sorted(provenance.confidence.items()):
                log.info("%s: %s", confidence, count)
            log.info("unresolved: %s", provenance.unresolved)
            if parsed_args.dump_metrics:
                _dump({**provenance.confidence, "unresolved": provenance.unresolved})
        elif parsed_args.command == "sync-team":
            metrics = sync_team(
                maintainers_file=maintainers,
                organization=parsed_args.organization,
                team_id=parsed_args.team_id,
                settings=settings,
                credentials_file=credentials,
            )
            if parsed_args.dump_metrics:
                _dump(metrics.as_dict())
        elif parsed_args.command == "list-teams":
            for team in list_teams(
                organization=parsed_args.organization, credentials_file=credentials
            ):
                sys.stdout.write(f"{team.id:10} {team.name}\n")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
