"""Shared logging helpers for teamsync."""

from __future__ import annotations

import logging

# Libraries that log every request at INFO; their chatter only helps when debugging.
_NOISY_LOGGERS = ("httpx", "httpcore", "hishel")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Send log records to stderr, keeping stdout free for command output.

    ``verbose`` switches teamsync to DEBUG and lets the HTTP stack log its
    requests; otherwise those libraries are limited to warnings.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
