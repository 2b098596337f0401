"""Insert missing account ids into a maintainer list file.

Every line like::

    github = "1000101";

whose name has a looked-up id gains a sibling line with the same indentation::

    githubId = 791309;

The rewrite is purely textual so that comments and formatting survive.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

    from teamsync.domain.model import RemoteID

_GITHUB_LINE: Final = re.compile(r'^(?P<leading_space>\s+)github = "(?P<name>[^"]*)";$')


def backfill_file(ids: Mapping[str, RemoteID], text: str) -> str:
    """Return ``text`` with a ``githubId`` line after each name found in ``ids``.

    Names are matched case-insensitively and each id is inserted at most once.
    """

    remaining = {name.casefold(): value for name, value in ids.items()}
    output: list[str] = []
    for line in text.splitlines():
        output.append(f"{line}\n")
        match = _GITHUB_LINE.match(line)
        if match is None:
            continue
        value = remaining.pop(match.group("name").casefold(), None)
        if value is not None:
            output.append(f"{match.group('leading_space')}githubId = {value};\n")
    return "".join(output)
