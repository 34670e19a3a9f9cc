"""
Matcher — finds every occurrence of a pattern in a set of files and
records where each one lives.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from tqdm import tqdm

from ..errors import PatternError
from .match import Match

logger = logging.getLogger(__name__)


def compile_pattern(
    pattern: str,
    ignore_case: bool = False,
    encoding: str = "utf-8",
) -> re.Pattern[bytes]:
    """Compile *pattern* into a regex that operates on raw file bytes.

    Raises
    ------
    PatternError
        If the pattern is not a valid regular expression.
    """
    flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(pattern.encode(encoding), flags)
    except re.error as exc:
        raise PatternError(f"invalid pattern {pattern!r}: {exc}") from exc


class Matcher:
    """Locate all matches of a compiled pattern in file contents."""

    def __init__(self, pattern: re.Pattern[bytes]) -> None:
        self._pattern = pattern

    def find(self, path: str, content: bytes) -> list[Match]:
        """Return the matches of the pattern in *content*, in scan order.

        Parameters
        ----------
        path:
            Identifier recorded on each match; not opened here.
        content:
            Raw file bytes to scan.
        """
        return [
            Match(path=path, pos=m.start(), length=m.end() - m.start(),
                  data=m.group(0))
            for m in self._pattern.finditer(content)
        ]

    def find_path(self, path: str) -> list[Match]:
        """Read *path* and return its matches."""
        with open(path, "rb") as f:
            content = f.read()
        matches = self.find(path, content)
        logger.debug("[Match] %s: %d match(es)", path, len(matches))
        return matches

    def find_paths(
        self,
        paths: Iterable[str],
        progress: bool = False,
    ) -> list[Match]:
        """Return the matches of every path, concatenated in input order.

        The first unreadable path aborts the whole scan; its ``OSError``
        is raised and no matches are returned.
        """
        paths = list(paths)
        matches: list[Match] = []
        for path in tqdm(paths, unit="file", desc="Scanning",
                         disable=not progress, leave=False):
            matches.extend(self.find_path(path))

        logger.info(
            "[Match] %d match(es) across %d file(s)", len(matches), len(paths)
        )
        return matches
