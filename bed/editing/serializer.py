"""
Match serializer — writes matches as an editable text blob and parses the
edited blob back into matches.

Each match becomes one block::

    #bed:begin {"path":"file.txt","pos":10,"len":5}
    hello
    #bed:end

The header carries the span, the body carries the replacement data.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Iterable

from ..errors import MalformedHeaderError
from .match import Match

logger = logging.getLogger(__name__)

# Markers
_BEGIN = b"#bed:begin "
_END = b"#bed:end"

# The newline before the terminator is added by encode() and is not data.
_BLOCK_PATTERN = re.compile(
    rb"^#bed:begin ([^\n]*)\n(.*?)\n#bed:end(?=\n|\Z)",
    re.DOTALL | re.MULTILINE,
)
_STRAY_BEGIN_PATTERN = re.compile(rb"^#bed:begin ", re.MULTILINE)

_HEADER_ENCODING = "utf-8"
_HEADER_ERRORS = "surrogateescape"


class MatchSerializer:
    """Convert matches to and from the editable block format."""

    def encode(self, match: Match) -> bytes:
        """Return the block for a single match, ending with a newline."""
        header = json.dumps(
            match.header(), ensure_ascii=False, separators=(",", ":")
        ).encode(_HEADER_ENCODING, _HEADER_ERRORS)
        return b"".join((_BEGIN, header, b"\n", match.data, b"\n", _END, b"\n"))

    def encode_all(self, matches: Iterable[Match]) -> bytes:
        """Return the editable blob: every block followed by a blank line."""
        return b"".join(self.encode(m) + b"\n" for m in matches)

    def decode(self, text: bytes) -> list[Match]:
        """Parse every block in *text*, in document order.

        Text outside of blocks is ignored, so an empty blob (or one where
        the user deleted every block) yields no matches.

        Raises
        ------
        MalformedHeaderError
            If any header is invalid or a ``#bed:begin`` line has no
            terminator.  Nothing is returned in that case.
        """
        matches: list[Match] = []
        last_end = 0

        for block in _BLOCK_PATTERN.finditer(text):
            self._check_gap(text, last_end, block.start())
            last_end = block.end()

            path, pos, length = self._parse_header(block.group(1))
            matches.append(Match(
                path=path,
                pos=pos,
                length=length,
                data=block.group(2),
            ))

        self._check_gap(text, last_end, len(text))
        logger.debug("[Serialize] Decoded %d match(es)", len(matches))
        return matches

    # ------------------------------------------------------------------
    # Internal parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _check_gap(text: bytes, start: int, end: int) -> None:
        """Reject a begin marker that did not open a complete block."""
        stray = _STRAY_BEGIN_PATTERN.search(text, start, end)
        if stray is not None:
            line_no = text.count(b"\n", 0, stray.start()) + 1
            raise MalformedHeaderError(
                f"missing {_END.decode()} for block on line {line_no}"
            )

    @staticmethod
    def _parse_header(raw: bytes) -> tuple[str, int, int]:
        """Validate a header line and return ``(path, pos, len)``."""
        try:
            header = json.loads(raw.decode(_HEADER_ENCODING, _HEADER_ERRORS))
        except ValueError as exc:
            raise MalformedHeaderError(
                f"malformed header {raw!r}: {exc}"
            ) from exc

        if not isinstance(header, dict):
            raise MalformedHeaderError(
                f"malformed header {raw!r}: expected a JSON object"
            )

        path = header.get("path")
        if not isinstance(path, str) or not path:
            raise MalformedHeaderError(
                f"malformed header {raw!r}: 'path' must be a non-empty string"
            )

        values = []
        for key in ("pos", "len"):
            value = header.get(key)
            # bool is an int subclass; true/false are not offsets
            if (not isinstance(value, int) or isinstance(value, bool)
                    or value < 0):
                raise MalformedHeaderError(
                    f"malformed header {raw!r}: '{key}' must be a "
                    f"non-negative integer"
                )
            values.append(value)

        return path, values[0], values[1]
