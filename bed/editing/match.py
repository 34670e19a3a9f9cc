"""
Match record — a tracked byte span in a source file together with the
content that should replace it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Match:
    """A single occurrence of the pattern in a file.

    ``pos`` and ``length`` describe the original span ``[pos, pos + length)``
    in bytes.  ``data`` starts out as the matched bytes and is whatever the
    user left in the editor by the time the match is applied.
    """
    path: str
    pos: int
    length: int
    data: bytes = b""

    @property
    def end(self) -> int:
        return self.pos + self.length

    @property
    def delta(self) -> int:
        """Change in file size once this match is applied."""
        return len(self.data) - self.length

    def header(self) -> dict:
        return {"path": self.path, "pos": self.pos, "len": self.length}
