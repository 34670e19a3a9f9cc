"""
Patch applier — splices edited match data back into the original files,
shifting the offsets of later matches as earlier ones grow or shrink.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass, field
from typing import Iterable

from ..errors import OverlappingSpanError, SpanOutOfRangeError
from .match import Match

logger = logging.getLogger(__name__)

_TMP_PREFIX = ".bed_tmp_"


@dataclass
class StagedFile:
    """The computed rewrite of one file, not yet written."""
    path: str
    old_content: bytes
    new_content: bytes
    mode: int
    matches_applied: int = 0

    @property
    def changed(self) -> bool:
        return self.old_content != self.new_content


@dataclass
class ApplyResult:
    """Summary of a committed set of matches."""
    files_modified: list[str] = field(default_factory=list)
    files_unchanged: list[str] = field(default_factory=list)
    matches_applied: int = 0


class PatchApplier:
    """Apply matches to files at their recorded byte offsets."""

    def apply(self, matches: Iterable[Match]) -> ApplyResult:
        """Rewrite every file referenced by *matches*.

        Matches are grouped by path.  Within a file they are applied in
        ascending order of their original ``pos``, an insertion at an
        offset going before a replacement starting there.

        All files are read and their new contents computed before anything
        is written, so an unreadable file or an invalid span leaves every
        file untouched.  Writes then happen one file at a time: if a write
        fails, files written before it keep their new content.

        Parameters
        ----------
        matches:
            Matches whose ``pos``/``length`` refer to the files as they
            were scanned and whose ``data`` is the replacement content.

        Returns
        -------
        ApplyResult
            Which files were rewritten and how many matches were applied.
        """
        return self.commit(self.stage(matches))

    def stage(self, matches: Iterable[Match]) -> list[StagedFile]:
        """Compute the new content of every affected file without writing.

        Raises
        ------
        OSError
            If a file cannot be read or stat'ed.
        OverlappingSpanError, SpanOutOfRangeError
            If a file's matches do not describe valid, disjoint spans.
        """
        staged: list[StagedFile] = []
        for path, group in group_by_path(matches).items():
            staged.append(self._stage_file(path, group))
        return staged

    def commit(self, staged: Iterable[StagedFile]) -> ApplyResult:
        """Write staged files to disk in order, stopping at the first failure."""
        result = ApplyResult()
        for sf in staged:
            result.matches_applied += sf.matches_applied
            if not sf.changed:
                logger.debug("[Patch] %s unchanged, not rewriting", sf.path)
                result.files_unchanged.append(sf.path)
                continue

            try:
                self._safe_write(sf.path, sf.new_content, sf.mode)
            except OSError as exc:
                logger.error(
                    "[Patch] Write failed for %s after %d file(s) written: %s",
                    sf.path, len(result.files_modified), exc,
                )
                raise
            logger.info(
                "[Patch] Rewrote %s (%d match(es), %+d bytes)",
                sf.path, sf.matches_applied,
                len(sf.new_content) - len(sf.old_content),
            )
            result.files_modified.append(sf.path)
        return result

    # ------------------------------------------------------------------
    # Single-file application
    # ------------------------------------------------------------------

    def _stage_file(self, path: str, matches: list[Match]) -> StagedFile:
        with open(path, "rb") as f:
            old_content = f.read()
        mode = stat.S_IMODE(os.stat(path).st_mode)

        ordered = sorted(matches, key=lambda m: (m.pos, m.length))
        check_spans(path, ordered, len(old_content))

        new_content = splice(old_content, ordered)
        return StagedFile(
            path=path,
            old_content=old_content,
            new_content=new_content,
            mode=mode,
            matches_applied=len(ordered),
        )

    # ------------------------------------------------------------------
    # Atomic file write
    # ------------------------------------------------------------------

    @staticmethod
    def _safe_write(file_path: str, content: bytes, mode: int) -> None:
        """Replace the file's content via temp file + rename, keeping *mode*."""
        abs_path = os.path.realpath(file_path)
        fd, tmp_path = tempfile.mkstemp(
            dir=os.path.dirname(abs_path), prefix=_TMP_PREFIX
        )

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, abs_path)
        except OSError:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise


def group_by_path(matches: Iterable[Match]) -> dict[str, list[Match]]:
    """Group matches by path, keeping first-seen path order and input order."""
    groups: dict[str, list[Match]] = {}
    for m in matches:
        groups.setdefault(m.path, []).append(m)
    return groups


def check_spans(path: str, matches: list[Match], size: int) -> None:
    """Validate the original spans of one file's matches, sorted by ``pos``.

    Two matches may not cover the same span, and a match may not start
    inside the previous one.  A zero-length match at the start or end of
    a neighbouring span is an insertion and is allowed.
    """
    prev: Match | None = None
    for m in matches:
        if m.end > size:
            raise SpanOutOfRangeError(
                f"{path}: span [{m.pos}, {m.end}) is beyond end of file "
                f"({size} bytes)"
            )
        if prev is not None:
            if (m.pos, m.length) == (prev.pos, prev.length):
                raise OverlappingSpanError(
                    f"{path}: duplicate span [{m.pos}, {m.end})"
                )
            if m.pos < prev.end:
                raise OverlappingSpanError(
                    f"{path}: span [{m.pos}, {m.end}) overlaps "
                    f"[{prev.pos}, {prev.end})"
                )
        prev = m


def splice(content: bytes, matches: list[Match]) -> bytes:
    """Replace each match's span in *content* with its data.

    *matches* must be ordered by original ``pos``.  After each replacement,
    every later match at or past the replaced offset is moved by the size
    difference, so its ``pos`` always refers to the partially rewritten
    buffer.  The caller's ``Match`` objects are not modified.
    """
    buf = bytearray(content)
    positions = [m.pos for m in matches]

    for i, m in enumerate(matches):
        start = positions[i]
        buf[start:start + m.length] = m.data

        delta = m.delta
        if delta:
            for j in range(i + 1, len(matches)):
                if positions[j] >= start:
                    positions[j] += delta

    return bytes(buf)
