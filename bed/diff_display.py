"""
Diff display — show colored unified diffs of staged rewrites before they
are written to disk.
"""

from __future__ import annotations

import difflib
import sys

from .editing.patch_applier import StagedFile

# Checked in order: file headers before single-character prefixes
_LINE_COLORS = (
    ("+++", "1"),
    ("---", "1"),
    ("@@", "36"),
    ("+", "32"),
    ("-", "31"),
)


def compute_diff(staged: StagedFile, encoding: str = "utf-8") -> str | None:
    """Return the unified diff of a staged file, or None if unchanged."""
    if not staged.changed:
        return None

    old_lines = staged.old_content.decode(encoding, errors="replace").splitlines(keepends=True)
    new_lines = staged.new_content.decode(encoding, errors="replace").splitlines(keepends=True)

    diff = difflib.unified_diff(
        old_lines, new_lines,
        fromfile=f"a/{staged.path}",
        tofile=f"b/{staged.path}",
        lineterm="",
    )
    diff_text = "\n".join(line.rstrip("\n") for line in diff)
    return diff_text if diff_text.strip() else None


def _color_line(line: str) -> str:
    for prefix, code in _LINE_COLORS:
        if line.startswith(prefix):
            return f"\033[{code}m{line}\033[0m"
    return line


def format_colored_diff(diff_text: str) -> str:
    """Color a unified diff for the terminal.

    File headers are bold, hunk markers cyan, added lines green and
    removed lines red; context lines are left alone.
    """
    return "\n".join(_color_line(line) for line in diff_text.splitlines())


def show_diffs(staged: list[StagedFile], encoding: str = "utf-8",
               stream=None, color: bool | None = None) -> int:
    """Print the diff of every changed file. Returns the number shown."""
    stream = stream or sys.stdout
    if color is None:
        color = hasattr(stream, "isatty") and stream.isatty()

    shown = 0
    for sf in staged:
        diff = compute_diff(sf, encoding)
        if diff is None:
            continue
        print(format_colored_diff(diff) if color else diff, file=stream)
        shown += 1
    return shown
