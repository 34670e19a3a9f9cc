"""
Editor integration — hands the encoded matches to an external editor and
reads back whatever the user saved.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile

from .editing.match import Match
from .editing.serializer import MatchSerializer
from .errors import EditorError

logger = logging.getLogger(__name__)


def parse_editor(editor: str) -> list[str]:
    """Split an editor setting such as ``"code --wait"`` into argv."""
    try:
        argv = shlex.split(editor)
    except ValueError as exc:
        raise EditorError(f"Cannot parse editor {editor!r}: {exc}") from exc
    if not argv:
        raise EditorError("EDITOR must be set")
    return argv


def run_editor(editor: str, path: str) -> None:
    """Open *path* in *editor* and block until the editor exits."""
    argv = parse_editor(editor) + [path]
    logger.debug("[Editor] Running %s", argv)
    try:
        result = subprocess.run(argv, check=False)
    except OSError as exc:
        raise EditorError(
            f"There was a problem with editor {editor!r}: {exc}"
        ) from exc
    if result.returncode != 0:
        raise EditorError(
            f"There was a problem with editor {editor!r} "
            f"(exit status {result.returncode})"
        )


def write_temp_match_file(matches: list[Match],
                          serializer: MatchSerializer | None = None) -> str:
    """Write the editable blob to a new temp file and return its path."""
    serializer = serializer or MatchSerializer()
    fd, tmp_path = tempfile.mkstemp(prefix="bed-")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(serializer.encode_all(matches))
    except OSError:
        os.unlink(tmp_path)
        raise
    return tmp_path


def edit_matches(matches: list[Match], editor: str,
                 serializer: MatchSerializer | None = None) -> list[Match]:
    """Round-trip *matches* through the user's editor.

    Returns the matches parsed from the saved blob.  The temp file is
    always removed.
    """
    serializer = serializer or MatchSerializer()
    tmp_path = write_temp_match_file(matches, serializer)
    try:
        run_editor(editor, tmp_path)
        with open(tmp_path, "rb") as f:
            edited = f.read()
    finally:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass

    new_matches = serializer.decode(edited)
    logger.info(
        "[Editor] %d match(es) in, %d match(es) back", len(matches),
        len(new_matches),
    )
    return new_matches
