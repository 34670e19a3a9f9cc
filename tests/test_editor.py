"""Tests for the editor round trip."""

import os
import shlex
import sys

import pytest

from bed.editing.match import Match
from bed.editor import edit_matches, parse_editor, write_temp_match_file
from bed.errors import EditorError, MalformedHeaderError


def _python_editor(script: str) -> str:
    """An editor command that runs *script* with the temp path as argv[1]."""
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(script)}"


UPPERCASE_BODIES = """
import sys
path = sys.argv[1]
with open(path, 'rb') as f:
    data = f.read()
lines = [l if l.startswith(b'#bed:') else l.upper() for l in data.split(b'\\n')]
with open(path, 'wb') as f:
    f.write(b'\\n'.join(lines))
"""


class TestParseEditor:
    def test_splits_arguments(self):
        assert parse_editor("code --wait") == ["code", "--wait"]

    def test_quoted_program(self):
        assert parse_editor("'/opt/my editor/bin' -n") == ["/opt/my editor/bin", "-n"]

    def test_empty_editor(self):
        with pytest.raises(EditorError):
            parse_editor("   ")


class TestEditMatches:
    def test_returns_edited_matches(self):
        matches = [
            Match(path="a.txt", pos=0, length=3, data=b"foo"),
            Match(path="a.txt", pos=8, length=3, data=b"bar"),
        ]

        edited = edit_matches(matches, _python_editor(UPPERCASE_BODIES))

        assert edited == [
            Match(path="a.txt", pos=0, length=3, data=b"FOO"),
            Match(path="a.txt", pos=8, length=3, data=b"BAR"),
        ]

    def test_unchanged_blob_round_trips(self):
        matches = [Match(path="a.txt", pos=2, length=1, data=b"x\ny")]
        assert edit_matches(matches, _python_editor("pass")) == matches

    def test_nonzero_exit_raises(self):
        matches = [Match(path="a.txt", pos=0, length=1, data=b"x")]
        with pytest.raises(EditorError, match="problem with editor"):
            edit_matches(matches, _python_editor("raise SystemExit(3)"))

    def test_missing_program_raises(self):
        matches = [Match(path="a.txt", pos=0, length=1, data=b"x")]
        with pytest.raises(EditorError):
            edit_matches(matches, "/nonexistent/editor-binary")

    def test_malformed_blob_raises(self):
        script = (
            "import sys\n"
            "open(sys.argv[1], 'w').write('#bed:begin nope\\nx\\n#bed:end\\n')\n"
        )
        matches = [Match(path="a.txt", pos=0, length=1, data=b"x")]
        with pytest.raises(MalformedHeaderError):
            edit_matches(matches, _python_editor(script))


class TestTempFile:
    def test_temp_file_has_blob(self):
        path = write_temp_match_file([Match(path="a", pos=0, length=1, data=b"x")])
        try:
            assert os.path.basename(path).startswith("bed-")
            with open(path, "rb") as f:
                assert f.read() == (
                    b'#bed:begin {"path":"a","pos":0,"len":1}\nx\n#bed:end\n\n'
                )
        finally:
            os.unlink(path)
