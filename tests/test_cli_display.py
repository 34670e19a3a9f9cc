"""Tests for logger setup and match printing."""

import io
import logging

from bed.cli_display import format_match, print_matches, setup_logger
from bed.editing.match import Match


class TestSetupLogger:
    def test_silent_by_default(self):
        logger = setup_logger()
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_verbose_adds_stream_handler(self):
        logger = setup_logger(verbose=True)
        assert any(type(h) is logging.StreamHandler for h in logger.handlers)
        setup_logger()

    def test_log_file_receives_records(self, tmp_path):
        log_file = tmp_path / "bed.log"
        logger = setup_logger(log_file=str(log_file))

        logging.getLogger("bed.editing.matcher").info("[Match] hello")
        setup_logger()  # closes the file handler

        assert "[Match] hello" in log_file.read_text(encoding="utf-8")
        assert logger.name == "bed"


class TestPrintMatches:
    def test_format_match_replaces_undecodable_bytes(self):
        line = format_match(Match(path="f", pos=0, length=2, data=b"\xffA"))
        assert line == "f: �A"

    def test_print_matches(self):
        out = io.StringIO()
        print_matches([
            Match(path="a", pos=0, length=1, data=b"x"),
            Match(path="b", pos=0, length=1, data=b"y"),
        ], stream=out)
        assert out.getvalue() == "a: x\nb: y\n"
