"""
CLI display — logger setup and the plain-text output bed writes to the
terminal.
"""

import logging
import sys

from .editing.match import Match

_LOGGER_NAME = "bed"
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_LOG_DATEFMT = "%H:%M:%S"


def setup_logger(verbose: bool = False, log_file: str = "") -> logging.Logger:
    """Configure the ``bed`` logger.

    Silent by default.  *verbose* sends everything to stderr; *log_file*
    additionally captures everything in a file.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)

    if verbose:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(logging.DEBUG)
        sh.setFormatter(formatter)
        logger.addHandler(sh)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def format_match(match: Match, encoding: str = "utf-8") -> str:
    """One dry-run line: ``<path>: <matched text>``."""
    return f"{match.path}: {match.data.decode(encoding, errors='replace')}"


def print_matches(matches: list[Match], encoding: str = "utf-8",
                  stream=None) -> None:
    stream = stream or sys.stdout
    for m in matches:
        print(format_match(m, encoding), file=stream)


def ask_yes_no(question: str) -> bool:
    """Prompt on the controlling terminal; anything but y/yes is a no."""
    try:
        with open("/dev/tty", "r+", encoding="utf-8") as tty:
            tty.write(f"{question} [y/N] ")
            tty.flush()
            answer = tty.readline()
    except OSError:
        try:
            answer = input(f"{question} [y/N] ")
        except EOFError:
            answer = ""
    return answer.strip().lower() in ("y", "yes")
