"""
`bed` command line entry point.

Usage::

    bed [options] pattern [path ...]

Matches *pattern* against every path (and any paths piped on stdin),
opens the matches in $BED_EDITOR / $EDITOR, and writes the edited
matches back into the original files once the editor exits cleanly.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .cli_display import ask_yes_no, print_matches, setup_logger
from .config import Config
from .diff_display import show_diffs
from .editing.matcher import Matcher, compile_pattern
from .editing.patch_applier import PatchApplier
from .editor import edit_matches
from .errors import BedError

logger = logging.getLogger(__name__)

_DESCRIPTION = """\
bed is a bulk command line text editor.

The command matches pattern against all provided paths and writes the
matches to a temporary file that is opened in an editor such as vi.
If the editor exits with status 0, every change made to the matches is
applied to the original files."""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bed",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("pattern", help="Regular expression to search for")
    parser.add_argument("paths", nargs="*",
                        help="Files to search (also read from stdin)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Only show matches without opening an editor")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log progress to stderr")
    parser.add_argument("-i", "--ignore-case", action="store_true",
                        help="Match case-insensitively")
    parser.add_argument("--confirm", action="store_true",
                        help="Show a diff and ask before writing files")
    parser.add_argument("--no-progress", action="store_true",
                        help="Disable the scan progress bar")
    parser.add_argument("--config", default=None,
                        help="Path to .bed.yaml config file")
    return parser


def _stdin_paths() -> list[str]:
    """Newline-separated paths piped on stdin; none when stdin is a terminal."""
    stdin = sys.stdin
    if stdin is None or stdin.isatty():
        return []
    return [line.strip() for line in stdin.read().splitlines() if line.strip()]


def run(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    cfg = Config.load(args.config)
    setup_logger(args.verbose, cfg.LOG_FILE)

    paths = list(args.paths) + _stdin_paths()
    if not paths:
        raise BedError("path required")

    if not cfg.EDITOR and not args.dry_run:
        raise BedError("EDITOR must be set")

    pattern = compile_pattern(args.pattern, args.ignore_case, cfg.ENCODING)

    show_progress = (cfg.PROGRESS and not args.no_progress
                     and sys.stderr.isatty())
    matches = Matcher(pattern).find_paths(paths, progress=show_progress)

    if args.dry_run:
        print_matches(matches, cfg.ENCODING)
        return 0

    if not matches:
        logger.info("No matches, nothing to edit")
        return 0

    new_matches = edit_matches(matches, cfg.EDITOR)

    applier = PatchApplier()
    staged = applier.stage(new_matches)

    if args.confirm or cfg.CONFIRM:
        if not show_diffs(staged, cfg.ENCODING):
            logger.info("No changes to apply")
            return 0
        if not ask_yes_no("Apply these changes?"):
            print("Aborted, no files written.", file=sys.stderr)
            return 1

    result = applier.commit(staged)
    logger.info(
        "Applied %d match(es): %d file(s) modified, %d unchanged",
        result.matches_applied, len(result.files_modified),
        len(result.files_unchanged),
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        return run(argv)
    except (BedError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
