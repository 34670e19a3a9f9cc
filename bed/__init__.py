"""
bed — bulk text editor.

Public API for library usage::

    from bed import compile_pattern, Matcher, MatchSerializer, PatchApplier

    matches = Matcher(compile_pattern(r"fo+")).find_paths(["a.txt"])
    blob = MatchSerializer().encode_all(matches)
    # ... edit blob ...
    PatchApplier().apply(MatchSerializer().decode(blob))
"""

from .editing import (
    ApplyResult,
    Match,
    Matcher,
    MatchSerializer,
    PatchApplier,
    compile_pattern,
)
from .errors import BedError

__all__ = [
    "ApplyResult", "Match", "Matcher", "MatchSerializer", "PatchApplier",
    "compile_pattern", "BedError",
]
