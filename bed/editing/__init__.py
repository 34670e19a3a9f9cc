"""Match tracking and patch application — find, serialize, splice back."""

from .match import Match
from .matcher import Matcher, compile_pattern
from .serializer import MatchSerializer
from .patch_applier import PatchApplier, ApplyResult, StagedFile

__all__ = [
    "Match",
    "Matcher", "compile_pattern",
    "MatchSerializer",
    "PatchApplier", "ApplyResult", "StagedFile",
]
