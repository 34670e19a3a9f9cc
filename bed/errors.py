"""
Errors raised by bed.

File access failures are not wrapped: the ``OSError`` from the read, stat
or write reaches the caller unchanged.
"""


class BedError(Exception):
    """Base class for all bed errors."""


class PatternError(BedError):
    """Raised when the search pattern does not compile."""


class MalformedHeaderError(BedError):
    """Raised when an edited match blob cannot be decoded."""


class PatchApplyError(BedError):
    """Raised when a set of matches cannot be applied to a file."""


class SpanOutOfRangeError(PatchApplyError):
    """Raised when a match span reaches past the end of its file."""


class OverlappingSpanError(PatchApplyError):
    """Raised when two matches of one file claim the same bytes."""


class EditorError(BedError):
    """Raised when the external editor cannot be run or fails."""
