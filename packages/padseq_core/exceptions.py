"""padseq core exceptions."""


class PadseqError(Exception):
    """Base exception for padseq."""


class PatternDecodeError(PadseqError):
    """A shared pattern string could not be turned back into a pattern."""


class PatternEncodeError(PadseqError):
    """A pattern could not be written to the binary share format."""
