"""padseq in-process state publishing."""

from .in_process import InProcessStateSink

__all__ = ["InProcessStateSink"]
