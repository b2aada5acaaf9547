"""padseq core: pattern model, editing operations and the share codec."""

__version__ = "0.1.0"
