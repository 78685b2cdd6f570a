"""Turn-based tank battle on a wrapping grid board, with pluggable tank algorithms."""

__version__ = "0.1.0"