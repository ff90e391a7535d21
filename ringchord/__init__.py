"""Chord ring primitives: 160-bit identifiers, finger tables, successor sequences and chunking."""

__version__ = "0.1.0"

__all__ = ["actions", "chord", "chunk", "consts", "did", "errors", "finger", "measure", "successor"]