"""Exceptions raised by the ring implementation."""

from __future__ import annotations


class RingsError(Exception):
    """Base class of every error raised by this package."""

    default_message = "rings error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class BadDidError(RingsError, ValueError):
    """A string could not be parsed as a 160-bit Did."""

    default_message = "Invalid rustc hexadecimal id in directory cache"


class ChunkDecodeError(RingsError, ValueError):
    """Bytes could not be decoded into a chunk."""

    default_message = "Bincode deserialization error"


class PeerRingInvalidActionError(RingsError):
    """The ring produced an action that the caller cannot handle."""

    default_message = "Invalid PeerRingAction"


class PeerRingFindSuccessorError(RingsError):
    """Looking up a successor failed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"PeerRing findsuccessor error, {reason}")