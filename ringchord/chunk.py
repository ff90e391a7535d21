"""Framing and chunking of large messages so they can be sent piece by piece.

A message is split into chunks of at most ``mtu`` bytes. Every chunk carries
its position, the total number of chunks and shared metadata, so a receiver
can collect chunks in any order and reassemble the message once all of them
have arrived.
"""

from __future__ import annotations

import itertools
import struct
import time
import uuid
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ringchord.consts import DEFAULT_TTL_MS, MAX_TTL_MS, TRANSPORT_MTU, TS_OFFSET_TOLERANCE_MS
from ringchord.errors import ChunkDecodeError

_U64 = struct.Struct("<Q")
_U128_BYTES = 16
_UUID_BYTES = 16


def get_epoch_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class ChunkMeta:
    """Metadata shared by every chunk of one message."""

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    ts_ms: int = field(default_factory=get_epoch_ms)
    ttl_ms: int = DEFAULT_TTL_MS


@dataclass(eq=False)
class Chunk:
    """One piece of a message: its ``(position, total)``, payload and metadata."""

    chunk: tuple[int, int]
    data: bytes
    meta: ChunkMeta

    def __post_init__(self) -> None:
        self.chunk = (int(self.chunk[0]), int(self.chunk[1]))
        self.data = bytes(self.data)

    def tx_eq(self, other: Chunk) -> bool:
        """Whether both chunks belong to the same message."""
        return self.meta.id == other.meta.id and self.chunk[1] == other.chunk[1]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Chunk):
            return self.tx_eq(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.meta.id, self.chunk[1]))

    def to_bytes(self) -> bytes:
        """Encode the chunk as little-endian fixed-width binary."""
        return b"".join(
            (
                _U64.pack(self.chunk[0]),
                _U64.pack(self.chunk[1]),
                _U64.pack(len(self.data)),
                self.data,
                _U64.pack(_UUID_BYTES),
                self.meta.id.bytes,
                self.meta.ts_ms.to_bytes(_U128_BYTES, "little"),
                _U64.pack(self.meta.ttl_ms),
            )
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Chunk:
        """Decode a chunk produced by :meth:`to_bytes`."""
        view = memoryview(bytes(data))
        offset = 0

        def take(size: int) -> bytes:
            nonlocal offset
            if offset + size > len(view):
                raise ChunkDecodeError("unexpected end of chunk data")
            piece = bytes(view[offset : offset + size])
            offset += size
            return piece

        def take_u64() -> int:
            return _U64.unpack(take(_U64.size))[0]

        position = take_u64()
        total = take_u64()
        payload = take(take_u64())
        if take_u64() != _UUID_BYTES:
            raise ChunkDecodeError("chunk id must be 16 bytes")
        msg_id = uuid.UUID(bytes=take(_UUID_BYTES))
        ts_ms = int.from_bytes(take(_U128_BYTES), "little")
        ttl_ms = take_u64()
        return cls(
            chunk=(position, total),
            data=payload,
            meta=ChunkMeta(id=msg_id, ts_ms=ts_ms, ttl_ms=ttl_ms),
        )


def _tx_key(chunk: Chunk) -> tuple[uuid.UUID, int]:
    return (chunk.meta.id, chunk.chunk[1])


class ChunkList:
    """A pool of chunks, possibly from several messages."""

    def __init__(self, chunks: Iterable[Chunk] = (), mtu: int = TRANSPORT_MTU) -> None:
        self.chunks: list[Chunk] = list(chunks)
        self.mtu = mtu

    @classmethod
    def from_data(cls, data: bytes, mtu: int = TRANSPORT_MTU) -> ChunkList:
        """Split ``data`` into chunks of at most ``mtu`` bytes sharing one metadata."""
        if mtu <= 0:
            raise ValueError("mtu must be positive")
        data = bytes(data)
        pieces = [data[start : start + mtu] for start in range(0, len(data), mtu)]
        meta = ChunkMeta()
        total = len(pieces)
        return cls(
            (Chunk(chunk=(i, total), data=piece, meta=meta) for i, piece in enumerate(pieces)),
            mtu=mtu,
        )

    def __iter__(self) -> Iterator[Chunk]:
        return iter(list(self.chunks))

    def __len__(self) -> int:
        return len(self.chunks)

    def __repr__(self) -> str:
        return f"ChunkList({len(self.chunks)} chunks, mtu={self.mtu})"

    def formalize(self) -> ChunkList:
        """Drop adjacent duplicates of a position and sort by position."""
        deduped = [
            next(group)
            for _, group in itertools.groupby(self.chunks, key=lambda c: c.chunk[0])
        ]
        deduped.sort(key=lambda c: c.chunk[0])
        return ChunkList(deduped, mtu=self.mtu)

    def search(self, id: uuid.UUID) -> ChunkList:
        """The formalized chunks of the message ``id``."""
        return ChunkList((c for c in self.chunks if c.meta.id == id), mtu=self.mtu).formalize()

    def is_completed(self) -> bool:
        """Whether the list holds every chunk of its message."""
        chunks = self.formalize().chunks
        return bool(chunks) and len(chunks) == chunks[0].chunk[1]

    def try_withdraw(self) -> bytes | None:
        """The reassembled message, or ``None`` while chunks are missing."""
        if not self.is_completed():
            return None
        return b"".join(c.data for c in self.formalize().chunks)

    def _grouped(self) -> Iterator[tuple[uuid.UUID, bool]]:
        for (msg_id, _), group in itertools.groupby(self.chunks, key=_tx_key):
            yield msg_id, ChunkList(group, mtu=self.mtu).is_completed()

    def list_completed(self) -> list[uuid.UUID]:
        """Ids of messages whose chunks are all present."""
        return [msg_id for msg_id, done in self._grouped() if done]

    def list_pending(self) -> list[uuid.UUID]:
        """Ids of messages that still miss chunks."""
        return [msg_id for msg_id, done in self._grouped() if not done]

    def get(self, id: uuid.UUID) -> bytes | None:
        """The message ``id`` if it is complete, else ``None``."""
        return self.search(id).try_withdraw()

    def remove(self, id: uuid.UUID) -> None:
        """Drop every chunk of the message ``id``."""
        self.chunks = [c for c in self.chunks if c.meta.id != id]

    def remove_expired(self) -> None:
        """Drop chunks whose time to live has passed."""
        now = get_epoch_ms()
        self.chunks = [c for c in self.chunks if c.meta.ts_ms + c.meta.ttl_ms > now]

    def handle(self, chunk: Chunk) -> bytes | None:
        """Store a chunk; return and drop its message once it is complete."""
        if chunk.meta.ttl_ms > MAX_TTL_MS:
            return None
        if chunk.meta.ts_ms - TS_OFFSET_TOLERANCE_MS > get_epoch_ms():
            return None

        self.chunks.append(chunk)
        self.remove_expired()

        msg_id = chunk.meta.id
        data = self.get(msg_id)
        if data is None:
            return None
        self.remove(msg_id)
        return data