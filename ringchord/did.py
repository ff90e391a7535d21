"""Identifiers on the finite ring of size 2**160."""

from __future__ import annotations

import functools
from collections.abc import Iterable

from ringchord.errors import BadDidError

RING_BITS = 160
RING_SIZE = 1 << RING_BITS
DID_BYTES = RING_BITS // 8

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@functools.total_ordering
class Did:
    """A point on the ring Z/(2**160), the address of a node or resource."""

    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        self._value = int(value) % RING_SIZE

    @classmethod
    def from_str(cls, s: str) -> Did:
        """Parse 40 hex digits, optionally prefixed with ``0x``."""
        digits = s[2:] if s.startswith("0x") else s
        if len(digits) != DID_BYTES * 2 or not set(digits) <= _HEX_DIGITS:
            raise BadDidError()
        return cls(int(digits, 16))

    @classmethod
    def from_bytes(cls, data: bytes) -> Did:
        """Build a Did from 20 big-endian bytes."""
        if len(data) != DID_BYTES:
            raise BadDidError(f"a Did takes {DID_BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "big"))

    def __bytes__(self) -> bytes:
        return self._value.to_bytes(DID_BYTES, "big")

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return format(self._value, f"0{DID_BYTES * 2}x")

    def __repr__(self) -> str:
        return f"Did('0x{self}')"

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Did):
            return self._value == other._value
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Did):
            return self._value < other._value
        return NotImplemented

    def __neg__(self) -> Did:
        return Did(RING_SIZE - self._value)

    def __add__(self, other: object) -> Did:
        if isinstance(other, Did):
            return Did(self._value + other._value)
        return NotImplemented

    def __sub__(self, other: object) -> Did:
        if isinstance(other, Did):
            return self + (-other)
        return NotImplemented

    def in_range(self, base_id: Did, a: Did, b: Did) -> bool:
        """Whether this Did lies strictly between ``a`` and ``b`` seen from ``base_id``."""
        here = self - base_id
        return here > a - base_id and b - base_id > here

    def bias(self, did: Did) -> BiasId:
        """This Did measured clockwise from ``did``."""
        return BiasId(did, self)


class BiasId:
    """A Did expressed as its clockwise distance from a bias point."""

    __slots__ = ("_bias", "_pos")

    def __init__(self, bias: Did, did: Did) -> None:
        self._bias = bias
        self._pos = did - bias

    @property
    def bias(self) -> Did:
        """The origin the distance is measured from."""
        return self._bias

    def to_did(self) -> Did:
        """The absolute Did this value stands for."""
        return self._pos + self._bias

    def pos(self) -> Did:
        """The clockwise distance from the bias."""
        return self._pos

    def _other_pos(self, other: BiasId) -> Did:
        if other._bias != self._bias:
            return BiasId(self._bias, other.to_did())._pos
        return other._pos

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BiasId):
            return self._bias == other._bias and self._pos == other._pos
        if isinstance(other, Did):
            return self.to_did() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._bias, self._pos))

    def __lt__(self, other: object) -> bool:
        if isinstance(other, BiasId):
            return self._pos < self._other_pos(other)
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, BiasId):
            return self._pos <= self._other_pos(other)
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, BiasId):
            return self._pos > self._other_pos(other)
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, BiasId):
            return self._pos >= self._other_pos(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"BiasId(bias={self._bias!r}, did={self.to_did()!r})"


def sort_ring(dids: Iterable[Did], did: Did) -> list[Did]:
    """Return the Dids ordered clockwise starting from ``did``."""
    return sorted(dids, key=lambda x: x - did)