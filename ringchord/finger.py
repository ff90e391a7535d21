"""Finger table of the Chord ring."""

from __future__ import annotations

from collections.abc import Iterator

from ringchord.did import Did


class FingerTable:
    """Shortcuts to nodes at growing clockwise distances from a node.

    Entry ``k`` holds the closest known node that lies at least ``2**k``
    clockwise from the owner.
    """

    def __init__(self, did: Did, size: int) -> None:
        self.did = did
        self.size = size
        self._finger: list[Did | None] = [None] * size
        self.fix_finger_index = 0

    def __repr__(self) -> str:
        return f"FingerTable(did={self.did!r}, size={self.size}, known={len(self)})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FingerTable):
            return (
                self.did == other.did
                and self.size == other.size
                and self._finger == other._finger
                and self.fix_finger_index == other.fix_finger_index
            )
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __len__(self) -> int:
        """The number of filled entries."""
        return sum(1 for x in self._finger if x is not None)

    def __iter__(self) -> Iterator[Did | None]:
        return iter(list(self._finger))

    def __getitem__(self, index: int) -> Did | None:
        return self.get(index)

    def __contains__(self, did: object) -> bool:
        return did in self._finger

    def is_empty(self) -> bool:
        """Whether no entry is filled."""
        return len(self) == 0

    def first(self) -> Did | None:
        """The first filled entry, or ``None``."""
        return next((x for x in self._finger if x is not None), None)

    def get(self, index: int) -> Did | None:
        """The entry at ``index``; ``None`` when empty or out of range."""
        if 0 <= index < len(self._finger):
            return self._finger[index]
        return None

    def set(self, index: int, did: Did) -> None:
        """Fill the entry at ``index``; out-of-range indexes are ignored."""
        if 0 <= index < len(self._finger):
            self._finger[index] = did

    def set_fix(self, did: Did) -> None:
        """Fill the entry currently being fixed."""
        self.set(self.fix_finger_index, did)

    def remove(self, did: Did) -> None:
        """Remove a node, filling its span with the entry that follows it."""
        indexes = [i for i, x in enumerate(self._finger) if x == did]
        if not indexes:
            return
        first_idx, end_idx = indexes[0], indexes[-1] + 1
        fix_id = self._finger[end_idx] if end_idx < len(self._finger) else None
        for idx in range(first_idx, end_idx):
            self._finger[idx] = fix_id

    def join(self, did: Did) -> None:
        """Record a node in every entry it is a closer fit for."""
        bid = did.bias(self.did)
        for k in range(self.size):
            if bid.pos() < Did(1 << k):
                continue
            current = self._finger[k]
            if current is None or bid < current.bias(self.did):
                self._finger[k] = did

    def contains(self, did: Did | None) -> bool:
        """Whether some entry equals ``did`` (``None`` matches an empty entry)."""
        return did in self._finger

    def closest(self, did: Did) -> Did:
        """The closest preceding node of ``did``, or the owner itself."""
        bid = did.bias(self.did)
        for v in reversed(self._finger):
            if v is not None and v.bias(self.did) < bid:
                return v
        return self.did

    def list(self) -> list[Did | None]:
        """A copy of all entries in order."""
        return list(self._finger)

    def reset(self) -> None:
        """Empty every entry."""
        self._finger = [None] * self.size