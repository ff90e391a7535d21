"""The ordered sequence of successors of a node on the ring."""

from __future__ import annotations

from ringchord.did import Did, sort_ring


class SuccessorSeq:
    """Successors of a node, ordered by clockwise distance from it.

    Several successors are kept so that a single failed node does not
    disconnect the ring.
    """

    def __init__(self, did: Did, max: int) -> None:
        self.did = did
        self._max = max
        self._successors: list[Did] = []

    def __repr__(self) -> str:
        return f"SuccessorSeq(did={self.did!r}, successors={self._successors!r})"

    def __len__(self) -> int:
        return len(self._successors)

    def __contains__(self, did: object) -> bool:
        return did in self._successors

    def is_empty(self) -> bool:
        """Whether no successor is known."""
        return not self._successors

    def is_full(self) -> bool:
        """Whether the sequence holds its maximum number of successors."""
        return len(self._successors) >= self._max

    def min(self) -> Did:
        """The closest successor, or the node itself when there is none."""
        return self._successors[0] if self._successors else self.did

    def max(self) -> Did:
        """The farthest successor, or the node itself when there is none."""
        return self._successors[-1] if self._successors else self.did

    def update(self, successor: Did) -> None:
        """Add a successor, keeping the closest ones up to the maximum."""
        if successor in self._successors or successor == self.did:
            return
        self._successors = sort_ring([*self._successors, successor], self.did)[: self._max]

    def list(self) -> list[Did]:
        """A copy of the successors in order."""
        return list(self._successors)

    def remove(self, did: Did) -> None:
        """Drop a successor if present."""
        self._successors = [v for v in self._successors if v != did]