"""The Chord ring a node uses to find and reach other nodes."""

from __future__ import annotations

import threading

from ringchord.actions import ActionKind, PeerRingAction, RemoteAction, RemoteActionKind
from ringchord.did import RING_BITS, BiasId, Did
from ringchord.errors import PeerRingFindSuccessorError, PeerRingInvalidActionError
from ringchord.finger import FingerTable
from ringchord.successor import SuccessorSeq

DEFAULT_SUCCESSOR_MAX = 3
FINGER_TABLE_SIZE = RING_BITS
_FIX_FINGER_LIMIT = FINGER_TABLE_SIZE - 1


class PeerRing:
    """A node's view of the ring, ordered clockwise by Did.

    Holds the finger table, the successor sequence and the predecessor of the
    node, and implements the Chord operations on them. Operations that need
    another node return a :class:`PeerRingAction` describing that work.
    """

    def __init__(self, did: Did, succ_max: int = DEFAULT_SUCCESSOR_MAX) -> None:
        self.did = did
        self.finger = FingerTable(did, FINGER_TABLE_SIZE)
        self.successor_seq = SuccessorSeq(did, succ_max)
        self.predecessor: Did | None = None
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return (
            f"PeerRing(did={self.did!r}, successors={self.successor_seq.list()!r}, "
            f"predecessor={self.predecessor!r})"
        )

    def remove(self, did: Did) -> None:
        """Forget a node everywhere; refill the successors from the fingers if emptied."""
        with self._lock:
            if self.predecessor == did:
                self.predecessor = None
            self.finger.remove(did)
            self.successor_seq.remove(did)
            if self.successor_seq.is_empty():
                first = self.finger.first()
                if first is not None:
                    self.successor_seq.update(first)

    def bias(self, did: Did) -> BiasId:
        """``did`` measured clockwise from this node."""
        return BiasId(self.did, did)

    def join(self, did: Did) -> PeerRingAction:
        """Take a newly connected node into the finger table and successors.

        Returns a request asking that node to find this node's successor, so
        this node can connect to it.
        """
        if did == self.did:
            return PeerRingAction.none()
        with self._lock:
            self.finger.join(did)
            successor = self.successor_seq
            if self.bias(did) < self.bias(successor.max()) or not successor.is_full():
                successor.update(did)
        return PeerRingAction.remote_action(did, RemoteAction.find_successor_for_connect(self.did))

    def find_successor(self, did: Did) -> PeerRingAction:
        """The successor of ``did``, or the node to ask about it."""
        with self._lock:
            successor = self.successor_seq
            if successor.is_empty() or self.bias(did) <= self.bias(successor.min()):
                return PeerRingAction.some(successor.min())
            closest = self.finger.closest(did)
        return PeerRingAction.remote_action(closest, RemoteAction.find_successor(did))

    def notify(self, did: Did) -> Did | None:
        """Handle a node claiming to be the predecessor; return it if accepted."""
        with self._lock:
            if self.predecessor is None or self.bias(self.predecessor) < self.bias(did):
                self.predecessor = did
                return did
            return None

    def fix_fingers(self) -> PeerRingAction:
        """Refresh the next finger in turn, locally or by asking another node."""
        with self._lock:
            index = self.finger.fix_finger_index + 1
            if index >= _FIX_FINGER_LIMIT:
                index = 0
            target = self.did + Did(1 << index)
            try:
                result = self.find_successor(target)
            except Exception as exc:
                self.finger.fix_finger_index = index
                raise PeerRingFindSuccessorError(str(exc)) from exc
            self.finger.fix_finger_index = index

            if result.kind is ActionKind.SOME:
                self.finger.set_fix(result.did)
                return PeerRingAction.none()
            if (
                result.kind is ActionKind.REMOTE_ACTION
                and result.remote.kind is RemoteActionKind.FIND_SUCCESSOR
            ):
                return PeerRingAction.remote_action(
                    result.did, RemoteAction.find_successor_for_fix(result.remote.target)
                )
            raise PeerRingInvalidActionError()

    def check_predecessor(self) -> PeerRingAction:
        """A request to check that the predecessor is still alive, if there is one."""
        with self._lock:
            predecessor = self.predecessor
        if predecessor is None:
            return PeerRingAction.none()
        return PeerRingAction.remote_action(predecessor, RemoteAction.check_predecessor())