import random

import pytest

from ringchord.actions import PeerRingAction, RemoteAction
from ringchord.chord import PeerRing
from ringchord.did import Did

A = Did.from_str("0x00E807fcc88dD319270493fB2e822e388Fe36ab0")
B = Did.from_str("0x119999cf1046e68e36E1aA2E0E07105eDDD1f08E")
C = Did.from_str("0xccffee254729296a45a3885639AC7E10F9d54979")
D = Did.from_str("0xffffee254729296a45a3885639AC7E10F9d54979")


def test_ring_order():
    assert sorted([C, A, D, B]) == [A, B, C, D]


def test_chord_finger_clockwise():
    node_a = PeerRing(A, 3)
    assert node_a.successor_seq.is_empty()
    assert node_a.finger.is_empty()

    assert node_a.join(A) == PeerRingAction.none()
    assert node_a.successor_seq.is_empty()
    assert node_a.finger.is_empty()

    result = node_a.join(B)
    assert result == PeerRingAction.remote_action(B, RemoteAction.find_successor_for_connect(A))
    assert 2**156 < int(B) < 2**157

    expected = [B] * 157 + [None] * 3
    assert node_a.finger.list() == expected
    assert node_a.successor_seq.list() == [B]

    node_a.join(B)
    assert node_a.finger.list() == expected
    assert node_a.successor_seq.list() == [B]
    node_a.join(B)
    assert node_a.finger.list() == expected
    assert node_a.successor_seq.list() == [B]

    result = node_a.join(C)
    assert result == PeerRingAction.remote_action(C, RemoteAction.find_successor_for_connect(A))
    assert 2**159 < int(C) < 2**160
    assert node_a.finger.list() == [B] * 157 + [C] * 3
    assert node_a.successor_seq.list() == [B, C]

    assert node_a.find_successor(D) == PeerRingAction.remote_action(
        C, RemoteAction.find_successor(D)
    )
    assert node_a.find_successor(C) == PeerRingAction.remote_action(
        B, RemoteAction.find_successor(C)
    )


def test_chord_finger_anticlockwise():
    node_a = PeerRing(A, 3)
    assert node_a.join(C) == PeerRingAction.remote_action(
        C, RemoteAction.find_successor_for_connect(A)
    )
    assert node_a.finger.list() == [C] * 160
    assert node_a.successor_seq.list() == [C]

    assert node_a.join(B) == PeerRingAction.remote_action(
        B, RemoteAction.find_successor_for_connect(A)
    )
    assert node_a.finger.list() == [B] * 157 + [C] * 3
    assert node_a.successor_seq.list() == [B, C]


def test_chord_join_over_half_ring():
    node_d = PeerRing(D, 1)
    assert node_d.join(A) == PeerRingAction.remote_action(
        A, RemoteAction.find_successor_for_connect(D)
    )
    assert D + Did(2**151) < A
    assert D + Did(2**152) > A
    assert node_d.finger.list() == [A] * 152 + [None] * 8
    assert node_d.successor_seq.list() == [A]

    assert node_d.join(B) == PeerRingAction.remote_action(
        B, RemoteAction.find_successor_for_connect(D)
    )
    assert D + Did(2**156) < B
    assert D + Did(2**157) > B
    assert node_d.finger.list() == [A] * 152 + [B] * 5 + [None] * 3
    assert node_d.successor_seq.list() == [A]


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_two_node_finger(seed):
    rng = random.Random(seed)
    did1 = Did(rng.getrandbits(160))
    did2 = Did(rng.getrandbits(160))
    if did1 > did2:
        did1, did2 = did2, did1
    node1 = PeerRing(did1, 3)
    node2 = PeerRing(did2, 3)
    node1.join(did2)
    node2.join(did1)
    assert did2 in node1.successor_seq.list()
    assert did1 in node2.successor_seq.list()
    assert node1.finger.contains(did2)
    assert node2.finger.contains(did1)


def test_two_node_finger_failed_case():
    did1 = Did.from_str("0x051cf4f8d020cb910474bef3e17f153fface2b5f")
    did2 = Did.from_str("0x54baa7dc9e28f41da5d71af8fa6f2a302be1c1bf")
    max_did = Did(2**160 - 1)
    zero = Did(2**160)

    node1 = PeerRing(did1, 3)
    node2 = PeerRing(did2, 3)
    node1.join(did2)
    node2.join(did1)
    assert did2 in node1.successor_seq.list()
    assert did1 in node2.successor_seq.list()

    pos_159 = did2 + Did(2**159)
    assert pos_159 > did2
    assert pos_159 < max_did
    pos_160 = did2 + zero
    assert pos_160 == did2
    assert pos_160 > did1

    assert node1.finger.contains(did2)
    assert node2.finger.contains(did1)


def test_find_successor_with_no_successor_is_self():
    node = PeerRing(A)
    assert node.find_successor(C) == PeerRingAction.some(A)


def test_find_successor_close_did_returns_successor():
    node = PeerRing(A)
    node.join(B)
    node.join(C)
    assert node.find_successor(A + Did(5)) == PeerRingAction.some(B)


def test_notify_sets_predecessor():
    node = PeerRing(A)
    assert node.notify(B) == B
    assert node.predecessor == B
    assert node.notify(C) == C
    assert node.predecessor == C
    assert node.notify(B) is None
    assert node.predecessor == C


def test_check_predecessor():
    node = PeerRing(A)
    assert node.check_predecessor() == PeerRingAction.none()
    node.notify(B)
    assert node.check_predecessor() == PeerRingAction.remote_action(
        B, RemoteAction.check_predecessor()
    )


def test_remove_clears_predecessor_finger_and_successor():
    node = PeerRing(A)
    node.join(B)
    node.join(C)
    node.notify(B)
    node.remove(B)
    assert node.predecessor is None
    assert node.finger.list() == [C] * 160
    assert node.successor_seq.list() == [C]

    node.remove(C)
    assert node.finger.list() == [None] * 160
    assert node.successor_seq.is_empty()


def test_remove_refills_successor_from_finger():
    node_d = PeerRing(D, 1)
    node_d.join(A)
    node_d.join(B)
    assert node_d.successor_seq.list() == [A]
    node_d.remove(A)
    assert node_d.finger.list() == [B] * 157 + [None] * 3
    assert node_d.successor_seq.list() == [B]


def test_fix_fingers_without_successor_sets_self():
    node = PeerRing(A)
    assert node.fix_fingers() == PeerRingAction.none()
    assert node.finger.fix_finger_index == 1
    assert node.finger.get(1) == A


def test_fix_fingers_remote_and_wraparound():
    node = PeerRing(A)
    node.join(B)
    node.join(C)
    node.finger.fix_finger_index = 157

    target = A + Did(2**158)
    assert node.fix_fingers() == PeerRingAction.remote_action(
        B, RemoteAction.find_successor_for_fix(target)
    )
    assert node.finger.fix_finger_index == 158

    assert node.fix_fingers() == PeerRingAction.none()
    assert node.finger.fix_finger_index == 0
    assert node.finger.get(0) == B


def test_bias_is_distance_from_node():
    node = PeerRing(B)
    assert node.bias(A).pos() == A - B
    assert node.bias(C) < node.bias(A)