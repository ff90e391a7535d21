"""Results of Chord operations and the remote work they may call for."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ringchord.did import Did


class RemoteActionKind(enum.Enum):
    """What a remote node is asked to do."""

    FIND_SUCCESSOR = "find_successor"
    FIND_VNODE = "find_vnode"
    FIND_VNODE_FOR_OPERATE = "find_vnode_for_operate"
    NOTIFY = "notify"
    SYNC_VNODE_WITH_SUCCESSOR = "sync_vnode_with_successor"
    FIND_SUCCESSOR_FOR_CONNECT = "find_successor_for_connect"
    FIND_SUCCESSOR_FOR_FIX = "find_successor_for_fix"
    CHECK_PREDECESSOR = "check_predecessor"


_DID_KINDS = frozenset(
    {
        RemoteActionKind.FIND_SUCCESSOR,
        RemoteActionKind.FIND_VNODE,
        RemoteActionKind.NOTIFY,
        RemoteActionKind.FIND_SUCCESSOR_FOR_CONNECT,
        RemoteActionKind.FIND_SUCCESSOR_FOR_FIX,
    }
)


@dataclass(frozen=True)
class RemoteAction:
    """Work that has to be carried out by another node.

    ``target`` is the Did to look up or notify for most kinds, the vnode
    operation for ``FIND_VNODE_FOR_OPERATE``, a tuple of vnodes for
    ``SYNC_VNODE_WITH_SUCCESSOR`` and ``None`` for ``CHECK_PREDECESSOR``.
    """

    kind: RemoteActionKind
    target: Any = None

    def __post_init__(self) -> None:
        if self.kind in _DID_KINDS and not isinstance(self.target, Did):
            raise TypeError(f"{self.kind.value} needs a Did target")
        if self.kind is RemoteActionKind.CHECK_PREDECESSOR and self.target is not None:
            raise TypeError("check_predecessor takes no target")
        if self.kind is RemoteActionKind.SYNC_VNODE_WITH_SUCCESSOR:
            object.__setattr__(self, "target", tuple(self.target))

    @classmethod
    def find_successor(cls, did: Did) -> RemoteAction:
        """Ask the node to find the successor of ``did``."""
        return cls(RemoteActionKind.FIND_SUCCESSOR, did)

    @classmethod
    def find_vnode(cls, did: Did) -> RemoteAction:
        """Ask the node to find the virtual node ``did``."""
        return cls(RemoteActionKind.FIND_VNODE, did)

    @classmethod
    def find_vnode_for_operate(cls, operation: Any) -> RemoteAction:
        """Ask the node to find the virtual node an operation targets."""
        return cls(RemoteActionKind.FIND_VNODE_FOR_OPERATE, operation)

    @classmethod
    def notify(cls, did: Did) -> RemoteAction:
        """Ask the node to notify ``did``."""
        return cls(RemoteActionKind.NOTIFY, did)

    @classmethod
    def sync_vnode_with_successor(cls, vnodes: Iterable[Any]) -> RemoteAction:
        """Hand virtual nodes over to the node's successor."""
        return cls(RemoteActionKind.SYNC_VNODE_WITH_SUCCESSOR, tuple(vnodes))

    @classmethod
    def find_successor_for_connect(cls, did: Did) -> RemoteAction:
        """Ask the node to find the successor of ``did`` so it can connect."""
        return cls(RemoteActionKind.FIND_SUCCESSOR_FOR_CONNECT, did)

    @classmethod
    def find_successor_for_fix(cls, did: Did) -> RemoteAction:
        """Ask the node to find the successor of ``did`` to fix a finger."""
        return cls(RemoteActionKind.FIND_SUCCESSOR_FOR_FIX, did)

    @classmethod
    def check_predecessor(cls) -> RemoteAction:
        """Ask the node whether it is still alive."""
        return cls(RemoteActionKind.CHECK_PREDECESSOR)


class ActionKind(enum.Enum):
    """The shape of a Chord operation's result."""

    NONE = "none"
    SOME_VNODE = "some_vnode"
    SOME = "some"
    REMOTE_ACTION = "remote_action"
    MULTI_ACTIONS = "multi_actions"


@dataclass(frozen=True)
class PeerRingAction:
    """The result of a Chord operation: a value found locally or remote work."""

    kind: ActionKind
    did: Did | None = None
    remote: RemoteAction | None = None
    vnode: Any = None
    actions: tuple[PeerRingAction, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", tuple(self.actions))
        if self.kind in (ActionKind.SOME, ActionKind.REMOTE_ACTION) and not isinstance(
            self.did, Did
        ):
            raise TypeError(f"{self.kind.value} needs a Did")
        if self.kind is ActionKind.REMOTE_ACTION and not isinstance(self.remote, RemoteAction):
            raise TypeError("remote_action needs a RemoteAction")
        if self.kind is ActionKind.MULTI_ACTIONS and not all(
            isinstance(a, PeerRingAction) for a in self.actions
        ):
            raise TypeError("multi_actions takes PeerRingAction values only")

    @classmethod
    def none(cls) -> PeerRingAction:
        """Nothing left to do."""
        return cls(ActionKind.NONE)

    @classmethod
    def some(cls, did: Did) -> PeerRingAction:
        """A node was found."""
        return cls(ActionKind.SOME, did=did)

    @classmethod
    def some_vnode(cls, vnode: Any) -> PeerRingAction:
        """A virtual node was found."""
        return cls(ActionKind.SOME_VNODE, vnode=vnode)

    @classmethod
    def remote_action(cls, did: Did, remote: RemoteAction) -> PeerRingAction:
        """Node ``did`` has to carry out ``remote``."""
        return cls(ActionKind.REMOTE_ACTION, did=did, remote=remote)

    @classmethod
    def multi(cls, actions: Iterable[PeerRingAction]) -> PeerRingAction:
        """Several actions to carry out."""
        return cls(ActionKind.MULTI_ACTIONS, actions=tuple(actions))

    def is_none(self) -> bool:
        """Whether this is the empty result."""
        return self.kind is ActionKind.NONE

    def is_some(self) -> bool:
        """Whether a node was found."""
        return self.kind is ActionKind.SOME

    def is_remote(self) -> bool:
        """Whether remote work is required."""
        return self.kind is ActionKind.REMOTE_ACTION

    def is_multi(self) -> bool:
        """Whether this bundles several actions."""
        return self.kind is ActionKind.MULTI_ACTIONS