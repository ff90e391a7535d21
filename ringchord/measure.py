"""Counting peer behaviour to judge how reliable remote peers are."""

from __future__ import annotations

import abc
import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ringchord.did import Did


class MeasureCounter(enum.Enum):
    """The counters a measure keeps for each peer."""

    SENT = "sent"
    FAILED_TO_SEND = "failed_to_send"
    RECEIVED = "received"
    FAILED_TO_RECEIVE = "failed_to_receive"


class Measure(abc.ABC):
    """Counts sent and received messages of peers over a period."""

    @abc.abstractmethod
    async def incr(self, did: Did, counter: MeasureCounter) -> None:
        """Increment the given counter of a peer."""

    @abc.abstractmethod
    async def get_count(self, did: Did, counter: MeasureCounter) -> int:
        """Return the given counter of a peer."""