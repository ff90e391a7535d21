# ringchord

Building blocks for a Chord-style peer-to-peer ring with 160-bit identifiers.
Pure Python, no third-party dependencies.

## Modules

- `ringchord.did` – `Did`, a point on the ring of size 2**160.
  - `Did.from_str` accepts 40 hex digits, with or without a `0x` prefix. Bad input
    raises `BadDidError`.
  - `Did.from_bytes` takes 20 big-endian bytes.
  - `bytes(did)`, `int(did)` and `str(did)` convert a Did. `str` gives 40 lowercase hex
    digits without a prefix.
  - `+`, `-` and unary `-` work modulo 2**160, and Dids compare by value.
  - `did.bias(origin)` returns a `BiasId`, the clockwise distance from `origin`. Use
    `pos()` to read that distance and `to_did()` to get the absolute Did back.
  - `did.in_range(base, a, b)` tells whether the Did lies strictly between `a` and `b`,
    measured from `base`.
  - `sort_ring(dids, start)` returns the Dids ordered clockwise from `start`.
- `ringchord.finger` – `FingerTable`, the Chord routing table. Its methods are `join`,
  `remove`, `closest`, `first`, `get`, `set`, `set_fix`, `contains`, `list`, `reset` and
  `is_empty`. `len()` counts the filled entries.
- `ringchord.successor` – `SuccessorSeq`, a bounded list of successors ordered clockwise.
  Its methods are `update`, `remove`, `min`, `max`, `list`, `is_empty` and `is_full`.
- `ringchord.chord` – `PeerRing(did, succ_max=3)`. It holds a 160-entry finger table,
  a successor sequence and a predecessor, and provides these methods:
  - `join`
  - `find_successor`
  - `notify`, which returns the Did it accepted as predecessor, or `None`
  - `fix_fingers`
  - `check_predecessor`
  - `remove`
  - `bias`

  Where another node has to do the work, these methods return a `PeerRingAction`
  describing it.
- `ringchord.actions` – `PeerRingAction` (with kind `ActionKind`) and `RemoteAction`
  (with kind `RemoteActionKind`). Both are immutable values that describe the result
  of a ring operation.
- `ringchord.chunk` – message chunking.
  - `ChunkList.from_data(data, mtu)` splits a payload into `Chunk`s that share one
    `ChunkMeta` (id, timestamp, time to live).
  - `ChunkList.handle(chunk)` collects incoming chunks. When a message is complete, it
    returns the message and drops its chunks. It also drops expired chunks.
  - `handle` refuses chunks whose TTL exceeds `MAX_TTL_MS`, and chunks stamped more
    than `TS_OFFSET_TOLERANCE_MS` in the future.
  - `Chunk.to_bytes()` and `Chunk.from_bytes()` encode and decode a single chunk.
- `ringchord.measure` – the abstract `Measure` interface (async `incr` and `get_count`)
  and the `MeasureCounter` tags, for tracking how reliable peers are.
- `ringchord.consts` – protocol constants such as `DEFAULT_TTL_MS` and `TRANSPORT_MTU`.
- `ringchord.errors` – `RingsError` and its subclasses: `BadDidError`,
  `ChunkDecodeError`, `PeerRingInvalidActionError` and `PeerRingFindSuccessorError`.

## Installation

```
pip install .
```

## Example

```python
from ringchord.did import Did
from ringchord.chord import PeerRing

a = Did.from_str("0x00E807fcc88dD319270493fB2e822e388Fe36ab0")
b = Did.from_str("0x119999cf1046e68e36E1aA2E0E07105eDDD1f08E")

ring = PeerRing(a)
action = ring.join(b)
print(action.is_remote())          # True: b is asked to find a's successor
print(ring.successor_seq.list())   # [b]
```

Splitting and reassembling a payload:

```python
from ringchord.chunk import ChunkList

chunks = ChunkList.from_data(b"helloworld" * 1024, 32)
assert chunks.try_withdraw() == b"helloworld" * 1024
```

## What this package does not do

This package keeps only a node's local view of the ring. It does not include:

- transports, networking or message sending;
- a signing or session layer;
- storage for virtual nodes or data on the ring;
- a background stabilization loop;
- a daemon or command-line tool.

The `PeerRingAction` values say what should be sent to which node. Carrying that out
is left to the caller. `Measure` is an interface only, with no implementation.

## Running the tests

```
pip install .[test]
pytest
```