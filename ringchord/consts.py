"""Protocol-wide constants."""

DEFAULT_TTL_MS = 300 * 1000
"""Default time to live of a message chunk, in milliseconds."""

MAX_TTL_MS = DEFAULT_TTL_MS * 10
"""Largest time to live a chunk may carry, in milliseconds."""

TS_OFFSET_TOLERANCE_MS = 3000
"""How far in the future a chunk timestamp may lie, in milliseconds."""

DEFAULT_SESSION_TTL_MS = 30 * 24 * 3600 * 1000
"""Default lifetime of a signing session, in milliseconds."""

TRANSPORT_MTU = 60000
"""Largest payload sent over a transport in one piece."""

TRANSPORT_MAX_SIZE = TRANSPORT_MTU * 16
"""Largest message accepted by a transport."""

VNODE_DATA_MAX_LEN = 1024
"""Largest number of data entries kept in one virtual node."""