"""
ID generation using UUIDv7 (time-ordered UUIDs)

Allocation, incident and plan ids are prefixed UUIDv7 values, so sorting
them lexically also sorts them by creation time.

Fun fact: UUIDv7 was only standardized in 2024 (RFC 9562), almost two
decades after the random UUIDv4 became the default everywhere.
"""

import secrets
import time
import uuid


def generate_id() -> str:
    """
    Generate a UUIDv7 string

    Layout (RFC 9562): 48-bit unix milliseconds, 4-bit version (7),
    12 random bits, 2-bit variant (10), 62 random bits.
    """
    timestamp_ms = int(time.time() * 1000) & 0xFFFFFFFFFFFF
    value = (
        (timestamp_ms << 80)
        | (0x7 << 76)
        | (secrets.randbits(12) << 64)
        | (0b10 << 62)
        | secrets.randbits(62)
    )
    return str(uuid.UUID(int=value))


def prefixed_id(prefix: str) -> str:
    """Generate an id such as ``allocation-0192...``"""
    return f"{prefix}-{generate_id()}"
