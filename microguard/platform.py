"""Clock, timestamp and randomness services used by the protocol."""

from __future__ import annotations

import secrets
import struct
import time

TAI64N_SIZE = 12
# TAI64 label for the Unix epoch: 2^62 plus the 10-second TAI offset.
TAI64_EPOCH = 0x400000000000000A

_MASK32 = 0xFFFFFFFF


def now_ms() -> int:
    """Return a monotonic millisecond clock that wraps at 32 bits."""
    return (time.monotonic_ns() // 1_000_000) & _MASK32


def tai64n(unix_micros: int) -> bytes:
    """Encode a Unix time in microseconds as a 12-byte big-endian TAI64N label."""
    if unix_micros < 0:
        raise ValueError("unix_micros must not be negative")
    seconds, micros = divmod(unix_micros, 1_000_000)
    return struct.pack(">QI", TAI64_EPOCH + seconds, micros * 1000)


def tai64n_now() -> bytes:
    """Return the TAI64N label for the current wall-clock time."""
    return tai64n(time.time_ns() // 1000)


def random_bytes(size: int) -> bytes:
    """Return size bytes from the operating system's secure random source."""
    if size < 0:
        raise ValueError("size must not be negative")
    return secrets.token_bytes(size)


def is_under_load() -> bool:
    """Report whether handshakes should be answered with cookie replies."""
    return False