"""Constant-time comparison and wiping of sensitive buffers."""

from __future__ import annotations

import hmac


def constant_time_equal(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without revealing where they differ."""
    return hmac.compare_digest(bytes(a), bytes(b))


def wipe(buffer: bytearray | memoryview) -> None:
    """Overwrite a writable buffer with zero bytes in place."""
    view = memoryview(buffer)
    if view.readonly:
        raise TypeError("cannot wipe a read-only buffer")
    view = view.cast("B")
    view[:] = bytes(view.nbytes)