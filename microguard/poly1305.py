"""Poly1305 one-time authenticator."""

from __future__ import annotations

KEY_SIZE = 32
TAG_SIZE = 16
BLOCK_SIZE = 16

_P = (1 << 130) - 5
_R_CLAMP = 0x0FFFFFFC0FFFFFFC0FFFFFFC0FFFFFFF
_MASK128 = (1 << 128) - 1


class Poly1305:
    """Incremental Poly1305 MAC keyed with a 32-byte one-time key.

    The tag is produced once by finish(); the key material is dropped then
    and the object cannot be used again.
    """

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != KEY_SIZE:
            raise ValueError(f"key must be {KEY_SIZE} bytes")
        self._r = int.from_bytes(key[:16], "little") & _R_CLAMP
        self._s = int.from_bytes(key[16:], "little")
        self._acc = 0
        self._leftover = bytearray()
        self._finished = False

    def _check_open(self) -> None:
        if self._finished:
            raise RuntimeError("Poly1305 instance already finished")

    def _absorb(self, block: bytes) -> None:
        # Each block carries an extra 1 byte above its top, as in the spec.
        n = int.from_bytes(block + b"\x01", "little")
        self._acc = (self._acc + n) * self._r % _P

    def update(self, data: bytes) -> "Poly1305":
        """Feed more message bytes."""
        self._check_open()
        self._leftover += bytes(data)
        whole = len(self._leftover) - len(self._leftover) % BLOCK_SIZE
        for offset in range(0, whole, BLOCK_SIZE):
            self._absorb(bytes(self._leftover[offset:offset + BLOCK_SIZE]))
        del self._leftover[:whole]
        return self

    def finish(self) -> bytes:
        """Return the 16-byte tag and wipe the key state."""
        self._check_open()
        if self._leftover:
            self._absorb(bytes(self._leftover))
        tag = ((self._acc + self._s) & _MASK128).to_bytes(TAG_SIZE, "little")
        self._r = self._s = self._acc = 0
        self._leftover.clear()
        self._finished = True
        return tag


def poly1305_mac(key: bytes, data: bytes) -> bytes:
    """Compute the Poly1305 tag of data in one call."""
    return Poly1305(key).update(data).finish()