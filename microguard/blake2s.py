"""BLAKE2s hashing with an optional key."""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
BLOCK_SIZE = 64
MAX_DIGEST_SIZE = 32
MAX_KEY_SIZE = 32

_IV = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

_SIGMA = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
)

_COLUMNS_AND_DIAGONALS = (
    (0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15),
    (0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14),
)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK32


def _compress(h: list[int], block: bytes, counter: int, last: bool) -> list[int]:
    """Mix one 64-byte block into the chained state and return the new state."""
    v = list(h) + list(_IV)
    counter &= _MASK64
    v[12] ^= counter & _MASK32
    v[13] ^= counter >> 32
    if last:
        v[14] ^= _MASK32
    m = struct.unpack("<16I", block)

    for sigma in _SIGMA:
        for step, (a, b, c, d) in enumerate(_COLUMNS_AND_DIAGONALS):
            x = m[sigma[2 * step]]
            y = m[sigma[2 * step + 1]]
            v[a] = (v[a] + v[b] + x) & _MASK32
            v[d] = _rotr(v[d] ^ v[a], 16)
            v[c] = (v[c] + v[d]) & _MASK32
            v[b] = _rotr(v[b] ^ v[c], 12)
            v[a] = (v[a] + v[b] + y) & _MASK32
            v[d] = _rotr(v[d] ^ v[a], 8)
            v[c] = (v[c] + v[d]) & _MASK32
            v[b] = _rotr(v[b] ^ v[c], 7)

    return [hi ^ lo ^ hh for hi, lo, hh in zip(v[:8], v[8:], h)]


class Blake2s:
    """Incremental BLAKE2s hash with a digest of 1 to 32 bytes and an optional key."""

    def __init__(self, digest_size: int = MAX_DIGEST_SIZE, key: bytes = b"") -> None:
        key = bytes(key)
        if not 1 <= digest_size <= MAX_DIGEST_SIZE:
            raise ValueError(f"digest_size must be between 1 and {MAX_DIGEST_SIZE}")
        if len(key) > MAX_KEY_SIZE:
            raise ValueError(f"key must be at most {MAX_KEY_SIZE} bytes")
        self._digest_size = digest_size
        self._h = list(_IV)
        self._h[0] ^= 0x01010000 ^ (len(key) << 8) ^ digest_size
        self._counter = 0
        self._buffer = bytearray()
        if key:
            self._buffer = bytearray(key.ljust(BLOCK_SIZE, b"\0"))

    @property
    def digest_size(self) -> int:
        return self._digest_size

    def update(self, data: bytes) -> "Blake2s":
        """Feed more bytes into the hash."""
        data = bytes(data)
        pos = 0
        while pos < len(data):
            if len(self._buffer) == BLOCK_SIZE:
                # A full block is only compressed once more input follows it.
                self._counter += BLOCK_SIZE
                self._h = _compress(self._h, bytes(self._buffer), self._counter, False)
                self._buffer.clear()
            take = min(BLOCK_SIZE - len(self._buffer), len(data) - pos)
            self._buffer += data[pos:pos + take]
            pos += take
        return self

    def digest(self) -> bytes:
        """Return the digest of everything fed so far; the hash may still be updated."""
        counter = self._counter + len(self._buffer)
        block = bytes(self._buffer).ljust(BLOCK_SIZE, b"\0")
        h = _compress(self._h, block, counter, True)
        return struct.pack("<8I", *h)[: self._digest_size]

    def hexdigest(self) -> str:
        return self.digest().hex()


def blake2s(data: bytes, digest_size: int = MAX_DIGEST_SIZE, key: bytes = b"") -> bytes:
    """Hash data in one call."""
    return Blake2s(digest_size, key).update(data).digest()