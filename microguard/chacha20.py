"""ChaCha20 stream cipher with a 64-bit nonce, and HChaCha20 subkey derivation."""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF
BLOCK_SIZE = 64
KEY_SIZE = 32
HCHACHA_NONCE_SIZE = 16

_CONSTANTS = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)

_QUARTER_ROUNDS = (
    (0, 4, 8, 12), (1, 5, 9, 13), (2, 6, 10, 14), (3, 7, 11, 15),
    (0, 5, 10, 15), (1, 6, 11, 12), (2, 7, 8, 13), (3, 4, 9, 14),
)


def _rotl(v: int, n: int) -> int:
    return ((v << n) & _MASK32) | (v >> (32 - n))


def _twenty_rounds(state: list[int]) -> list[int]:
    x = list(state)
    for _ in range(10):
        for a, b, c, d in _QUARTER_ROUNDS:
            x[a] = (x[a] + x[b]) & _MASK32
            x[d] = _rotl(x[d] ^ x[a], 16)
            x[c] = (x[c] + x[d]) & _MASK32
            x[b] = _rotl(x[b] ^ x[c], 12)
            x[a] = (x[a] + x[b]) & _MASK32
            x[d] = _rotl(x[d] ^ x[a], 8)
            x[c] = (x[c] + x[d]) & _MASK32
            x[b] = _rotl(x[b] ^ x[c], 7)
    return x


def _check_key(key: bytes) -> bytes:
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes")
    return key


class ChaCha20:
    """ChaCha20 keystream whose nonce is 32 zero bits followed by a 64-bit counter.

    Each call to process() consumes whole 64-byte blocks; keystream left over
    from a partial block is discarded.
    """

    def __init__(self, key: bytes, nonce: int = 0) -> None:
        key = _check_key(key)
        if not 0 <= nonce < 1 << 64:
            raise ValueError("nonce must fit in 64 bits")
        self._state = [
            *_CONSTANTS,
            *struct.unpack("<8I", key),
            0,
            0,
            nonce & _MASK32,
            nonce >> 32,
        ]

    @property
    def block_counter(self) -> int:
        return self._state[12]

    def _keystream_block(self) -> bytes:
        mixed = _twenty_rounds(self._state)
        block = struct.pack(
            "<16I", *((m + s) & _MASK32 for m, s in zip(mixed, self._state))
        )
        self._state[12] = (self._state[12] + 1) & _MASK32
        return block

    def process(self, data: bytes) -> bytes:
        """XOR data with the keystream; encrypts and decrypts alike."""
        data = bytes(data)
        out = bytearray()
        for offset in range(0, len(data), BLOCK_SIZE):
            chunk = data[offset:offset + BLOCK_SIZE]
            stream = self._keystream_block()[: len(chunk)]
            mixed = int.from_bytes(chunk, "little") ^ int.from_bytes(stream, "little")
            out += mixed.to_bytes(len(chunk), "little")
        return bytes(out)


def hchacha20(key: bytes, nonce: bytes) -> bytes:
    """Derive a 32-byte subkey from a key and a 16-byte nonce."""
    key = _check_key(key)
    nonce = bytes(nonce)
    if len(nonce) != HCHACHA_NONCE_SIZE:
        raise ValueError(f"nonce must be {HCHACHA_NONCE_SIZE} bytes")
    state = [*_CONSTANTS, *struct.unpack("<8I", key), *struct.unpack("<4I", nonce)]
    mixed = _twenty_rounds(state)
    return struct.pack("<8I", *mixed[:4], *mixed[12:])