"""Hashing, HMAC and key derivation used by the Noise IKpsk2 handshake."""

from __future__ import annotations

from functools import lru_cache

from microguard.blake2s import BLOCK_SIZE, Blake2s, blake2s

HASH_LEN = 32
COOKIE_LEN = 16
SESSION_KEY_LEN = 32
IDENTIFIER_LEN = 34

CONSTRUCTION = b"Noise_IKpsk2_25519_ChaChaPoly_BLAKE2s"
IDENTIFIER = b"WireGuard v1 zx2c4 [email]".ljust(IDENTIFIER_LEN, b"\0")
LABEL_MAC1 = b"mac1----"
LABEL_COOKIE = b"cookie--"


def hmac_blake2s(key: bytes, data: bytes) -> bytes:
    """HMAC with BLAKE2s-256 as the hash, over 64-byte blocks."""
    key = bytes(key)
    if len(key) > BLOCK_SIZE:
        key = blake2s(key)
    key = key.ljust(BLOCK_SIZE, b"\0")
    inner_pad = bytes(b ^ 0x36 for b in key)
    outer_pad = bytes(b ^ 0x5C for b in key)
    inner = Blake2s().update(inner_pad).update(bytes(data)).digest()
    return Blake2s().update(outer_pad).update(inner).digest()


def _expand(chaining_key: bytes, data: bytes, count: int) -> tuple[bytes, ...]:
    tau0 = hmac_blake2s(chaining_key, data)
    outputs: list[bytes] = []
    previous = b""
    for label in range(1, count + 1):
        previous = hmac_blake2s(tau0, previous + bytes([label]))
        outputs.append(previous)
    return tuple(outputs)


def kdf1(chaining_key: bytes, data: bytes) -> bytes:
    """Derive one 32-byte output from the chaining key and input."""
    return _expand(chaining_key, data, 1)[0]


def kdf2(chaining_key: bytes, data: bytes) -> tuple[bytes, bytes]:
    """Derive two 32-byte outputs from the chaining key and input."""
    first, second = _expand(chaining_key, data, 2)
    return first, second


def kdf3(chaining_key: bytes, data: bytes) -> tuple[bytes, bytes, bytes]:
    """Derive three 32-byte outputs from the chaining key and input."""
    first, second, third = _expand(chaining_key, data, 3)
    return first, second, third


def mix_hash(current: bytes, data: bytes) -> bytes:
    """Return Hash(current || data)."""
    return blake2s(bytes(current) + bytes(data), HASH_LEN)


def mac(key: bytes, data: bytes) -> bytes:
    """Keyed BLAKE2s with a 16-byte output."""
    return blake2s(data, COOKIE_LEN, key)


def mac_key(label: bytes, public_key: bytes) -> bytes:
    """Return Hash(label || public_key), the key for mac1 or cookie encryption."""
    return blake2s(bytes(label) + bytes(public_key), SESSION_KEY_LEN)


@lru_cache(maxsize=None)
def construction_hash() -> bytes:
    """Initial chaining key: Hash(Construction)."""
    return blake2s(CONSTRUCTION, HASH_LEN)


@lru_cache(maxsize=None)
def identifier_hash() -> bytes:
    """Initial handshake hash: Hash(Hash(Construction) || Identifier)."""
    return mix_hash(construction_hash(), IDENTIFIER)