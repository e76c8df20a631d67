"""X25519 scalar multiplication on Curve25519 (Montgomery ladder)."""

from __future__ import annotations

X25519_BYTES = 32
PUBLIC_KEY_SIZE = 32
PRIVATE_KEY_SIZE = 32

BASE_POINT = bytes([9]) + bytes(31)

_P = (1 << 255) - 19
_A24 = 121665


class NonContributoryError(ValueError):
    """Raised when a clamped scalar multiplication yields the all-zero output."""


def _check(name: str, value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != X25519_BYTES:
        raise ValueError(f"{name} must be {X25519_BYTES} bytes")
    return value


def _clamped(scalar: bytes) -> int:
    k = bytearray(scalar)
    k[0] &= 0xF8
    k[31] = (k[31] & 0x7F) | 0x40
    return int.from_bytes(k, "little")


def _ladder(k: int, u: int) -> int:
    """Return the affine x-coordinate of k*u, processing all 256 scalar bits."""
    x1 = u % _P
    x2, z2 = 1, 0
    x3, z3 = x1, 1
    swap = 0
    for bit_index in range(255, -1, -1):
        bit = (k >> bit_index) & 1
        if swap ^ bit:
            x2, x3 = x3, x2
            z2, z3 = z3, z2
        swap = bit

        a = (x2 + z2) % _P
        aa = a * a % _P
        b = (x2 - z2) % _P
        bb = b * b % _P
        e = (aa - bb) % _P
        c = (x3 + z3) % _P
        d = (x3 - z3) % _P
        da = d * a % _P
        cb = c * b % _P
        x3 = (da + cb) % _P
        x3 = x3 * x3 % _P
        z3 = (da - cb) % _P
        z3 = x1 * (z3 * z3) % _P
        x2 = aa * bb % _P
        z2 = e * (aa + _A24 * e) % _P

    if swap:
        x2, z2 = x3, z3
    # pow(0, p - 2, p) is 0, so a point at infinity comes out as zero.
    return x2 * pow(z2, _P - 2, _P) % _P


def x25519(scalar: bytes, point: bytes = BASE_POINT, clamp: bool = True) -> bytes:
    """Multiply the point (a 32-byte u-coordinate) by the 32-byte scalar.

    With clamp set the scalar is clamped like a Curve25519 secret key and an
    all-zero result raises NonContributoryError. The top bit of the point is
    not masked: it takes part in the value, which is reduced modulo 2^255-19.
    """
    scalar = _check("scalar", scalar)
    point = _check("point", point)
    k = _clamped(scalar) if clamp else int.from_bytes(scalar, "little")
    u = int.from_bytes(point, "little")
    result = _ladder(k, u)
    if clamp and result == 0:
        raise NonContributoryError("x25519 produced the all-zero output")
    return result.to_bytes(X25519_BYTES, "little")


def x25519_base(scalar: bytes, clamp: bool = True) -> bytes:
    """Multiply the base point 9 by the scalar."""
    return x25519(scalar, BASE_POINT, clamp)