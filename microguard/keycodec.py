"""Base64 text form of keys, with strict padding rules and a length limit."""

from __future__ import annotations

import base64
from typing import Optional

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_LOOKUP = {char: value for value, char in enumerate(_ALPHABET)}


def base64_encode(data: bytes) -> str:
    """Encode bytes as padded standard base64 text."""
    return base64.b64encode(bytes(data)).decode("ascii")


def base64_decode(text: str, max_length: Optional[int] = None) -> bytes:
    """Decode padded base64 text, raising ValueError if it is malformed.

    The input must be a whole number of 4-character groups; '=' may only
    appear at the end. If max_length is given, decoding more than that many
    bytes is an error.
    """
    out = bytearray()
    accum = 0
    char_count = 0
    byte_count = 3
    for char in text:
        if char == "=":
            bits = 0
            byte_count -= 1
            if byte_count < 0:
                raise ValueError("too much padding")
        else:
            if byte_count != 3:
                raise ValueError("data after padding")
            try:
                bits = _LOOKUP[char]
            except KeyError:
                raise ValueError(f"invalid base64 character {char!r}") from None
        accum = (accum << 6) | bits
        char_count += 1
        if char_count == 4:
            if max_length is not None and len(out) + byte_count > max_length:
                raise ValueError(f"decoded data exceeds {max_length} bytes")
            out.append((accum >> 16) & 0xFF)
            if byte_count > 1:
                out.append((accum >> 8) & 0xFF)
            if byte_count > 2:
                out.append(accum & 0xFF)
            char_count = 0
            accum = 0
    if char_count:
        raise ValueError("input length is not a multiple of 4")
    return bytes(out)