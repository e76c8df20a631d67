"""WireGuard protocol building blocks: primitives, key derivation and message formats."""

__version__ = "0.1.0"

__all__ = [
    "blake2s",
    "chacha20",
    "ctutil",
    "kdf",
    "keycodec",
    "messages",
    "platform",
    "poly1305",
    "x25519",
]