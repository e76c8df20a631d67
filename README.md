# microguard

A small, dependency-free Python library holding the building blocks of the
WireGuard protocol: the cryptographic primitives it is made of, the key
derivation and MAC helpers of its Noise IKpsk2 handshake, the wire formats
of its four message types, TAI64N timestamps and the base64 text form of
keys.

It is written for clarity and testability, not speed.

## Installation

```
pip install .
```

For development, with the test dependencies:

```
pip install .[test]
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `microguard.blake2s` | `Blake2s` hash object (`update`, `digest`, `hexdigest`, `digest_size`) and the one-shot `blake2s(data, digest_size, key)`; digests of 1 to 32 bytes, keys of up to 32 bytes |
| `microguard.chacha20` | `ChaCha20(key, nonce)` stream cipher whose nonce is a 64-bit counter, with `process(data)`; `hchacha20(key, nonce)` subkey derivation from a 16-byte nonce |
| `microguard.poly1305` | `Poly1305(key)` authenticator with `update` and a one-time `finish`; `poly1305_mac(key, data)` |
| `microguard.x25519` | `x25519(scalar, point, clamp)`, `x25519_base(scalar, clamp)`, `BASE_POINT`, `NonContributoryError` |
| `microguard.ctutil` | `constant_time_equal(a, b)` and `wipe(buffer)`, which zeroes a writable buffer in place |
| `microguard.platform` | `now_ms()` (monotonic, wraps at 32 bits), `tai64n(unix_micros)`, `tai64n_now()`, `random_bytes(size)`, `is_under_load()` |
| `microguard.messages` | `MessageType`, the dataclasses `HandshakeInitiation`, `HandshakeResponse`, `CookieReply` and `TransportHeader` with `pack`/`unpack`, and `get_message_type(data)`; protocol constants such as `COOKIE_SECRET_MAX_AGE` and `REKEY_AFTER_TIME` |
| `microguard.kdf` | `hmac_blake2s`, `kdf1`/`kdf2`/`kdf3`, `mix_hash`, `mac`, `mac_key`, `construction_hash()`, `identifier_hash()` and the labels `LABEL_MAC1`, `LABEL_COOKIE` |
| `microguard.keycodec` | `base64_encode(data)` and a strict `base64_decode(text, max_length)` |

## Examples

An X25519 key exchange. With `clamp` on (the default) the scalar is clamped
like a Curve25519 private key, and an all-zero result raises
`NonContributoryError`:

```python
from microguard.platform import random_bytes
from microguard.x25519 import x25519, x25519_base

alice_private = random_bytes(32)
bob_private = random_bytes(32)
alice_public = x25519_base(alice_private)
bob_public = x25519_base(bob_private)

assert x25519(alice_private, bob_public) == x25519(bob_private, alice_public)
```

Hashing, key derivation and MACs:

```python
from microguard.blake2s import blake2s
from microguard.kdf import LABEL_MAC1, construction_hash, kdf2, mac, mac_key

digest = blake2s(b"abc")                     # 32 bytes
chaining_key, key = kdf2(construction_hash(), b"input")
mac1_key = mac_key(LABEL_MAC1, bytes(32))
tag = mac(mac1_key, b"message")              # 16 bytes
```

Encrypting with ChaCha20 and authenticating with Poly1305:

```python
from microguard.chacha20 import ChaCha20
from microguard.poly1305 import poly1305_mac

key = bytes(range(32))
ciphertext = ChaCha20(key, 7).process(b"hello")
assert ChaCha20(key, 7).process(ciphertext) == b"hello"

tag = poly1305_mac(bytes(range(32)), ciphertext)
```

Building and classifying messages:

```python
from microguard.messages import (
    HandshakeInitiation, MessageType, TransportHeader, get_message_type,
)

wire = HandshakeInitiation(sender=1).pack()      # 148 bytes
assert get_message_type(wire) is MessageType.HANDSHAKE_INITIATION
assert HandshakeInitiation.unpack(wire).sender == 1

header = TransportHeader(receiver=5, counter=0).pack()   # 16 bytes
assert get_message_type(header + bytes(16)) is MessageType.TRANSPORT_DATA
```

`unpack` raises `ValueError` on a wrong length, type byte or non-zero
reserved bytes; `get_message_type` returns `MessageType.INVALID` instead.

Timestamps and keys in text form:

```python
from microguard.platform import tai64n
from microguard.keycodec import base64_decode, base64_encode

stamp = tai64n(1_000_000)        # 12-byte big-endian TAI64N label
text = base64_encode(bytes(32))
assert base64_decode(text, 32) == bytes(32)
```

`base64_decode` raises `ValueError` on characters outside the standard
alphabet, data after `=` padding, too much padding, input that is not a
whole number of 4-character groups, or more than `max_length` decoded bytes.

## What this package does not do

It provides the parts, not a working endpoint. There is no
ChaCha20-Poly1305 AEAD construction, no code that builds or processes
handshake messages, no device, peer or session-keypair state, no replay
window, no cookie-reply handling and no transport encryption. It opens no
sockets and has no command-line program; sending and receiving packets is
left to the caller.