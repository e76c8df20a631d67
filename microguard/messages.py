"""Wire formats of the four protocol messages and message classification."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

TAI64N_LEN = 12
AUTHTAG_LEN = 16
HASH_LEN = 32
PUBLIC_KEY_LEN = 32
PRIVATE_KEY_LEN = 32
SESSION_KEY_LEN = 32
COOKIE_LEN = 16
COOKIE_NONCE_LEN = 24

COOKIE_SECRET_MAX_AGE = 2 * 60
REKEY_AFTER_MESSAGES = 1 << 60
REJECT_AFTER_MESSAGES = 0xFFFFFFFFFFFFFFFF - (1 << 13)
REKEY_AFTER_TIME = 120
REJECT_AFTER_TIME = 180
REKEY_TIMEOUT = 5
KEEPALIVE_TIMEOUT = 10

_RESERVED = b"\0\0\0"
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


class MessageType(IntEnum):
    """The type byte that starts every message."""

    INVALID = 0
    HANDSHAKE_INITIATION = 1
    HANDSHAKE_RESPONSE = 2
    COOKIE_REPLY = 3
    TRANSPORT_DATA = 4


def _zeros(size: int):
    return field(default_factory=lambda: bytes(size))


def _check_bytes(name: str, value: bytes, size: int) -> bytes:
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


def _check_u32(name: str, value: int) -> int:
    if not 0 <= value <= _MASK32:
        raise ValueError(f"{name} must fit in 32 bits")
    return value


def _check_header(data: bytes, expected: MessageType, size: int, exact: bool = True) -> bytes:
    data = bytes(data)
    if (len(data) != size) if exact else (len(data) < size):
        raise ValueError(f"{expected.name} message has the wrong length: {len(data)}")
    if data[0] != expected:
        raise ValueError(f"expected message type {int(expected)}, got {data[0]}")
    if data[1:4] != _RESERVED:
        raise ValueError("reserved bytes must be zero")
    return data


@dataclass
class HandshakeInitiation:
    """First handshake message, sent by the initiator."""

    sender: int = 0
    ephemeral: bytes = _zeros(PUBLIC_KEY_LEN)
    enc_static: bytes = _zeros(PUBLIC_KEY_LEN + AUTHTAG_LEN)
    enc_timestamp: bytes = _zeros(TAI64N_LEN + AUTHTAG_LEN)
    mac1: bytes = _zeros(COOKIE_LEN)
    mac2: bytes = _zeros(COOKIE_LEN)

    TYPE: ClassVar[MessageType] = MessageType.HANDSHAKE_INITIATION
    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<B3sI32s48s28s16s16s")
    SIZE: ClassVar[int] = _FORMAT.size

    def __post_init__(self) -> None:
        self.sender = _check_u32("sender", self.sender)
        self.ephemeral = _check_bytes("ephemeral", self.ephemeral, PUBLIC_KEY_LEN)
        self.enc_static = _check_bytes("enc_static", self.enc_static, PUBLIC_KEY_LEN + AUTHTAG_LEN)
        self.enc_timestamp = _check_bytes("enc_timestamp", self.enc_timestamp, TAI64N_LEN + AUTHTAG_LEN)
        self.mac1 = _check_bytes("mac1", self.mac1, COOKIE_LEN)
        self.mac2 = _check_bytes("mac2", self.mac2, COOKIE_LEN)

    def pack(self) -> bytes:
        """Serialise to the 148-byte wire form."""
        return self._FORMAT.pack(
            self.TYPE, _RESERVED, self.sender, self.ephemeral,
            self.enc_static, self.enc_timestamp, self.mac1, self.mac2,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "HandshakeInitiation":
        """Parse the wire form, raising ValueError if it is malformed."""
        data = _check_header(data, cls.TYPE, cls.SIZE)
        _, _, sender, ephemeral, enc_static, enc_timestamp, mac1, mac2 = cls._FORMAT.unpack(data)
        return cls(sender, ephemeral, enc_static, enc_timestamp, mac1, mac2)


@dataclass
class HandshakeResponse:
    """Second handshake message, sent by the responder."""

    sender: int = 0
    receiver: int = 0
    ephemeral: bytes = _zeros(PUBLIC_KEY_LEN)
    enc_empty: bytes = _zeros(AUTHTAG_LEN)
    mac1: bytes = _zeros(COOKIE_LEN)
    mac2: bytes = _zeros(COOKIE_LEN)

    TYPE: ClassVar[MessageType] = MessageType.HANDSHAKE_RESPONSE
    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<B3sII32s16s16s16s")
    SIZE: ClassVar[int] = _FORMAT.size

    def __post_init__(self) -> None:
        self.sender = _check_u32("sender", self.sender)
        self.receiver = _check_u32("receiver", self.receiver)
        self.ephemeral = _check_bytes("ephemeral", self.ephemeral, PUBLIC_KEY_LEN)
        self.enc_empty = _check_bytes("enc_empty", self.enc_empty, AUTHTAG_LEN)
        self.mac1 = _check_bytes("mac1", self.mac1, COOKIE_LEN)
        self.mac2 = _check_bytes("mac2", self.mac2, COOKIE_LEN)

    def pack(self) -> bytes:
        """Serialise to the 92-byte wire form."""
        return self._FORMAT.pack(
            self.TYPE, _RESERVED, self.sender, self.receiver,
            self.ephemeral, self.enc_empty, self.mac1, self.mac2,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "HandshakeResponse":
        """Parse the wire form, raising ValueError if it is malformed."""
        data = _check_header(data, cls.TYPE, cls.SIZE)
        _, _, sender, receiver, ephemeral, enc_empty, mac1, mac2 = cls._FORMAT.unpack(data)
        return cls(sender, receiver, ephemeral, enc_empty, mac1, mac2)


@dataclass
class CookieReply:
    """Cookie reply sent by a responder under load."""

    receiver: int = 0
    nonce: bytes = _zeros(COOKIE_NONCE_LEN)
    enc_cookie: bytes = _zeros(COOKIE_LEN + AUTHTAG_LEN)

    TYPE: ClassVar[MessageType] = MessageType.COOKIE_REPLY
    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<B3sI24s32s")
    SIZE: ClassVar[int] = _FORMAT.size

    def __post_init__(self) -> None:
        self.receiver = _check_u32("receiver", self.receiver)
        self.nonce = _check_bytes("nonce", self.nonce, COOKIE_NONCE_LEN)
        self.enc_cookie = _check_bytes("enc_cookie", self.enc_cookie, COOKIE_LEN + AUTHTAG_LEN)

    def pack(self) -> bytes:
        """Serialise to the 64-byte wire form."""
        return self._FORMAT.pack(self.TYPE, _RESERVED, self.receiver, self.nonce, self.enc_cookie)

    @classmethod
    def unpack(cls, data: bytes) -> "CookieReply":
        """Parse the wire form, raising ValueError if it is malformed."""
        data = _check_header(data, cls.TYPE, cls.SIZE)
        _, _, receiver, nonce, enc_cookie = cls._FORMAT.unpack(data)
        return cls(receiver, nonce, enc_cookie)


@dataclass
class TransportHeader:
    """Header of a transport data message; the encrypted packet follows it."""

    receiver: int = 0
    counter: int = 0

    TYPE: ClassVar[MessageType] = MessageType.TRANSPORT_DATA
    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<B3sIQ")
    SIZE: ClassVar[int] = _FORMAT.size

    def __post_init__(self) -> None:
        self.receiver = _check_u32("receiver", self.receiver)
        if not 0 <= self.counter <= _MASK64:
            raise ValueError("counter must fit in 64 bits")

    def pack(self) -> bytes:
        """Serialise the 16-byte header."""
        return self._FORMAT.pack(self.TYPE, _RESERVED, self.receiver, self.counter)

    @classmethod
    def unpack(cls, data: bytes) -> "TransportHeader":
        """Parse the header at the start of data; bytes after it are ignored."""
        data = _check_header(data, cls.TYPE, cls.SIZE, exact=False)
        _, _, receiver, counter = cls._FORMAT.unpack(data[: cls.SIZE])
        return cls(receiver, counter)


def get_message_type(data: bytes) -> MessageType:
    """Classify raw bytes by type byte, reserved bytes and length."""
    data = bytes(data)
    if len(data) < 4 or data[1:4] != _RESERVED:
        return MessageType.INVALID
    kind = data[0]
    length = len(data)
    if kind == MessageType.HANDSHAKE_INITIATION and length == HandshakeInitiation.SIZE:
        return MessageType.HANDSHAKE_INITIATION
    if kind == MessageType.HANDSHAKE_RESPONSE and length == HandshakeResponse.SIZE:
        return MessageType.HANDSHAKE_RESPONSE
    if kind == MessageType.COOKIE_REPLY and length == CookieReply.SIZE:
        return MessageType.COOKIE_REPLY
    if kind == MessageType.TRANSPORT_DATA and length >= TransportHeader.SIZE + AUTHTAG_LEN:
        return MessageType.TRANSPORT_DATA
    return MessageType.INVALID