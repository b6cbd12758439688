"""DID document data model and its binary wire encoding."""

from __future__ import annotations

import itertools
import struct
from dataclasses import dataclass, field

_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_unique_counter = itertools.count(1)

PUBKEY_LENGTH = 32


class DecodeError(ValueError):
    """Raised when bytes cannot be decoded into the expected structure."""


class Reader:
    """Sequential little-endian reader over a byte string."""

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0

    def read_fixed(self, size):
        if size < 0:
            raise DecodeError(f"invalid length {size}")
        end = self._pos + size
        if end > len(self._data):
            raise DecodeError(
                f"unexpected end of data: wanted {size} bytes, {self.remaining()} left"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _unpack(self, fmt):
        (value,) = struct.unpack(fmt, self.read_fixed(struct.calcsize(fmt)))
        return value

    def read_u8(self):
        return self._unpack("<B")

    def read_u32(self):
        return self._unpack("<I")

    def read_i64(self):
        return self._unpack("<q")

    def read_bytes(self):
        return self.read_fixed(self.read_u32())

    def read_string(self):
        raw = self.read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8 string: {exc}") from exc

    def remaining(self):
        return len(self._data) - self._pos


class Writer:
    """Little-endian writer that accumulates bytes."""

    def __init__(self):
        self._buffer = bytearray()

    def _pack(self, fmt, value):
        try:
            self._buffer += struct.pack(fmt, value)
        except struct.error as exc:
            raise ValueError(f"value {value!r} out of range: {exc}") from exc

    def write_u8(self, value):
        self._pack("<B", value)

    def write_u32(self, value):
        self._pack("<I", value)

    def write_i64(self, value):
        self._pack("<q", value)

    def write_fixed(self, value):
        self._buffer += bytes(value)

    def write_bytes(self, value):
        value = bytes(value)
        self.write_u32(len(value))
        self.write_fixed(value)

    def write_string(self, value):
        self.write_bytes(value.encode("utf-8"))

    def getvalue(self):
        return bytes(self._buffer)


def _b58encode(raw: bytes) -> str:
    number = int.from_bytes(raw, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_BASE58_ALPHABET[rem])
    leading_zeros = len(raw) - len(raw.lstrip(b"\0"))
    return "1" * leading_zeros + "".join(reversed(digits))


@dataclass(frozen=True)
class Pubkey:
    """A 32-byte account address."""

    raw: bytes

    def __post_init__(self):
        raw = bytes(self.raw)
        if len(raw) != PUBKEY_LENGTH:
            raise ValueError(f"public key must be {PUBKEY_LENGTH} bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def new_unique(cls):
        """Return a key that differs from every other key made this way."""
        return cls(next(_unique_counter).to_bytes(8, "big") + bytes(PUBKEY_LENGTH - 8))

    def __str__(self):
        return _b58encode(self.raw)


@dataclass
class DIDPublicKey:
    """A verification key listed in a DID document."""

    id: str
    key_type: str
    public_keys: bytes
    controller: str

    def encode(self, writer):
        writer.write_string(self.id)
        writer.write_string(self.key_type)
        writer.write_bytes(self.public_keys)
        writer.write_string(self.controller)

    @classmethod
    def decode(cls, reader):
        return cls(
            id=reader.read_string(),
            key_type=reader.read_string(),
            public_keys=reader.read_bytes(),
            controller=reader.read_string(),
        )


@dataclass
class DIDService:
    """A service endpoint listed in a DID document."""

    id: str
    service_type: str
    service_endpoint: str

    def encode(self, writer):
        writer.write_string(self.id)
        writer.write_string(self.service_type)
        writer.write_string(self.service_endpoint)

    @classmethod
    def decode(cls, reader):
        return cls(
            id=reader.read_string(),
            service_type=reader.read_string(),
            service_endpoint=reader.read_string(),
        )


@dataclass
class DIDDocument:
    """A decentralized identifier document stored in an account."""

    version: int
    owner: Pubkey
    public_keys: list = field(default_factory=list)
    services: list = field(default_factory=list)
    created: int = 0
    updated: int = 0

    def encode(self, writer):
        writer.write_u8(self.version)
        writer.write_fixed(self.owner.raw)
        writer.write_u32(len(self.public_keys))
        for key in self.public_keys:
            key.encode(writer)
        writer.write_u32(len(self.services))
        for service in self.services:
            service.encode(writer)
        writer.write_i64(self.created)
        writer.write_i64(self.updated)

    @classmethod
    def decode(cls, reader):
        version = reader.read_u8()
        owner = Pubkey(reader.read_fixed(PUBKEY_LENGTH))
        public_keys = [DIDPublicKey.decode(reader) for _ in range(reader.read_u32())]
        services = [DIDService.decode(reader) for _ in range(reader.read_u32())]
        return cls(
            version=version,
            owner=owner,
            public_keys=public_keys,
            services=services,
            created=reader.read_i64(),
            updated=reader.read_i64(),
        )

    def to_bytes(self):
        writer = Writer()
        self.encode(writer)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data):
        """Decode a document that must occupy all of ``data``."""
        reader = Reader(data)
        document = cls.decode(reader)
        if reader.remaining():
            raise DecodeError(f"not all bytes read: {reader.remaining()} left over")
        return document