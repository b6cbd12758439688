"""Instructions understood by the DID registry and their wire encoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from didregistry.models import (
    DecodeError,
    DIDDocument,
    DIDPublicKey,
    DIDService,
    Reader,
    Writer,
)


@dataclass
class CreateDID:
    initial_doc: DIDDocument


@dataclass
class UpdateDID:
    updated_doc: DIDDocument


@dataclass
class AddPublicKey:
    public_key: DIDPublicKey


@dataclass
class RemovePublicKey:
    key_id: str


@dataclass
class AddService:
    service: DIDService


@dataclass
class RemoveService:
    service_id: str


Instruction = Union[
    CreateDID, UpdateDID, AddPublicKey, RemovePublicKey, AddService, RemoveService
]


def encode_instruction(instruction):
    """Encode an instruction as a one-byte variant tag followed by its fields."""
    writer = Writer()
    match instruction:
        case CreateDID(initial_doc=doc):
            writer.write_u8(0)
            doc.encode(writer)
        case UpdateDID(updated_doc=doc):
            writer.write_u8(1)
            doc.encode(writer)
        case AddPublicKey(public_key=key):
            writer.write_u8(2)
            key.encode(writer)
        case RemovePublicKey(key_id=key_id):
            writer.write_u8(3)
            writer.write_string(key_id)
        case AddService(service=service):
            writer.write_u8(4)
            service.encode(writer)
        case RemoveService(service_id=service_id):
            writer.write_u8(5)
            writer.write_string(service_id)
        case _:
            raise TypeError(f"not a DID instruction: {instruction!r}")
    return writer.getvalue()


def decode_instruction(data):
    """Decode an instruction; every byte of ``data`` must be consumed."""
    reader = Reader(data)
    tag = reader.read_u8()
    match tag:
        case 0:
            instruction = CreateDID(DIDDocument.decode(reader))
        case 1:
            instruction = UpdateDID(DIDDocument.decode(reader))
        case 2:
            instruction = AddPublicKey(DIDPublicKey.decode(reader))
        case 3:
            instruction = RemovePublicKey(reader.read_string())
        case 4:
            instruction = AddService(DIDService.decode(reader))
        case 5:
            instruction = RemoveService(reader.read_string())
        case _:
            raise DecodeError(f"unknown instruction variant {tag}")
    if reader.remaining():
        raise DecodeError(f"not all bytes read: {reader.remaining()} left over")
    return instruction