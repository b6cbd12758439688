"""Instruction processing for DID documents held in program-owned accounts."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from didregistry.instruction import (
    AddPublicKey,
    AddService,
    CreateDID,
    RemovePublicKey,
    RemoveService,
    UpdateDID,
    decode_instruction,
)
from didregistry.models import DecodeError, DIDDocument, Pubkey

log = logging.getLogger(__name__)


class ProgramError(Exception):
    """Base error for a rejected instruction."""


class IncorrectProgramId(ProgramError):
    """The account is not owned by this program."""


class MissingRequiredSignature(ProgramError):
    """A required signer did not sign."""


class InvalidAccountData(ProgramError):
    """Account contents do not satisfy the instruction."""


class NotEnoughAccountKeys(ProgramError):
    """Fewer accounts were supplied than the instruction needs."""


@dataclass
class AccountInfo:
    """An account handed to the program; ``data`` is mutated in place."""

    key: Pubkey
    owner: Pubkey
    data: bytearray
    is_signer: bool = False
    is_writable: bool = False
    lamports: int = 0

    def __post_init__(self):
        if not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)


def _take_accounts(accounts, count):
    accounts = list(accounts)
    if len(accounts) < count:
        raise NotEnoughAccountKeys(
            f"expected at least {count} accounts, got {len(accounts)}"
        )
    return accounts[:count]


def _load_document(account):
    try:
        return DIDDocument.from_bytes(bytes(account.data))
    except (DecodeError, ValueError) as exc:
        raise ProgramError(f"failed to decode DID document: {exc}") from exc


def _store_document(account, document):
    encoded = document.to_bytes()
    if len(encoded) > len(account.data):
        raise ProgramError(
            f"account data too small: need {len(encoded)} bytes, have {len(account.data)}"
        )
    account.data[: len(encoded)] = encoded


def _check_program_owned(program_id, did_account):
    if did_account.owner != program_id:
        log.info("DID account is not owned by the program")
        raise IncorrectProgramId("DID account is not owned by the program")


def _authorized_document(program_id, accounts):
    """Return the DID account and its document after owner and signer checks."""
    did_account, owner = _take_accounts(accounts, 2)
    _check_program_owned(program_id, did_account)
    if not owner.is_signer:
        log.info("Owner did not sign the transaction")
        raise MissingRequiredSignature("owner did not sign the transaction")
    document = _load_document(did_account)
    if document.owner != owner.key:
        log.info("Signer is not the owner of the DID")
        raise InvalidAccountData("signer is not the owner of the DID")
    return did_account, document


def _bump(document, now):
    # The version counter is a single byte on chain and wraps.
    document.version = (document.version + 1) % 256
    document.updated = now


def create_did(program_id, accounts, doc):
    """Write ``doc`` into the DID account; the payer must be the document owner."""
    did_account, payer, _system_program = _take_accounts(accounts, 3)
    _check_program_owned(program_id, did_account)
    if payer.key != doc.owner:
        log.info("payer is not the owner of account data")
        raise InvalidAccountData("payer is not the owner of the document")
    _load_document(did_account)
    _store_document(did_account, doc)


def update_did(program_id, accounts, updated_doc, now):
    """Replace the document with a newer version, stamping the update time."""
    did_account, current = _authorized_document(program_id, accounts)
    if updated_doc.version <= current.version:
        log.info("Version must increment")
        raise InvalidAccountData("version must increment")
    updated_doc.updated = now
    _store_document(did_account, updated_doc)


def add_public_key(program_id, accounts, public_key, now):
    """Append a public key whose id is not yet in the document."""
    did_account, document = _authorized_document(program_id, accounts)
    if any(key.id == public_key.id for key in document.public_keys):
        log.info("Public key with this ID already exists")
        raise InvalidAccountData(f"public key {public_key.id!r} already exists")
    document.public_keys.append(public_key)
    _bump(document, now)
    _store_document(did_account, document)


def remove_public_key(program_id, accounts, key_id, now):
    """Remove the public key with the given id."""
    did_account, document = _authorized_document(program_id, accounts)
    match = next((key for key in document.public_keys if key.id == key_id), None)
    if match is None:
        raise InvalidAccountData(f"no public key with id {key_id!r}")
    document.public_keys.remove(match)
    _bump(document, now)
    _store_document(did_account, document)


def add_service(program_id, accounts, service, now):
    """Append a service whose id is not yet in the document."""
    did_account, document = _authorized_document(program_id, accounts)
    if any(existing.id == service.id for existing in document.services):
        log.info("Service with this ID already exists")
        raise InvalidAccountData(f"service {service.id!r} already exists")
    document.services.append(service)
    _bump(document, now)
    _store_document(did_account, document)


def remove_service(program_id, accounts, service_id, now):
    """Remove the service with the given id."""
    did_account, document = _authorized_document(program_id, accounts)
    match = next((s for s in document.services if s.id == service_id), None)
    if match is None:
        raise InvalidAccountData(f"no service with id {service_id!r}")
    document.services.remove(match)
    _bump(document, now)
    _store_document(did_account, document)


def process_instruction(program_id, accounts, instruction_data, clock=None):
    """Decode and execute one instruction; ``clock`` returns the unix time."""
    log.info("Processing Instruction")
    try:
        instruction = decode_instruction(instruction_data)
    except DecodeError as exc:
        raise ProgramError(f"invalid instruction data: {exc}") from exc

    def now():
        return int(clock()) if clock is not None else int(time.time())

    log.info(type(instruction).__name__)
    match instruction:
        case CreateDID(initial_doc=doc):
            create_did(program_id, accounts, doc)
        case UpdateDID(updated_doc=doc):
            update_did(program_id, accounts, doc, now())
        case AddPublicKey(public_key=key):
            add_public_key(program_id, accounts, key, now())
        case RemovePublicKey(key_id=key_id):
            remove_public_key(program_id, accounts, key_id, now())
        case AddService(service=service):
            add_service(program_id, accounts, service, now())
        case RemoveService(service_id=service_id):
            remove_service(program_id, accounts, service_id, now())