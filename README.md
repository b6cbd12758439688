# didregistry

A small registry for decentralized identifier (DID) documents. It has three parts:

- `didregistry.models`: the document data model (`DIDDocument`, `DIDPublicKey`, `DIDService`, `Pubkey`) and a compact, deterministic little-endian binary encoding built on `Reader` and `Writer`;
- `didregistry.instruction`: the instructions that create and change documents, with the same encoding;
- `didregistry.processor`: applies an encoded instruction to in-memory account data and checks ownership, signatures and versions.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the tests:

```
pip install ".[test]"
pytest
```

## Documents

```python
from didregistry.models import DIDDocument, DIDPublicKey, DIDService, Pubkey

owner = Pubkey.new_unique()
doc = DIDDocument(
    version=1,
    owner=owner,
    public_keys=[
        DIDPublicKey(
            id="1",
            key_type="Ed25519VerificationKey2018",
            public_keys=bytes(range(1, 33)),
            controller="did:example:owner",
        )
    ],
    services=[
        DIDService(
            id="auth-service",
            service_type="LinkedDomains",
            service_endpoint="https://example.com/auth",
        )
    ],
    created=1_650_000_000,
    updated=1_650_000_000,
)

raw = doc.to_bytes()
assert DIDDocument.from_bytes(raw) == doc
```

A `Pubkey` wraps exactly 32 bytes; `str()` gives its base58 form. `Pubkey.new_unique()` returns a key distinct from every other key it has returned in the process.

`DIDDocument.from_bytes` requires the document to fill the whole input. Truncated input, invalid UTF-8 or left-over bytes raise `didregistry.models.DecodeError` (a `ValueError`). Writing a value that does not fit its field (for example a `version` above 255) raises `ValueError`.

## Instructions

Each change to a document is one of `CreateDID`, `UpdateDID`, `AddPublicKey`, `RemovePublicKey`, `AddService` and `RemoveService`. An encoded instruction is a one-byte variant tag (0 to 5, in that order) followed by its fields:

```python
from didregistry.instruction import AddService, decode_instruction, encode_instruction
from didregistry.models import DIDService

service = DIDService("storage", "CredentialRepository", "https://example.com/storage")
data = encode_instruction(AddService(service=service))
assert decode_instruction(data) == AddService(service=service)
```

`decode_instruction` raises `DecodeError` for an unknown tag or left-over bytes; `encode_instruction` raises `TypeError` for anything that is not an instruction.

## Processing

`process_instruction(program_id, accounts, instruction_data, clock=None)` decodes the instruction and applies it to a list of `AccountInfo` objects, changing the first account's `data` in place. `clock` is a callable returning the current unix time; without it the system time is used.

- `CreateDID` needs three accounts: the document account, the payer and a third (system) account. The payer's key must equal the new document's owner, and the existing account data must already decode as a document.
- The other instructions need two accounts: the document account and the owner, who must be a signer and match the stored document's owner.
- `UpdateDID` requires a higher version than the stored one and sets `updated` from the clock.
- Adding or removing a key or service increments the version (wrapping at 256) and sets `updated`.

Failed checks raise subclasses of `ProgramError`:

- `IncorrectProgramId`: the document account is not owned by the program;
- `MissingRequiredSignature`: the owner did not sign;
- `InvalidAccountData`: wrong owner, a version that does not go up, a duplicate id or an id that is not there;
- `NotEnoughAccountKeys`: too few accounts were passed.

Undecodable instruction or account data, and an encoded document larger than the account's data, raise `ProgramError` itself.

The individual operations (`create_did`, `update_did`, `add_public_key`, `remove_public_key`, `add_service`, `remove_service`) can also be called directly; all but `create_did` take the current time as `now`.

## What it does not do

The package works on account data held in memory. It does not talk to a network or a ledger, submit or sign transactions, verify signatures, or store accounts anywhere; there is no command-line tool.