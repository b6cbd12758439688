import pytest

from didregistry.models import (
    DecodeError,
    DIDDocument,
    DIDPublicKey,
    DIDService,
    Pubkey,
    Reader,
    Writer,
)


def make_document(owner):
    return DIDDocument(
        version=1,
        owner=owner,
        public_keys=[
            DIDPublicKey(
                id="1",
                key_type="Ed25519VerificationKey2018",
                public_keys=bytes(range(1, 33)),
                controller="did:solana:fixed-owner",
            )
        ],
        services=[
            DIDService(
                id="auth-service",
                service_type="LinkedDomains",
                service_endpoint="https://fixed.example.com/auth",
            ),
            DIDService(
                id="storage-service",
                service_type="CredentialRepository",
                service_endpoint="https://fixed.example.com/storage",
            ),
        ],
        created=1_650_000_000,
        updated=1_650_000_000,
    )


def test_primitive_round_trip():
    writer = Writer()
    writer.write_u8(200)
    writer.write_u32(70000)
    writer.write_i64(-5)
    writer.write_bytes(b"\x00\xff")
    writer.write_string("héllo")
    reader = Reader(writer.getvalue())
    assert reader.read_u8() == 200
    assert reader.read_u32() == 70000
    assert reader.read_i64() == -5
    assert reader.read_bytes() == b"\x00\xff"
    assert reader.read_string() == "héllo"
    assert reader.remaining() == 0


def test_u32_is_little_endian():
    writer = Writer()
    writer.write_u32(1)
    assert writer.getvalue() == b"\x01\x00\x00\x00"


def test_string_has_length_prefix():
    writer = Writer()
    writer.write_string("abc")
    assert writer.getvalue() == b"\x03\x00\x00\x00abc"


def test_remaining_tracks_position():
    data = b"\x01\x02\x03"
    reader = Reader(data)
    reader.read_u8()
    assert reader.remaining() == len(data) - 1


def test_truncated_read_raises():
    with pytest.raises(DecodeError):
        Reader(b"\x01\x00").read_u32()


def test_string_length_beyond_data_raises():
    with pytest.raises(DecodeError):
        Reader(b"\x10\x00\x00\x00ab").read_string()


def test_invalid_utf8_raises():
    with pytest.raises(DecodeError):
        Reader(b"\x01\x00\x00\x00\xff").read_string()


def test_u8_out_of_range_raises():
    with pytest.raises(ValueError):
        Writer().write_u8(256)


def test_pubkey_requires_32_bytes():
    with pytest.raises(ValueError):
        Pubkey(b"\x01\x02")


def test_zero_pubkey_base58():
    assert str(Pubkey(bytes(32))) == "1" * 32


def test_new_unique_keys_differ():
    first, second = Pubkey.new_unique(), Pubkey.new_unique()
    assert first != second
    assert str(first) != str(second)


def test_pubkey_string_uses_base58_alphabet():
    text = str(Pubkey.new_unique())
    assert set(text) <= set("123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz")


def test_public_key_round_trip():
    key = make_document(Pubkey.new_unique()).public_keys[0]
    writer = Writer()
    key.encode(writer)
    assert DIDPublicKey.decode(Reader(writer.getvalue())) == key


def test_service_round_trip():
    service = make_document(Pubkey.new_unique()).services[1]
    writer = Writer()
    service.encode(writer)
    assert DIDService.decode(Reader(writer.getvalue())) == service


def test_document_round_trip():
    document = make_document(Pubkey.new_unique())
    assert DIDDocument.from_bytes(document.to_bytes()) == document


def test_document_layout_starts_with_version_and_owner():
    owner = Pubkey.new_unique()
    data = make_document(owner).to_bytes()
    assert data[0] == 1
    assert data[1:33] == owner.raw


def test_document_trailing_bytes_rejected():
    data = make_document(Pubkey.new_unique()).to_bytes() + b"\x00"
    with pytest.raises(DecodeError):
        DIDDocument.from_bytes(data)


def test_document_decode_ignores_trailing_bytes():
    document = make_document(Pubkey.new_unique())
    reader = Reader(document.to_bytes() + b"\x07\x07")
    assert DIDDocument.decode(reader) == document
    assert reader.remaining() == 2


def test_empty_document_defaults_round_trip():
    document = DIDDocument(version=3, owner=Pubkey.new_unique())
    decoded = DIDDocument.from_bytes(document.to_bytes())
    assert decoded.public_keys == [] and decoded.services == []
    assert decoded == document