import io

import pytest

from heliumwallet.errors import WalletError
from heliumwallet.keypair import (
    ECC_COMPACT_KEYPAIR_LENGTH,
    ED25519_KEYPAIR_LENGTH,
    PUBLIC_KEY_LENGTH,
    Keypair,
    KeyType,
    PublicKey,
)

KEY_TYPES = [KeyType.ED25519, KeyType.ECC_COMPACT]
P256_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551


@pytest.mark.parametrize("key_type", KEY_TYPES)
def test_roundtrip_keypair(key_type):
    keypair = Keypair.generate(key_type)
    buffer = io.BytesIO()
    keypair.write(buffer)
    decoded = Keypair.read(io.BytesIO(buffer.getvalue()))
    assert decoded == keypair


@pytest.mark.parametrize("key_type", KEY_TYPES)
def test_roundtrip_public_key(key_type):
    keypair = Keypair.generate(key_type)
    buffer = io.BytesIO()
    keypair.public_key.write(buffer)
    decoded = PublicKey.read(io.BytesIO(buffer.getvalue()))
    assert decoded == keypair.public_key


@pytest.mark.parametrize("key_type", KEY_TYPES)
def test_roundtrip_b58_public_key(key_type):
    keypair = Keypair.generate(key_type)
    decoded = PublicKey.from_b58(str(keypair.public_key))
    assert decoded == keypair.public_key


def test_default_keypair_is_ed25519_mainnet():
    keypair = Keypair.generate()
    assert keypair.key_type is KeyType.ED25519
    assert keypair.public_key.to_bytes()[0] == 1


@pytest.mark.parametrize(
    "key_type, length",
    [
        (KeyType.ED25519, ED25519_KEYPAIR_LENGTH),
        (KeyType.ECC_COMPACT, ECC_COMPACT_KEYPAIR_LENGTH),
    ],
)
def test_write_appends_public_key_after_keypair(key_type, length):
    keypair = Keypair.generate(key_type)
    buffer = io.BytesIO()
    keypair.write(buffer)
    data = buffer.getvalue()
    assert len(data) == length + PUBLIC_KEY_LENGTH
    stream = io.BytesIO(data)
    assert Keypair.read(stream) == keypair
    assert PublicKey.read(stream) == keypair.public_key
    assert stream.read() == b""


@pytest.mark.parametrize("key_type, tag", [(KeyType.ED25519, 1), (KeyType.ECC_COMPACT, 0)])
def test_public_key_tag_byte(key_type, tag):
    public_key = Keypair.generate(key_type).public_key
    data = public_key.to_bytes()
    assert len(data) == PUBLIC_KEY_LENGTH
    assert data[0] == tag
    assert PublicKey.from_bytes(data) == public_key


@pytest.mark.parametrize("key_type", KEY_TYPES)
def test_sign_and_verify(key_type):
    keypair = Keypair.generate(key_type)
    signature = keypair.sign(b"hello")
    keypair.public_key.verify(b"hello", signature)
    with pytest.raises(WalletError):
        keypair.public_key.verify(b"hellp", signature)


@pytest.mark.parametrize("key_type", KEY_TYPES)
def test_verify_with_other_key_fails(key_type):
    signature = Keypair.generate(key_type).sign(b"message")
    with pytest.raises(WalletError):
        Keypair.generate(key_type).public_key.verify(b"message", signature)


def test_ed25519_from_entropy_is_deterministic():
    entropy = bytes(range(32))
    first = Keypair.from_entropy(KeyType.ED25519, entropy)
    second = Keypair.from_entropy(KeyType.ED25519, entropy)
    assert first == second
    assert first.public_key == second.public_key


def test_ecc_from_entropy_accepts_exactly_one_of_a_negated_pair():
    scalar = 123456789
    outcomes = []
    for value in (scalar, P256_ORDER - scalar):
        try:
            keypair = Keypair.from_entropy(KeyType.ECC_COMPACT, value.to_bytes(32, "big"))
        except WalletError:
            outcomes.append(None)
        else:
            outcomes.append(keypair)
    accepted = [keypair for keypair in outcomes if keypair is not None]
    assert len(accepted) == 1
    signature = accepted[0].sign(b"data")
    accepted[0].public_key.verify(b"data", signature)


def test_from_entropy_rejects_wrong_length():
    with pytest.raises(WalletError):
        Keypair.from_entropy(KeyType.ED25519, bytes(31))


def test_public_key_rejects_unknown_key_type():
    with pytest.raises(WalletError):
        PublicKey.from_bytes(bytes([0x02]) + bytes(32))


def test_public_key_rejects_wrong_length():
    with pytest.raises(WalletError):
        PublicKey.from_bytes(bytes([0x01]) + bytes(31))


def test_keypair_read_rejects_unknown_key_type():
    with pytest.raises(WalletError):
        Keypair.read(io.BytesIO(bytes([0x05]) + bytes(64)))


def test_keypair_read_rejects_truncated_data():
    buffer = io.BytesIO()
    Keypair.generate().write(buffer)
    with pytest.raises(WalletError):
        Keypair.read(io.BytesIO(buffer.getvalue()[:20]))


def test_from_b58_rejects_corrupted_text():
    text = str(Keypair.generate().public_key)
    corrupted = text[:-1] + ("2" if text[-1] != "2" else "3")
    with pytest.raises(WalletError):
        PublicKey.from_b58(corrupted)