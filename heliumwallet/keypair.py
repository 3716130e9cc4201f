"""Signing keypairs and public keys with their binary and base58 forms."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from typing import BinaryIO

import nacl.exceptions
import nacl.signing
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from .codec import from_b58check, to_b58check
from .errors import WalletError

MAINNET = 0x00
TESTNET = 0x10
KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = KEY_LENGTH + 1
ED25519_KEYPAIR_LENGTH = 2 * KEY_LENGTH + 1
ECC_COMPACT_KEYPAIR_LENGTH = KEY_LENGTH + 1

_P256_P = 2**256 - 2**224 + 2**192 + 2**96 - 1
_P256_B = 0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B
_P256_N = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
_ECDSA = ec.ECDSA(hashes.SHA256())


class KeyType(enum.IntEnum):
    """The signature scheme of a key, stored in the low nibble of the tag byte."""

    ECC_COMPACT = 0
    ED25519 = 1

    @property
    def keypair_length(self) -> int:
        """Length of the serialized keypair, tag byte included."""
        if self is KeyType.ED25519:
            return ED25519_KEYPAIR_LENGTH
        return ECC_COMPACT_KEYPAIR_LENGTH


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise WalletError("unexpected end of data")
    return data


def _parse_tag(tag: int) -> tuple[KeyType, int]:
    try:
        key_type = KeyType(tag & 0x0F)
    except ValueError:
        raise WalletError(f"invalid key type {tag & 0x0F}") from None
    network = tag & 0xF0
    if network not in (MAINNET, TESTNET):
        raise WalletError(f"invalid network {network:#x}")
    return key_type, network


def _check_network(network: int) -> None:
    if network not in (MAINNET, TESTNET):
        raise WalletError(f"invalid network {network:#x}")


def _is_compact(y: int) -> bool:
    return y <= _P256_P - y


def _decompress(x: int) -> int:
    if x >= _P256_P:
        raise WalletError("invalid compact public key")
    rhs = (pow(x, 3, _P256_P) - 3 * x + _P256_B) % _P256_P
    y = pow(rhs, (_P256_P + 1) // 4, _P256_P)
    if y * y % _P256_P != rhs:
        raise WalletError("invalid compact public key")
    return min(y, _P256_P - y)


def _ecc_public_key(x: int) -> ec.EllipticCurvePublicKey:
    return ec.EllipticCurvePublicNumbers(x, _decompress(x), ec.SECP256R1()).public_key()


def _ecc_private_key(secret: bytes) -> ec.EllipticCurvePrivateKey:
    scalar = int.from_bytes(secret, "big")
    if not 1 <= scalar < _P256_N:
        raise WalletError("invalid ecc secret key")
    return ec.derive_private_key(scalar, ec.SECP256R1())


@dataclass(frozen=True)
class PublicKey:
    """A public key tagged with its key type and network."""

    key_type: KeyType
    network: int
    key: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "key_type", KeyType(self.key_type))
        object.__setattr__(self, "key", bytes(self.key))
        _check_network(self.network)
        if len(self.key) != KEY_LENGTH:
            raise WalletError(f"public key must be {KEY_LENGTH} bytes")
        if self.key_type is KeyType.ECC_COMPACT:
            _decompress(int.from_bytes(self.key, "big"))

    @classmethod
    def from_bytes(cls, data: bytes) -> PublicKey:
        """Parse the tagged binary form of a public key."""
        data = bytes(data)
        if len(data) != PUBLIC_KEY_LENGTH:
            raise WalletError(f"public key must be {PUBLIC_KEY_LENGTH} bytes")
        key_type, network = _parse_tag(data[0])
        return cls(key_type, network, data[1:])

    @classmethod
    def from_b58(cls, text: str) -> PublicKey:
        """Parse a base58check address."""
        return cls.from_bytes(from_b58check(text)[1:])

    def to_bytes(self) -> bytes:
        return bytes([self.key_type | self.network]) + self.key

    def __str__(self) -> str:
        return to_b58check(b"\x00" + self.to_bytes())

    def verify(self, message: bytes, signature: bytes) -> None:
        """Raise WalletError unless the signature over the message is valid."""
        message, signature = bytes(message), bytes(signature)
        if self.key_type is KeyType.ED25519:
            try:
                nacl.signing.VerifyKey(self.key).verify(message, signature)
            except (nacl.exceptions.CryptoError, ValueError, TypeError) as exc:
                raise WalletError("invalid signature") from exc
        else:
            try:
                _ecc_public_key(int.from_bytes(self.key, "big")).verify(
                    signature, message, _ECDSA
                )
            except (InvalidSignature, ValueError) as exc:
                raise WalletError("invalid signature") from exc

    @classmethod
    def read(cls, stream: BinaryIO) -> PublicKey:
        """Read a tagged public key from a binary stream."""
        tag = _read_exact(stream, 1)
        _parse_tag(tag[0])
        return cls.from_bytes(tag + _read_exact(stream, PUBLIC_KEY_LENGTH - 1))

    def write(self, stream: BinaryIO) -> None:
        stream.write(self.to_bytes())


@dataclass(frozen=True)
class Keypair:
    """A secret signing key together with its public key."""

    key_type: KeyType = KeyType.ED25519
    network: int = MAINNET
    secret: bytes = field(default=b"", repr=False)
    public_key: PublicKey = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "key_type", KeyType(self.key_type))
        object.__setattr__(self, "secret", bytes(self.secret))
        _check_network(self.network)
        if len(self.secret) != KEY_LENGTH:
            raise WalletError(f"secret key must be {KEY_LENGTH} bytes")
        object.__setattr__(
            self, "public_key", PublicKey(self.key_type, self.network, self._public_bytes())
        )

    def _public_bytes(self) -> bytes:
        if self.key_type is KeyType.ED25519:
            return nacl.signing.SigningKey(self.secret).verify_key.encode()
        x = _ecc_private_key(self.secret).public_key().public_numbers().x
        return x.to_bytes(KEY_LENGTH, "big")

    @classmethod
    def generate(cls, key_type: KeyType = KeyType.ED25519) -> Keypair:
        """Generate a fresh mainnet keypair from the system's random source."""
        key_type = KeyType(key_type)
        if key_type is KeyType.ED25519:
            return cls(key_type, MAINNET, os.urandom(KEY_LENGTH))
        private = ec.generate_private_key(ec.SECP256R1())
        scalar = private.private_numbers().private_value
        if not _is_compact(private.public_key().public_numbers().y):
            scalar = _P256_N - scalar
        return cls(key_type, MAINNET, scalar.to_bytes(KEY_LENGTH, "big"))

    @classmethod
    def from_entropy(cls, key_type: KeyType, entropy: bytes) -> Keypair:
        """Build a mainnet keypair deterministically from 32 bytes of entropy."""
        key_type = KeyType(key_type)
        entropy = bytes(entropy)
        if len(entropy) != KEY_LENGTH:
            raise WalletError(f"entropy must be {KEY_LENGTH} bytes")
        if key_type is KeyType.ECC_COMPACT:
            y = _ecc_private_key(entropy).public_key().public_numbers().y
            if not _is_compact(y):
                raise WalletError("entropy does not yield a compact key")
        return cls(key_type, MAINNET, entropy)

    def sign(self, message: bytes) -> bytes:
        """Sign a message: raw Ed25519 or DER-encoded ECDSA over SHA-256."""
        message = bytes(message)
        if self.key_type is KeyType.ED25519:
            return nacl.signing.SigningKey(self.secret).sign(message).signature
        return _ecc_private_key(self.secret).sign(message, _ECDSA)

    def _tag(self) -> bytes:
        return bytes([self.key_type | self.network])

    @classmethod
    def read(cls, stream: BinaryIO) -> Keypair:
        """Read a serialized keypair.

        Only the keypair itself is consumed; the public key that ``write``
        appends after it stays in the stream.
        """
        tag = _read_exact(stream, 1)[0]
        key_type, network = _parse_tag(tag)
        body = _read_exact(stream, key_type.keypair_length - 1)
        return cls(key_type, network, body[:KEY_LENGTH])

    def write(self, stream: BinaryIO) -> None:
        """Write the keypair followed by its tagged public key."""
        keypair = self._tag() + self.secret
        if self.key_type is KeyType.ED25519:
            keypair += self.public_key.key
        stream.write(keypair + self.public_key.to_bytes())