"""Password hashing schemes that stretch a password into key material."""

from __future__ import annotations

import hashlib
import os
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO

import nacl.exceptions
import nacl.pwhash.argon2id as _argon2id

from .errors import WalletError

PBKDF2_DEFAULT_ITERATIONS = 1_000_000
PBKDF2_SALT_LENGTH = 8
ARGON2_SALT_LENGTH = 16

_U32 = struct.Struct("<I")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise WalletError("unexpected end of data")
    return data


def _read_u32(stream: BinaryIO) -> int:
    return _U32.unpack(_read_exact(stream, _U32.size))[0]


def _pack_u32(value: int, what: str) -> bytes:
    try:
        return _U32.pack(value)
    except struct.error as exc:
        raise WalletError(f"{what} does not fit in 32 bits") from exc


class PwHash(ABC):
    """A password stretching scheme with its stored parameters."""

    @abstractmethod
    def derive(self, password: bytes, size: int) -> bytes:
        """Stretch the password into ``size`` bytes of key material."""

    @abstractmethod
    def read(self, stream: BinaryIO) -> None:
        """Load the scheme's parameters from a binary stream."""

    @abstractmethod
    def write(self, stream: BinaryIO) -> None:
        """Store the scheme's parameters to a binary stream."""


@dataclass
class Pbkdf2(PwHash):
    """PBKDF2 with HMAC-SHA256 and an eight-byte salt."""

    salt: bytes
    iterations: int

    def __post_init__(self) -> None:
        if len(self.salt) != PBKDF2_SALT_LENGTH:
            raise ValueError(f"salt must be {PBKDF2_SALT_LENGTH} bytes")

    def __str__(self) -> str:
        return "Pbkdf2"

    @classmethod
    def with_iterations(cls, iterations: int) -> Pbkdf2:
        """Create a hasher with a fresh random salt."""
        return cls(os.urandom(PBKDF2_SALT_LENGTH), iterations)

    def derive(self, password: bytes, size: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password, self.salt, self.iterations, dklen=size)

    def read(self, stream: BinaryIO) -> None:
        self.salt = _read_exact(stream, PBKDF2_SALT_LENGTH)
        self.iterations = _read_u32(stream)

    def write(self, stream: BinaryIO) -> None:
        stream.write(self.salt + _pack_u32(self.iterations, "iteration count"))


@dataclass
class Argon2id13(PwHash):
    """Argon2id (version 1.3) with a sixteen-byte salt."""

    salt: bytes
    mem_limit: int
    ops_limit: int

    def __post_init__(self) -> None:
        if len(self.salt) != ARGON2_SALT_LENGTH:
            raise ValueError(f"salt must be {ARGON2_SALT_LENGTH} bytes")

    def __str__(self) -> str:
        return "Argon2id13"

    @classmethod
    def with_limits(cls, ops_limit: int, mem_limit: int) -> Argon2id13:
        """Create a hasher with a fresh random salt and the given limits."""
        return cls(os.urandom(ARGON2_SALT_LENGTH), mem_limit, ops_limit)

    def derive(self, password: bytes, size: int) -> bytes:
        try:
            return _argon2id.kdf(
                size,
                password,
                self.salt,
                opslimit=self.ops_limit,
                memlimit=self.mem_limit,
            )
        except (nacl.exceptions.CryptoError, ValueError, TypeError) as exc:
            raise WalletError("Failed to hash password") from exc

    def read(self, stream: BinaryIO) -> None:
        self.salt = _read_exact(stream, ARGON2_SALT_LENGTH)
        self.mem_limit = _read_u32(stream)
        self.ops_limit = _read_u32(stream)

    def write(self, stream: BinaryIO) -> None:
        stream.write(
            self.salt
            + _pack_u32(self.mem_limit, "memory limit")
            + _pack_u32(self.ops_limit, "operations limit")
        )


def pbkdf2_default() -> Pbkdf2:
    """PBKDF2 with the default iteration count."""
    return Pbkdf2.with_iterations(PBKDF2_DEFAULT_ITERATIONS)


def pbkdf2(iterations: int) -> Pbkdf2:
    """PBKDF2 with the given iteration count."""
    return Pbkdf2.with_iterations(iterations)


def argon2id13_default() -> Argon2id13:
    """Argon2id with the libsodium "sensitive" limits."""
    return Argon2id13.with_limits(_argon2id.OPSLIMIT_SENSITIVE, _argon2id.MEMLIMIT_SENSITIVE)