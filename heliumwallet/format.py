"""Wallet key-derivation formats: plain and sharded."""

from __future__ import annotations

import copy
import dataclasses
import hashlib
import hmac
import os
from dataclasses import dataclass, field
from typing import BinaryIO

from .errors import WalletError
from .pwhash import PwHash
from .shamir import KEY_LENGTH, SHARE_LENGTH, combine_keyshares, create_keyshares

DEFAULT_KEY_SHARE_COUNT = 5
DEFAULT_RECOVERY_THRESHOLD = 3

# The basic format adds no data of its own to a wallet file.
_BASIC_PAYLOAD = b""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise WalletError("unexpected end of data")
    return data


@dataclass(frozen=True)
class KeyShare:
    """One 33-byte Shamir key share."""

    data: bytes = bytes(SHARE_LENGTH)

    def __post_init__(self) -> None:
        if len(self.data) != SHARE_LENGTH:
            raise WalletError(f"key share must be {SHARE_LENGTH} bytes")

    @classmethod
    def from_bytes(cls, data: bytes) -> KeyShare:
        return cls(bytes(data))

    def to_bytes(self) -> bytes:
        return self.data


@dataclass
class Basic:
    """Key derived directly from the password hash."""

    pwhash: PwHash

    def derive_key(self, password: bytes, size: int) -> bytes:
        return self.pwhash.derive(password, size)

    def read(self, stream: BinaryIO) -> None:
        """Read the basic format's payload, which is empty."""
        _read_exact(stream, len(_BASIC_PAYLOAD))

    def write(self, stream: BinaryIO) -> None:
        """Write the basic format's payload, which is empty."""
        stream.write(_BASIC_PAYLOAD)


@dataclass
class Sharded:
    """Key derived from the password hash and a secret split into key shares."""

    key_share_count: int
    recovery_threshold: int
    pwhash: PwHash
    key_shares: list[KeyShare] = field(default_factory=list)

    def derive_key(self, password: bytes, size: int) -> bytes:
        """Derive a 32-byte key, creating key shares when there are none yet."""
        if size != KEY_LENGTH:
            raise WalletError(f"sharded keys are {KEY_LENGTH} bytes")
        stretched = self.pwhash.derive(password, size)

        if not self.key_shares:
            sss_key = os.urandom(KEY_LENGTH)
            self.key_shares = [
                KeyShare.from_bytes(share)
                for share in create_keyshares(
                    sss_key, self.key_share_count, self.recovery_threshold
                )
            ]
        elif len(self.key_shares) < self.recovery_threshold:
            raise WalletError("not enough keyshares to recover key")
        else:
            try:
                sss_key = combine_keyshares([share.to_bytes() for share in self.key_shares])
            except WalletError as exc:
                raise WalletError("Failed to combine keyshares") from exc

        return hmac.new(sss_key, stretched, hashlib.sha256).digest()

    def shards(self) -> list[Sharded]:
        """One shard per key share, each carrying the same parameters."""
        return [
            dataclasses.replace(self, key_shares=[share], pwhash=copy.copy(self.pwhash))
            for share in self.key_shares
        ]

    def absorb(self, other: Sharded) -> None:
        """Take over the key shares of a congruent shard."""
        if (
            self.key_share_count != other.key_share_count
            or self.recovery_threshold != other.recovery_threshold
        ):
            raise WalletError("Shards are not congruent")
        self.key_shares.extend(other.key_shares)

    def read(self, stream: BinaryIO) -> None:
        """Read shard parameters and append the key share they carry."""
        self.key_share_count, self.recovery_threshold = _read_exact(stream, 2)
        self.key_shares.append(KeyShare.from_bytes(_read_exact(stream, SHARE_LENGTH)))

    def write(self, stream: BinaryIO) -> None:
        """Write shard parameters and its single key share."""
        if len(self.key_shares) != 1:
            raise WalletError("Invalid number of key shares in shard")
        try:
            header = bytes([self.key_share_count, self.recovery_threshold])
        except ValueError as exc:
            raise WalletError("shard parameters do not fit in a byte") from exc
        stream.write(header + self.key_shares[0].to_bytes())


def basic(pwhash: PwHash) -> Basic:
    return Basic(pwhash)


def sharded(key_share_count: int, recovery_threshold: int, pwhash: PwHash) -> Sharded:
    return Sharded(key_share_count, recovery_threshold, pwhash)


def sharded_default(pwhash: PwHash) -> Sharded:
    return sharded(DEFAULT_KEY_SHARE_COUNT, DEFAULT_RECOVERY_THRESHOLD, pwhash)