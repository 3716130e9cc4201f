"""JSON views of chain-variable transactions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from .codec import to_b64_url
from .errors import WalletError
from .keypair import PublicKey

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def maybe_b58(data: bytes) -> str | None:
    """Base58 address of a public key, or None for empty data."""
    if not data:
        return None
    return str(PublicKey.from_bytes(data))


def maybe_b64_url(data: bytes) -> str | None:
    """URL-safe base64 of the data, or None for empty data."""
    if not data:
        return None
    return to_b64_url(data)


def _utf8(data: bytes) -> str:
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise WalletError(f"invalid utf-8 data: {exc}") from exc


def _parse_int(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise WalletError(f"invalid integer {text!r}")
    value = int(text)
    if not _I64_MIN <= value <= _I64_MAX:
        raise WalletError(f"integer {text!r} out of range")
    return value


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise WalletError(f"invalid float {text!r}")
    try:
        return float(text)
    except ValueError as exc:
        raise WalletError(f"invalid float {text!r}") from exc


@dataclass
class BlockchainVar:
    """One chain variable with its type name and textual value."""

    name: str
    type: str
    value: bytes

    def to_json(self) -> dict[str, Any]:
        text = _utf8(self.value)
        if self.type == "int":
            value: Any = _parse_int(text)
        elif self.type == "float":
            value = _parse_float(text)
        elif self.type in ("string", "atom"):
            value = text
        else:
            raise WalletError(f"Invalid variable {self!r}")
        return {"name": self.name, "type": self.type, "value": value}


@dataclass
class VarsTxn:
    """A transaction that sets, unsets or cancels chain variables."""

    version_predicate: int = 0
    nonce: int = 0
    proof: bytes = b""
    master_key: bytes = b""
    key_proof: bytes = b""
    vars: list[BlockchainVar] = field(default_factory=list)
    unsets: list[bytes] = field(default_factory=list)
    cancels: list[bytes] = field(default_factory=list)
    multi_keys: list[bytes] = field(default_factory=list)
    multi_proofs: list[bytes] = field(default_factory=list)
    multi_key_proofs: list[bytes] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return {
            "type": "vars_v1",
            "version_predicate": self.version_predicate,
            "nonce": self.nonce,
            "proof": maybe_b64_url(self.proof),
            "master_key": maybe_b58(self.master_key),
            "key_proof": maybe_b64_url(self.key_proof),
            "vars": [var.to_json() for var in self.vars],
            "unsets": [_utf8(entry) for entry in self.unsets],
            "cancels": [_utf8(entry) for entry in self.cancels],
            "multi_keys": [str(PublicKey.from_bytes(entry)) for entry in self.multi_keys],
            "multi_proofs": [to_b64_url(entry) for entry in self.multi_proofs],
            "multi_key_proofs": [to_b64_url(entry) for entry in self.multi_key_proofs],
        }