"""Base64 and base58check text encodings used by wallets and transactions."""

from __future__ import annotations

import base64
import binascii
import hashlib
import string

from .errors import WalletError

_B58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B58_INDEX = {char: index for index, char in enumerate(_B58_ALPHABET)}
_URL_ALPHABET = frozenset(string.ascii_letters + string.digits + "-_")
_U64_MAX = 2**64 - 1
_CHECKSUM_LENGTH = 4


def _decode(text: str, altchars: bytes | None = None) -> bytes:
    try:
        return base64.b64decode(text, altchars=altchars, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise WalletError(f"invalid base64 data: {exc}") from exc


def to_b64(data: bytes) -> str:
    """Encode bytes as standard, padded base64."""
    return base64.b64encode(bytes(data)).decode("ascii")


def to_b64_url(data: bytes) -> str:
    """Encode bytes as URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(bytes(data)).decode("ascii").rstrip("=")


def from_b64(text: str) -> bytes:
    """Decode standard, padded base64."""
    return _decode(text)


def from_b64_url(text: str) -> bytes:
    """Decode URL-safe base64 without padding."""
    if not set(text) <= _URL_ALPHABET:
        raise WalletError("invalid base64 data: unexpected character")
    return _decode(text + "=" * (-len(text) % 4), altchars=b"-_")


def u64_to_b64(value: int) -> str:
    """Encode an unsigned 64-bit integer as base64 of its little-endian bytes."""
    if not 0 <= value <= _U64_MAX:
        raise WalletError(f"value {value} is not an unsigned 64-bit integer")
    return to_b64(value.to_bytes(8, "little"))


def u64_from_b64(text: str) -> int:
    """Decode base64 holding exactly eight little-endian bytes."""
    decoded = from_b64(text)
    if len(decoded) != 8:
        raise WalletError(f"expected 8 bytes, got {len(decoded)}")
    return int.from_bytes(decoded, "little")


def _checksum(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:_CHECKSUM_LENGTH]


def _b58encode(data: bytes) -> str:
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_B58_ALPHABET[remainder])
    leading = len(data) - len(data.lstrip(b"\x00"))
    return "1" * leading + "".join(reversed(digits))


def _b58decode(text: str) -> bytes:
    number = 0
    for char in text:
        try:
            number = number * 58 + _B58_INDEX[char]
        except KeyError:
            raise WalletError(f"invalid base58 character {char!r}") from None
    leading = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * leading + body


def to_b58check(data: bytes) -> str:
    """Encode bytes as base58 with a four-byte double-SHA256 checksum."""
    data = bytes(data)
    return _b58encode(data + _checksum(data))


def from_b58check(text: str) -> bytes:
    """Decode base58check text whose payload starts with version byte 0.

    The returned bytes include the version byte but not the checksum.
    """
    raw = _b58decode(text)
    if len(raw) < _CHECKSUM_LENGTH:
        raise WalletError("base58 data too short for checksum")
    payload, checksum = raw[:-_CHECKSUM_LENGTH], raw[-_CHECKSUM_LENGTH:]
    if _checksum(payload) != checksum:
        raise WalletError("invalid base58 checksum")
    if not payload or payload[0] != 0:
        raise WalletError("invalid base58 version byte")
    return payload