"""Payment memos: unsigned 64-bit values written as base64."""

from __future__ import annotations

from dataclasses import dataclass

from .codec import u64_from_b64, u64_to_b64
from .errors import WalletError

_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class Memo:
    """A 64-bit memo attached to a payment."""

    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise WalletError("memo must be an integer")
        if not 0 <= self.value <= _U64_MAX:
            raise WalletError(f"memo {self.value} is not an unsigned 64-bit integer")

    @classmethod
    def from_str(cls, text: str) -> Memo:
        """Parse the base64 form of the memo's little-endian bytes."""
        try:
            return cls(u64_from_b64(text))
        except WalletError as exc:
            raise WalletError("Invalid base64 memo") from exc

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return u64_to_b64(self.value)