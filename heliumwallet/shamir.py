"""Shamir secret sharing of 32-byte keys over GF(2^8).

Each share is 33 bytes: the share's x coordinate (1 to 255) followed by
one field element per key byte.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from functools import reduce

from .errors import WalletError

KEY_LENGTH = 32
SHARE_LENGTH = KEY_LENGTH + 1
_REDUCTION = 0x11B


def _gf_mul(a: int, b: int) -> int:
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= _REDUCTION
        b >>= 1
    return result


def _gf_inv(a: int) -> int:
    result, base, exponent = 1, a, 254
    while exponent:
        if exponent & 1:
            result = _gf_mul(result, base)
        base = _gf_mul(base, base)
        exponent >>= 1
    return result


def _evaluate(coefficients: Sequence[int], x: int) -> int:
    """Evaluate a polynomial, lowest coefficient first, at ``x``."""
    return reduce(lambda acc, coeff: _gf_mul(acc, x) ^ coeff, reversed(coefficients), 0)


def create_keyshares(key: bytes, count: int, threshold: int) -> list[bytes]:
    """Split a 32-byte key into ``count`` shares, any ``threshold`` of which recover it."""
    if len(key) != KEY_LENGTH:
        raise WalletError(f"key must be {KEY_LENGTH} bytes")
    if not 1 <= count <= 255:
        raise WalletError("share count must be between 1 and 255")
    if not 1 <= threshold <= count:
        raise WalletError("threshold must be between 1 and the share count")
    polynomials = list(zip(bytes(key), *(os.urandom(KEY_LENGTH) for _ in range(threshold - 1))))
    return [
        bytes([x]) + bytes(_evaluate(polynomial, x) for polynomial in polynomials)
        for x in range(1, count + 1)
    ]


def combine_keyshares(shares: Sequence[bytes]) -> bytes:
    """Recover the key from shares by interpolating at zero."""
    if not shares:
        raise WalletError("no key shares given")
    if any(len(share) != SHARE_LENGTH for share in shares):
        raise WalletError(f"key shares must be {SHARE_LENGTH} bytes")
    xs = [share[0] for share in shares]
    if 0 in xs or len(set(xs)) != len(xs):
        raise WalletError("key shares have invalid or duplicate indices")

    weights = []
    for x_j in xs:
        numerator, denominator = 1, 1
        for x_m in xs:
            if x_m != x_j:
                numerator = _gf_mul(numerator, x_m)
                denominator = _gf_mul(denominator, x_m ^ x_j)
        weights.append(_gf_mul(numerator, _gf_inv(denominator)))

    return bytes(
        reduce(
            lambda acc, pair: acc ^ _gf_mul(pair[0], pair[1]),
            zip(weights, column),
            0,
        )
        for column in zip(*(share[1:] for share in shares))
    )