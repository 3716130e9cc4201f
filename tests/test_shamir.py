import itertools
import os

import pytest

from heliumwallet.errors import WalletError
from heliumwallet.shamir import combine_keyshares, create_keyshares


@pytest.fixture
def key():
    return os.urandom(32)


def test_share_shape(key):
    shares = create_keyshares(key, 5, 3)
    assert len(shares) == 5
    assert all(len(share) == 33 for share in shares)
    assert [share[0] for share in shares] == [1, 2, 3, 4, 5]


def test_all_shares_recover_key(key):
    assert combine_keyshares(create_keyshares(key, 5, 3)) == key


def test_every_threshold_subset_recovers_key(key):
    shares = create_keyshares(key, 5, 3)
    for subset in itertools.combinations(shares, 3):
        assert combine_keyshares(list(subset)) == key


def test_too_few_shares_do_not_recover_key(key):
    shares = create_keyshares(key, 5, 3)
    assert combine_keyshares(shares[:2]) != key


def test_threshold_one_shares_hold_key(key):
    shares = create_keyshares(key, 4, 1)
    assert all(share[1:] == key for share in shares)
    assert combine_keyshares(shares[2:3]) == key


@pytest.mark.parametrize("count,threshold", [(0, 0), (3, 0), (3, 4), (256, 2)])
def test_invalid_parameters(key, count, threshold):
    with pytest.raises(WalletError):
        create_keyshares(key, count, threshold)


def test_wrong_key_length():
    with pytest.raises(WalletError):
        create_keyshares(b"\x01" * 16, 3, 2)


def test_combine_rejects_duplicates(key):
    shares = create_keyshares(key, 3, 2)
    with pytest.raises(WalletError):
        combine_keyshares([shares[0], shares[0]])


def test_combine_rejects_malformed_share(key):
    shares = create_keyshares(key, 3, 2)
    with pytest.raises(WalletError):
        combine_keyshares([shares[0], shares[1][:10]])


def test_combine_rejects_empty():
    with pytest.raises(WalletError):
        combine_keyshares([])