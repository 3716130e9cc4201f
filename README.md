# heliumwallet

A library of wallet building blocks: password stretching, sharded
wallet key material, Ed25519 and compact P-256 keypairs, base58check and
base64 codecs, payment memos, a client for an onboarding server that
co-signs transactions, and transaction fee calculation.

## Installation

    pip install .

To run the test suite:

    pip install ".[test]"
    pytest

## Modules

- `heliumwallet.errors`: `WalletError`, raised by every module when an
  operation cannot be completed.
- `heliumwallet.codec`: `to_b64` / `from_b64` (standard, padded),
  `to_b64_url` / `from_b64_url` (URL-safe, no padding), `u64_to_b64` /
  `u64_from_b64` (eight little-endian bytes), and `to_b58check` /
  `from_b58check` (base58 with a double-SHA256 checksum; decoding
  requires version byte 0 and returns the payload with that byte).
- `heliumwallet.pwhash`: the `PwHash` base class and its `Pbkdf2`
  (HMAC-SHA256, 8-byte salt) and `Argon2id13` (16-byte salt) schemes,
  each with `derive(password, size)`, `read(stream)` and `write(stream)`.
  Constructors: `pbkdf2(iterations)`, `pbkdf2_default()` (1,000,000
  iterations) and `argon2id13_default()` (libsodium's "sensitive"
  limits).
- `heliumwallet.shamir`: `create_keyshares(key, count, threshold)` splits
  a 32-byte key into 33-byte shares over GF(2^8);
  `combine_keyshares(shares)` recovers it.
- `heliumwallet.format`: the `Basic` format (key taken straight from the
  password hash) and the `Sharded` format (password hash mixed by
  HMAC-SHA256 with a secret split into `KeyShare`s). `Sharded` offers
  `shards()`, `absorb(other)`, `read(stream)` and `write(stream)`.
  Constructors: `basic(pwhash)`,
  `sharded(key_share_count, recovery_threshold, pwhash)` and
  `sharded_default(pwhash)` (5 shares, any 3 recover the key).
- `heliumwallet.keypair`: `KeyType` (`ED25519`, `ECC_COMPACT`),
  `PublicKey` and `Keypair`. Public keys print as base58check addresses
  and parse back with `PublicKey.from_b58`; both classes read and write
  their tagged binary forms. `Keypair.write` appends the tagged public
  key after the keypair; `Keypair.read` consumes only the keypair.
- `heliumwallet.txnjson`: `BlockchainVar` and `VarsTxn`, chain-variable
  transactions with `to_json()` views, plus `maybe_b58` and
  `maybe_b64_url`.
- `heliumwallet.staking`: `StakingClient`, an async client with
  `address_for(gateway)` and `sign(onboarding_key, txn)`.
- `heliumwallet.memo`: `Memo`, a 64-bit value shown as base64 of its
  little-endian bytes; `Memo.from_str` parses it back.
- `heliumwallet.txn_fee`: `TxnFeeConfig` (`legacy()`, `from_dict()`,
  `dc_payload_size()`), `HotspotStakingMode`, `calculate_txn_fee`,
  `txn_fee`, and the staking fee functions `add_gateway_staking_fee`,
  `assert_location_staking_fee`, `assert_location_v1_staking_fee`,
  `oui_staking_fee` and `routing_staking_fee`.

## Examples

Sharded key material:

    from heliumwallet.format import sharded_default
    from heliumwallet.pwhash import pbkdf2

    password = b"password"
    wallet = sharded_default(pbkdf2(1000))
    key = wallet.derive_key(password, 32)   # creates the key shares

    shards = wallet.shards()          # one Sharded per key share
    restored = shards[0]
    restored.absorb(shards[1])
    restored.absorb(shards[2])
    assert restored.derive_key(password, 32) == key

Keypairs:

    from heliumwallet.keypair import Keypair, KeyType, PublicKey

    keypair = Keypair.generate(KeyType.ED25519)
    signature = keypair.sign(b"message")
    keypair.public_key.verify(b"message", signature)   # raises WalletError if invalid

    address = str(keypair.public_key)
    assert PublicKey.from_b58(address) == keypair.public_key

Fees:

    from heliumwallet.txn_fee import TxnFeeConfig, txn_fee

    config = TxnFeeConfig.legacy()
    print(config.dc_payload_size())   # 1
    print(txn_fee(120, config))       # 0, since the multiplier is 0

Staking server:

    import asyncio
    from heliumwallet.staking import StakingClient

    async def main(gateway):
        client = StakingClient(base_url="http://localhost:8080/api/v2")
        return await client.address_for(gateway)

## What this package does not do

- There is no command-line program; everything is used as a library.
- It does not read or write complete wallet files: the formats and
  password hashes only read and write their own parameters.
- It does not encode, decode or sign protobuf transactions. `txn_fee`
  takes the size of an already encoded envelope, and
  `StakingClient.sign` takes and returns encoded transaction bytes.
- It has no mnemonic (seed phrase) support and does not query a
  blockchain API for balances, hotspots or chain variables.