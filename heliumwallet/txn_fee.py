"""Transaction and staking fees in data credits."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import WalletError

LEGACY_STAKING_FEE = 1
LEGACY_TXN_FEE = 0
TXN_FEE_SIGNATURE_SIZE = 64

_REQUIRED_FIELDS = (
    "txn_fee_multiplier",
    "staking_fee_txn_oui_v1",
    "staking_fee_txn_oui_v1_per_address",
)
_DEFAULTED_FIELDS = {
    "staking_fee_txn_add_gateway_v1": 4_000_000,
    "staking_fee_txn_add_dataonly_gateway_v1": 1_000_000,
    "staking_fee_txn_add_light_gateway_v1": 4_000_000,
    "staking_fee_txn_assert_location_v1": 1_000_000,
    "staking_fee_txn_assert_location_dataonly_gateway_v1": 500_000,
    "staking_fee_txn_assert_location_light_gateway_v1": 1_000_000,
}
_U64_MAX = 2**64 - 1


class HotspotStakingMode(enum.Enum):
    """How a hotspot takes part in the network, which sets its staking fees."""

    FULL = "full"
    DATA_ONLY = "dataonly"
    LIGHT = "light"


def _u64(data: Mapping[str, Any], name: str) -> int:
    value = data[name]
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise WalletError(f"{name} must be an unsigned 64-bit integer")
    return value


@dataclass(frozen=True)
class TxnFeeConfig:
    """Chain variables that govern transaction and staking fees."""

    txn_fees: bool
    txn_fee_multiplier: int
    staking_fee_txn_oui_v1: int
    staking_fee_txn_oui_v1_per_address: int
    staking_fee_txn_add_gateway_v1: int = _DEFAULTED_FIELDS["staking_fee_txn_add_gateway_v1"]
    staking_fee_txn_add_dataonly_gateway_v1: int = _DEFAULTED_FIELDS[
        "staking_fee_txn_add_dataonly_gateway_v1"
    ]
    staking_fee_txn_add_light_gateway_v1: int = _DEFAULTED_FIELDS[
        "staking_fee_txn_add_light_gateway_v1"
    ]
    staking_fee_txn_assert_location_v1: int = _DEFAULTED_FIELDS[
        "staking_fee_txn_assert_location_v1"
    ]
    staking_fee_txn_assert_location_dataonly_gateway_v1: int = _DEFAULTED_FIELDS[
        "staking_fee_txn_assert_location_dataonly_gateway_v1"
    ]
    staking_fee_txn_assert_location_light_gateway_v1: int = _DEFAULTED_FIELDS[
        "staking_fee_txn_assert_location_light_gateway_v1"
    ]

    @classmethod
    def legacy(cls) -> TxnFeeConfig:
        """Fees as they were before transaction fees were switched on."""
        return cls(
            txn_fees=False,
            txn_fee_multiplier=0,
            staking_fee_txn_oui_v1=LEGACY_STAKING_FEE,
            staking_fee_txn_oui_v1_per_address=0,
            staking_fee_txn_add_gateway_v1=LEGACY_STAKING_FEE,
            staking_fee_txn_add_dataonly_gateway_v1=LEGACY_STAKING_FEE,
            staking_fee_txn_add_light_gateway_v1=LEGACY_STAKING_FEE,
            staking_fee_txn_assert_location_v1=LEGACY_STAKING_FEE,
            staking_fee_txn_assert_location_dataonly_gateway_v1=LEGACY_STAKING_FEE,
            staking_fee_txn_assert_location_light_gateway_v1=LEGACY_STAKING_FEE,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TxnFeeConfig:
        """Build a config from chain variables; unknown keys are ignored."""
        missing = [name for name in ("txn_fees", *_REQUIRED_FIELDS) if name not in data]
        if missing:
            raise WalletError(f"missing fee variables: {', '.join(missing)}")
        if not isinstance(data["txn_fees"], bool):
            raise WalletError("txn_fees must be a boolean")
        values: dict[str, Any] = {"txn_fees": data["txn_fees"]}
        values.update((name, _u64(data, name)) for name in _REQUIRED_FIELDS)
        values.update(
            (name, _u64(data, name) if name in data else default)
            for name, default in _DEFAULTED_FIELDS.items()
        )
        return cls(**values)

    def dc_payload_size(self) -> int:
        """Bytes of transaction paid for by one data credit."""
        return 24 if self.txn_fees else 1


def calculate_txn_fee(payload_size: int, config: TxnFeeConfig) -> int:
    """Data credits needed for a payload of the given size, at least one."""
    if payload_size < 0:
        raise WalletError("payload size cannot be negative")
    dc_payload_size = config.dc_payload_size()
    if payload_size <= dc_payload_size:
        return 1
    return -(-payload_size // dc_payload_size)


def txn_fee(encoded_size: int, config: TxnFeeConfig) -> int:
    """Fee for a transaction envelope of the given encoded size.

    The size is that of the envelope with its fee set to zero, every
    signature replaced by TXN_FEE_SIGNATURE_SIZE zero bytes, and the payer
    signature likewise filled only when a payer is set.
    """
    return calculate_txn_fee(encoded_size, config) * config.txn_fee_multiplier


def add_gateway_staking_fee(
    config: TxnFeeConfig, mode: HotspotStakingMode = HotspotStakingMode.FULL
) -> int:
    """Staking fee for adding a gateway in the given mode."""
    return {
        HotspotStakingMode.FULL: config.staking_fee_txn_add_gateway_v1,
        HotspotStakingMode.DATA_ONLY: config.staking_fee_txn_add_dataonly_gateway_v1,
        HotspotStakingMode.LIGHT: config.staking_fee_txn_add_light_gateway_v1,
    }[HotspotStakingMode(mode)]


def assert_location_staking_fee(
    config: TxnFeeConfig, mode: HotspotStakingMode = HotspotStakingMode.FULL
) -> int:
    """Staking fee for asserting a gateway's location in the given mode."""
    return {
        HotspotStakingMode.FULL: config.staking_fee_txn_assert_location_v1,
        HotspotStakingMode.DATA_ONLY: config.staking_fee_txn_assert_location_dataonly_gateway_v1,
        HotspotStakingMode.LIGHT: config.staking_fee_txn_assert_location_light_gateway_v1,
    }[HotspotStakingMode(mode)]


def assert_location_v1_staking_fee(config: TxnFeeConfig) -> int:
    """Staking fee for a first-version location assertion."""
    return config.staking_fee_txn_assert_location_v1


def oui_staking_fee(config: TxnFeeConfig, requested_subnet_size: int) -> int:
    """Staking fee for an OUI with the requested number of addresses."""
    return (
        config.staking_fee_txn_oui_v1
        + requested_subnet_size * config.staking_fee_txn_oui_v1_per_address
    )


def routing_staking_fee(config: TxnFeeConfig, subnet_size: int | None) -> int:
    """Staking fee for a routing update; only subnet requests cost anything."""
    if subnet_size is None:
        return 0
    return subnet_size * config.staking_fee_txn_oui_v1_per_address