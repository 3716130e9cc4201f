"""Client for the onboarding server that co-signs hotspot transactions."""

from __future__ import annotations

from typing import Any

import httpx

from .codec import from_b64, to_b64
from .errors import WalletError
from .keypair import PublicKey

DEFAULT_TIMEOUT = 120
DEFAULT_BASE_URL = "https://onboarding.dewi.org/api/v2"
USER_AGENT = "heliumwallet"


def _lookup(document: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(document, dict):
            return None
        document = document.get(key)
    return document


class StakingClient:
    """Talks to an onboarding server under a base URL."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(
            timeout=self.timeout, headers={"User-Agent": USER_AGENT}
        ) as client:
            try:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPError as exc:
                raise WalletError(f"staking server request failed: {exc}") from exc
            except ValueError as exc:
                raise WalletError(f"invalid response from staking server: {exc}") from exc

    async def address_for(self, gateway: PublicKey) -> PublicKey:
        """Fetch the maker's public key for an onboarding key."""
        response = await self._request("GET", f"{self.base_url}/hotspots/{gateway}")
        address = _lookup(response, "data", "maker", "address")
        if not isinstance(address, str):
            raise WalletError("Invalid staking address from server")
        return PublicKey.from_b58(address)

    async def sign(self, onboarding_key: str, txn: bytes) -> bytes:
        """Have the server sign an encoded transaction envelope with the onboarding key."""
        payload = {"transaction": to_b64(txn)}
        response = await self._request(
            "POST", f"{self.base_url}/transactions/pay/{onboarding_key}", json=payload
        )
        data = _lookup(response, "data", "transaction")
        if not isinstance(data, str):
            raise WalletError("Unexpected transaction response from staking server")
        return from_b64(data)