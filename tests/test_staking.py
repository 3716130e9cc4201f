import json

import httpx
import pytest
import respx

from heliumwallet.codec import to_b64
from heliumwallet.errors import WalletError
from heliumwallet.keypair import Keypair, PublicKey
from heliumwallet.staking import DEFAULT_BASE_URL, USER_AGENT, StakingClient

BASE_URL = "https://staking.example.com/api"


def test_default_base_url():
    assert StakingClient().base_url == DEFAULT_BASE_URL


@pytest.mark.asyncio
async def test_address_for_returns_maker_key():
    gateway = Keypair.generate().public_key
    maker = Keypair.generate().public_key
    with respx.mock(base_url=BASE_URL) as router:
        route = router.get(f"/hotspots/{gateway}").mock(
            return_value=httpx.Response(
                200, json={"data": {"maker": {"address": str(maker)}}}
            )
        )
        result = await StakingClient(BASE_URL).address_for(gateway)
    assert result == maker
    assert route.calls.last.request.headers["user-agent"] == USER_AGENT


@pytest.mark.asyncio
async def test_address_for_missing_address_raises():
    gateway = Keypair.generate().public_key
    with respx.mock(base_url=BASE_URL) as router:
        router.get(f"/hotspots/{gateway}").mock(
            return_value=httpx.Response(200, json={"data": {}})
        )
        with pytest.raises(WalletError, match="Invalid staking address"):
            await StakingClient(BASE_URL).address_for(gateway)


@pytest.mark.asyncio
async def test_address_for_http_error_raises():
    gateway = Keypair.generate().public_key
    with respx.mock(base_url=BASE_URL) as router:
        router.get(f"/hotspots/{gateway}").mock(return_value=httpx.Response(500))
        with pytest.raises(WalletError):
            await StakingClient(BASE_URL).address_for(gateway)


@pytest.mark.asyncio
async def test_sign_posts_transaction_and_decodes_reply():
    onboarding_key = str(Keypair.generate().public_key)
    txn = b"\x0a\x10unsigned-txn"
    signed = b"\x0a\x10signed-txn"
    with respx.mock(base_url=BASE_URL) as router:
        route = router.post(f"/transactions/pay/{onboarding_key}").mock(
            return_value=httpx.Response(200, json={"data": {"transaction": to_b64(signed)}})
        )
        result = await StakingClient(BASE_URL).sign(onboarding_key, txn)
    assert result == signed
    assert json.loads(route.calls.last.request.content) == {"transaction": to_b64(txn)}


@pytest.mark.asyncio
async def test_sign_unexpected_reply_raises():
    onboarding_key = str(Keypair.generate().public_key)
    with respx.mock(base_url=BASE_URL) as router:
        router.post(f"/transactions/pay/{onboarding_key}").mock(
            return_value=httpx.Response(200, json={"data": {"transaction": 5}})
        )
        with pytest.raises(WalletError, match="Unexpected transaction response"):
            await StakingClient(BASE_URL).sign(onboarding_key, b"txn")


@pytest.mark.asyncio
async def test_non_json_reply_raises():
    gateway = Keypair.generate().public_key
    with respx.mock(base_url=BASE_URL) as router:
        router.get(f"/hotspots/{gateway}").mock(
            return_value=httpx.Response(200, content=b"not json")
        )
        with pytest.raises(WalletError):
            await StakingClient(BASE_URL).address_for(gateway)


@pytest.mark.asyncio
async def test_address_round_trip_through_server_keeps_key_type():
    gateway = Keypair.generate().public_key
    maker = Keypair.generate(key_type=Keypair.generate().key_type).public_key
    with respx.mock(base_url=BASE_URL) as router:
        router.get(f"/hotspots/{gateway}").mock(
            return_value=httpx.Response(
                200, json={"data": {"maker": {"address": str(maker)}}}
            )
        )
        result = await StakingClient(BASE_URL).address_for(gateway)
    assert isinstance(result, PublicKey)
    assert result.key_type == maker.key_type
    assert result.to_bytes() == maker.to_bytes()