"""Integration tests against a real Ethereum mainnet RPC.

These tests require an RPC connection and are skipped by default.
Run with: RPC_URL=https://eth.llamarpc.com pytest -m requires_rpc
"""

import asyncio
import os
from decimal import Decimal

import pytest

from dexquote.chains.defaults import DEFAULT_CHAINS
from dexquote.chains.registry import ChainRegistry
from dexquote.client.web3_client import Web3ChainClient
from dexquote.engine import PoolQuoteEngine
from dexquote.errors import ChainReadError
from dexquote.models.pool import DexVariant
from dexquote.models.swap import SwapDirection
from tests.helpers.constants import UNI, UNI_WETH_V2_PAIR, UNI_WETH_V3_POOL, USDC, WETH

# Skip all tests in this module if RPC_URL is not set
pytestmark = [
    pytest.mark.requires_rpc,
    pytest.mark.skipif(
        not os.environ.get("RPC_URL"),
        reason="RPC_URL environment variable not set",
    ),
]


@pytest.fixture
def rpc_url() -> str:
    """Get RPC URL from environment."""
    url = os.environ.get("RPC_URL")
    if not url:
        pytest.skip("RPC_URL not set")
    return url


@pytest.fixture
def rpc_engine(rpc_url: str) -> PoolQuoteEngine:
    """Engine reading mainnet through the given RPC."""
    registry = ChainRegistry.from_mapping(
        {name: {**raw, "rpc_url": rpc_url} for name, raw in DEFAULT_CHAINS.items() if name == "eth"}
    )
    return PoolQuoteEngine(registry)


class TestWeb3ChainClient:
    """Raw contract reads."""

    def test_erc20_metadata(self, rpc_url):
        from dexquote.contracts import ERC20_DECIMALS, ERC20_SYMBOL

        client = Web3ChainClient(rpc_url)

        async def read():
            return await asyncio.gather(
                client.call(USDC, ERC20_SYMBOL), client.call(USDC, ERC20_DECIMALS)
            )

        (symbol,), (decimals,) = asyncio.run(read())
        assert symbol == "USDC"
        assert decimals == 6

    def test_wrong_contract_is_a_read_error(self, rpc_url):
        """getReserves() on the WETH token is not a pair read."""
        from dexquote.contracts import V2_PAIR_GET_RESERVES

        client = Web3ChainClient(rpc_url)

        with pytest.raises(ChainReadError):
            asyncio.run(client.call(WETH, V2_PAIR_GET_RESERVES))


class TestMainnetPools:
    """UNI/WETH pools on mainnet."""

    def test_v2_pool(self, rpc_engine):
        snapshot = asyncio.run(rpc_engine.resolve_pool("eth", UNI))

        assert snapshot.pool_address == UNI_WETH_V2_PAIR
        assert snapshot.token_symbol == "UNI"
        assert snapshot.token_decimals == 18
        assert snapshot.price > 0
        assert snapshot.market_value_estimate == snapshot.native_reserve * 2

    def test_v3_pool(self, rpc_engine):
        snapshot = asyncio.run(rpc_engine.resolve_pool("eth", UNI, DexVariant.V3, 3000))

        assert snapshot.pool_address == UNI_WETH_V3_POOL
        assert snapshot.fee_tier == 3000
        # UNI has traded well below 1 ETH for its entire history
        assert Decimal(0) < snapshot.price < Decimal(1)

    def test_v2_and_v3_prices_agree(self, rpc_engine):
        v2 = asyncio.run(rpc_engine.resolve_pool("eth", UNI))
        v3 = asyncio.run(rpc_engine.resolve_pool("eth", UNI, DexVariant.V3))

        assert abs(v2.price - v3.price) / v3.price < Decimal("0.05")

    def test_quote_buy(self, rpc_engine):
        snapshot, request = asyncio.run(
            rpc_engine.resolve_and_quote("eth", UNI, SwapDirection.BUY, "0.01", 50)
        )

        assert request.token_out == UNI
        assert 0 < request.amount_out_minimum < request.quoted_amount_out
