"""Engine facade tying the registry, chain clients, resolvers and quoting together."""

from __future__ import annotations

import time
from collections.abc import Callable
from decimal import Decimal

import structlog

from dexquote.chains.registry import ChainConfig, ChainRegistry, load_chain_registry
from dexquote.client.base import ChainClient
from dexquote.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from dexquote.models.pool import AnyPoolSnapshot, DexVariant
from dexquote.models.swap import SwapDirection, SwapRequest
from dexquote.models.types import normalize_address
from dexquote.quoting.builder import SwapQuoteBuilder, validate_trade_intent
from dexquote.resolvers.uniswap_v2 import UniswapV2PoolResolver
from dexquote.resolvers.uniswap_v3 import UniswapV3PoolResolver

logger = structlog.get_logger()

ClientFactory = Callable[[ChainConfig], ChainClient]


def web3_client_factory(chain: ChainConfig) -> ChainClient:
    """Create a Web3ChainClient for a chain's RPC endpoint."""
    from dexquote.client.web3_client import Web3ChainClient

    return Web3ChainClient(chain.rpc_url)


class PoolQuoteEngine:
    """Resolves pools and builds swap quotes across chains.

    Stateless between calls: every call looks up the chain, builds a fresh
    client, closes it before returning and returns fresh values. The chain
    is looked up and inputs are validated before any contract call, so a
    bad request never reaches the network.
    """

    def __init__(
        self,
        registry: ChainRegistry,
        client_factory: ClientFactory = web3_client_factory,
        quote_config: QuoteConfig = DEFAULT_QUOTE_CONFIG,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize engine.

        Args:
            registry: Chain registry
            client_factory: Creates a ChainClient for a chain
            quote_config: Quote configuration
            clock: Source of the current unix time for swap deadlines
        """
        self.registry = registry
        self.client_factory = client_factory
        self.quote_config = quote_config
        self.clock = clock

    async def resolve_pool(
        self,
        chain: str,
        token: str,
        variant: DexVariant | str = DexVariant.V2,
        fee_tier: int | None = None,
    ) -> AnyPoolSnapshot:
        """Resolve a token's pool against the chain's wrapped native token.

        Args:
            chain: Registry key (e.g., "eth")
            token: Token address
            variant: V2 or V3 (case-insensitive)
            fee_tier: V3 fee tier (default from QuoteConfig); ignored for V2

        Returns:
            V2PoolSnapshot or V3PoolSnapshot
        """
        config, token, variant = self._prepare_pool(chain, token, variant)
        client = self.client_factory(config)
        try:
            return await self._resolve(client, config, token, variant, fee_tier)
        finally:
            await client.close()

    async def quote_swap(
        self,
        snapshot: AnyPoolSnapshot,
        direction: SwapDirection | str,
        amount: Decimal | int | float | str,
        slippage_bps: int,
        fee_discount: Decimal | float | int | str = 0,
    ) -> SwapRequest:
        """Build a swap request through a resolved pool.

        Args:
            snapshot: Pool from resolve_pool
            direction: BUY (native -> token) or SELL (token -> native)
            amount: Human-readable amount of token_in
            slippage_bps: Slippage tolerance in basis points
            fee_discount: Fraction of the advisory fee waived

        Returns:
            SwapRequest ready for a caller to sign
        """
        config = self.registry.lookup(snapshot.chain)
        validate_trade_intent(direction, amount, slippage_bps, fee_discount)
        client = self.client_factory(config)
        try:
            return await self._builder(client).build(
                config, snapshot, direction, amount, slippage_bps, fee_discount
            )
        finally:
            await client.close()

    async def resolve_and_quote(
        self,
        chain: str,
        token: str,
        direction: SwapDirection | str,
        amount: Decimal | int | float | str,
        slippage_bps: int,
        variant: DexVariant | str = DexVariant.V2,
        fee_tier: int | None = None,
        fee_discount: Decimal | float | int | str = 0,
    ) -> tuple[AnyPoolSnapshot, SwapRequest]:
        """Resolve a pool then quote a swap through it.

        The trade is validated together with the pool request, so an
        invalid amount, slippage or discount fails before any read. Both
        steps share one client.

        Returns:
            Tuple of (snapshot, swap request)
        """
        config, token, variant = self._prepare_pool(chain, token, variant)
        validate_trade_intent(direction, amount, slippage_bps, fee_discount)

        client = self.client_factory(config)
        try:
            snapshot = await self._resolve(client, config, token, variant, fee_tier)
            request = await self._builder(client).build(
                config, snapshot, direction, amount, slippage_bps, fee_discount
            )
        finally:
            await client.close()
        return snapshot, request

    def _prepare_pool(
        self, chain: str, token: str, variant: DexVariant | str
    ) -> tuple[ChainConfig, str, DexVariant]:
        """Look up the chain and validate pool inputs; no network access."""
        config = self.registry.lookup(chain)
        token = normalize_address(token, validate=True)
        return config, token, DexVariant(variant)

    async def _resolve(
        self,
        client: ChainClient,
        config: ChainConfig,
        token: str,
        variant: DexVariant,
        fee_tier: int | None,
    ) -> AnyPoolSnapshot:
        logger.debug("resolving_pool", chain=config.name, token=token, variant=variant.value)
        if variant is DexVariant.V2:
            return await UniswapV2PoolResolver(client).resolve(config, token)
        tier = self.quote_config.default_fee_tier if fee_tier is None else fee_tier
        return await UniswapV3PoolResolver(client).resolve(config, token, tier)

    def _builder(self, client: ChainClient) -> SwapQuoteBuilder:
        return SwapQuoteBuilder(client, self.quote_config, self.clock)


_default_engine: PoolQuoteEngine | None = None


def get_default_engine() -> PoolQuoteEngine:
    """Get the process-wide engine, loading the chain registry on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = PoolQuoteEngine(load_chain_registry())
    return _default_engine


__all__ = [
    "ClientFactory",
    "PoolQuoteEngine",
    "get_default_engine",
    "web3_client_factory",
]
