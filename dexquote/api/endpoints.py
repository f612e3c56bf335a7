"""API endpoints for pool snapshots and swap quotes."""

from typing import NoReturn

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from dexquote.api.schemas import (
    PoolSnapshotResponse,
    QuoteRequest,
    QuoteResponse,
    SwapRequestResponse,
)
from dexquote.engine import PoolQuoteEngine, get_default_engine
from dexquote.errors import (
    ChainReadError,
    DexQuoteError,
    PoolNotFoundError,
    UnsupportedChainError,
    ZeroLiquidityError,
)
from dexquote.models.pool import DexVariant

logger = structlog.get_logger()

router = APIRouter()


def get_engine() -> PoolQuoteEngine:
    """Dependency provider for the engine instance.

    Override this in tests to inject an engine with a mock client:
        app.dependency_overrides[get_engine] = lambda: engine

    Returns:
        The engine to use for requests.
    """
    return get_default_engine()


def _raise_http(error: DexQuoteError, **context: object) -> NoReturn:
    """Map a dexquote error to an HTTP error response.

    - Unsupported chain / pool not found: 404
    - Zero liquidity: 409
    - Chain read failure: 502
    - Invalid input: 422
    """
    if isinstance(error, UnsupportedChainError | PoolNotFoundError):
        status = 404
    elif isinstance(error, ZeroLiquidityError):
        status = 409
    elif isinstance(error, ChainReadError):
        status = 502
        logger.warning("chain_read_failed", error=str(error), **context)
    else:
        status = 422
    raise HTTPException(status_code=status, detail=str(error)) from error


@router.get("/chains")
async def list_chains(engine: PoolQuoteEngine = Depends(get_engine)) -> dict[str, list[str]]:
    """List supported chain names."""
    return {"chains": engine.registry.chains}


@router.get("/pools/{chain}/{token}", response_model=PoolSnapshotResponse)
async def get_pool(
    chain: str,
    token: str,
    variant: DexVariant = DexVariant.V2,
    fee_tier: int | None = Query(default=None),
    engine: PoolQuoteEngine = Depends(get_engine),
) -> PoolSnapshotResponse:
    """Resolve the token/wrapped-native pool on a chain.

    Args:
        chain: Chain name (e.g., "eth", "bsc")
        token: Token address
        variant: "v2" or "v3"
        fee_tier: V3 fee tier (default 3000)
        engine: Injected engine (via FastAPI Depends)
    """
    logger.info("pool_requested", chain=chain, token=token, variant=variant.value)
    try:
        snapshot = await engine.resolve_pool(chain, token, variant, fee_tier)
    except DexQuoteError as e:
        _raise_http(e, chain=chain, token=token)
    except Exception:
        # Log with full traceback, then let FastAPI answer 500
        logger.exception("pool_request_failed", chain=chain, token=token)
        raise
    return PoolSnapshotResponse.from_snapshot(snapshot)


@router.post("/quotes/{chain}", response_model=QuoteResponse)
async def quote(
    chain: str,
    body: QuoteRequest,
    engine: PoolQuoteEngine = Depends(get_engine),
) -> QuoteResponse:
    """Resolve a pool and build a slippage-bounded swap request.

    The response is what a caller would sign; nothing is submitted.
    """
    logger.info(
        "quote_requested",
        chain=chain,
        token=body.token,
        direction=body.direction.value,
        variant=body.variant.value,
        slippage_bps=body.slippage_bps,
    )
    try:
        snapshot, request = await engine.resolve_and_quote(
            chain,
            body.token,
            body.direction,
            body.amount,
            body.slippage_bps,
            variant=body.variant,
            fee_tier=body.fee_tier,
            fee_discount=body.fee_discount,
        )
    except DexQuoteError as e:
        _raise_http(e, chain=chain, token=body.token)
    except Exception:
        logger.exception("quote_request_failed", chain=chain, token=body.token)
        raise

    return QuoteResponse(
        pool=PoolSnapshotResponse.from_snapshot(snapshot),
        swap=SwapRequestResponse.from_request(request),
    )
