"""Tests for SwapQuoteBuilder."""

import asyncio
from decimal import Decimal

import pytest

from dexquote.config import QuoteConfig
from dexquote.contracts import (
    V2_ROUTER_GET_AMOUNTS_OUT,
    V3_QUOTER_V1_QUOTE_EXACT_INPUT_SINGLE,
    V3_QUOTER_V2_QUOTE_EXACT_INPUT_SINGLE,
)
from dexquote.errors import (
    ChainTransportError,
    InvalidAmountError,
    InvalidFeeDiscountError,
    InvalidSlippageError,
    MalformedResponseError,
    ZeroLiquidityError,
)
from dexquote.models.pool import DexVariant
from dexquote.models.swap import SwapDirection, V2Route, V3Route
from dexquote.quoting.builder import SwapQuoteBuilder, validate_trade_intent
from tests.helpers.constants import LOW_TOKEN, NOW, PAIR, POOL
from tests.helpers.scripting import script_v2_quote, script_v3_quote
from tests.helpers.snapshots import make_v2_snapshot, make_v3_snapshot


def build(client, chain, snapshot, direction, amount, slippage_bps, fee_discount=0, config=None):
    builder = SwapQuoteBuilder(client, config or QuoteConfig(), clock=lambda: float(NOW))
    return asyncio.run(
        builder.build(chain, snapshot, direction, amount, slippage_bps, fee_discount)
    )


class TestV2Quotes:
    """Quotes through the V2 router."""

    def test_buy(self, eth, mock_client):
        """BUY spends native for the token."""
        script_v2_quote(mock_client, eth, eth.wrapped_native, LOW_TOKEN, 5 * 10**17, 1_000 * 10**18)

        request = build(mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, "0.5", 50)

        assert request.token_in == eth.wrapped_native
        assert request.token_out == LOW_TOKEN
        assert request.amount_in == 5 * 10**17
        assert request.quoted_amount_out == 1_000 * 10**18
        assert request.amount_out_minimum == 995 * 10**18
        assert request.slippage_bps == 50
        assert request.route == V2Route(path=(eth.wrapped_native, LOW_TOKEN))
        assert request.dex_variant is DexVariant.V2
        assert request.pool_address == PAIR
        assert request.chain == "eth"

    def test_sell_uses_token_decimals(self, eth, mock_client):
        """SELL scales the amount with the token's own decimals."""
        snapshot = make_v2_snapshot(eth, decimals=6)
        script_v2_quote(mock_client, eth, LOW_TOKEN, eth.wrapped_native, 2_500_000, 10**15)

        request = build(mock_client, eth, snapshot, "sell", Decimal("2.5"), 0)

        assert request.direction is SwapDirection.SELL
        assert request.token_in == LOW_TOKEN
        assert request.token_out == eth.wrapped_native
        assert request.amount_in == 2_500_000
        assert request.amount_out_minimum == request.quoted_amount_out == 10**15

    def test_deadline(self, eth, mock_client):
        script_v2_quote(mock_client, eth, eth.wrapped_native, LOW_TOKEN, 10**18, 10**20)

        request = build(mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, 1, 100)

        assert request.deadline == NOW + 1200

    def test_advisory_fee(self, eth, mock_client):
        script_v2_quote(mock_client, eth, eth.wrapped_native, LOW_TOKEN, 10**18, 10**20)

        request = build(
            mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, 1, 100, fee_discount="0.5"
        )

        assert request.fee.rate == Decimal("0.003")
        assert request.fee.amount == 3 * 10**15
        assert request.fee.discounted_amount == 15 * 10**14

    def test_custom_fee_rate(self, eth, mock_client):
        script_v2_quote(mock_client, eth, eth.wrapped_native, LOW_TOKEN, 10**18, 10**20)
        config = QuoteConfig(advisory_fee_rate=Decimal("0.01"))

        request = build(
            mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, 1, 100, config=config
        )

        assert request.fee.amount == 10**16

    def test_truncates_extra_precision(self, eth, mock_client):
        """Digits beyond the token's decimals are dropped, never rounded up."""
        snapshot = make_v2_snapshot(eth, decimals=6)
        script_v2_quote(mock_client, eth, LOW_TOKEN, eth.wrapped_native, 1_234_567, 10**15)

        request = build(mock_client, eth, snapshot, SwapDirection.SELL, "1.2345679", 10)

        assert request.amount_in == 1_234_567

    def test_zero_quote(self, eth, mock_client):
        script_v2_quote(mock_client, eth, eth.wrapped_native, LOW_TOKEN, 10**18, 0)

        with pytest.raises(ZeroLiquidityError):
            build(mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, 1, 100)

    def test_malformed_amounts(self, eth, mock_client):
        mock_client.respond(
            eth.v2_router,
            V2_ROUTER_GET_AMOUNTS_OUT,
            (10**18, [eth.wrapped_native, LOW_TOKEN]),
            ([10**18],),
        )

        with pytest.raises(MalformedResponseError):
            build(mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, 1, 100)

    def test_quote_failure_propagates(self, eth, mock_client):
        mock_client.fail(
            eth.v2_router,
            V2_ROUTER_GET_AMOUNTS_OUT,
            (10**18, [eth.wrapped_native, LOW_TOKEN]),
            ChainTransportError("connection reset"),
        )

        with pytest.raises(ChainTransportError):
            build(mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, 1, 100)


class TestV3Quotes:
    """Quotes through the V3 Quoter contracts."""

    def test_quoter_v1(self, eth, mock_client):
        """Mainnet's Quoter takes flat arguments."""
        script_v3_quote(
            mock_client, eth, eth.wrapped_native, LOW_TOKEN, 3000, 10**18, 2_000 * 10**18
        )

        request = build(mock_client, eth, make_v3_snapshot(eth), SwapDirection.BUY, 1, 100)

        assert request.quoted_amount_out == 2_000 * 10**18
        assert request.amount_out_minimum == 1_980 * 10**18
        assert request.route == V3Route(fee_tier=3000)
        assert request.dex_variant is DexVariant.V3
        assert request.pool_address == POOL
        assert mock_client.called(V3_QUOTER_V1_QUOTE_EXACT_INPUT_SINGLE)
        assert not mock_client.called(V3_QUOTER_V2_QUOTE_EXACT_INPUT_SINGLE)

    def test_quoter_v2(self, bsc, mock_client):
        """QuoterV2 takes a params struct and returns extra values."""
        snapshot = make_v3_snapshot(bsc, fee_tier=500)
        script_v3_quote(mock_client, bsc, LOW_TOKEN, bsc.wrapped_native, 500, 10**18, 10**16)

        request = build(mock_client, bsc, snapshot, SwapDirection.SELL, 1, 0)

        assert request.quoted_amount_out == 10**16
        assert request.route == V3Route(fee_tier=500)
        assert mock_client.called(V3_QUOTER_V2_QUOTE_EXACT_INPUT_SINGLE)
        assert not mock_client.called(V3_QUOTER_V1_QUOTE_EXACT_INPUT_SINGLE)

    def test_zero_quote(self, eth, mock_client):
        script_v3_quote(mock_client, eth, eth.wrapped_native, LOW_TOKEN, 3000, 10**18, 0)

        with pytest.raises(ZeroLiquidityError):
            build(mock_client, eth, make_v3_snapshot(eth), SwapDirection.BUY, 1, 100)


class TestValidation:
    """Invalid input fails before any quote call."""

    @pytest.mark.parametrize("amount", [0, -1, "0", "-0.5", "abc", float("inf")])
    def test_invalid_amount(self, eth, mock_client, amount):
        with pytest.raises(InvalidAmountError):
            build(mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, amount, 50)
        assert mock_client.calls == []

    def test_amount_below_one_base_unit(self, eth, mock_client):
        snapshot = make_v2_snapshot(eth, decimals=6)

        with pytest.raises(InvalidAmountError):
            build(mock_client, eth, snapshot, SwapDirection.SELL, "0.0000001", 50)
        assert mock_client.calls == []

    @pytest.mark.parametrize("slippage_bps", [-1, 10_000])
    def test_invalid_slippage(self, eth, mock_client, slippage_bps):
        with pytest.raises(InvalidSlippageError):
            build(mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, 1, slippage_bps)
        assert mock_client.calls == []

    def test_invalid_fee_discount(self, eth, mock_client):
        with pytest.raises(InvalidFeeDiscountError):
            build(mock_client, eth, make_v2_snapshot(eth), SwapDirection.BUY, 1, 50, fee_discount=2)
        assert mock_client.calls == []

    def test_invalid_direction(self, eth, mock_client):
        with pytest.raises(ValueError):
            build(mock_client, eth, make_v2_snapshot(eth), "hold", 1, 50)
        assert mock_client.calls == []

    def test_chain_mismatch(self, eth, bsc, mock_client):
        with pytest.raises(ValueError):
            build(mock_client, bsc, make_v2_snapshot(eth), SwapDirection.BUY, 1, 50)
        assert mock_client.calls == []


class TestValidateTradeIntent:
    """Tests for the network-free trade check."""

    def test_normalizes_inputs(self):
        direction, amount, discount = validate_trade_intent("BUY", "1.50", 50, "0.25")

        assert direction is SwapDirection.BUY
        assert amount == Decimal("1.5")
        assert discount == Decimal("0.25")

    @pytest.mark.parametrize(
        "args,error",
        [
            (("buy", 0, 50), InvalidAmountError),
            (("buy", 1, 10_000), InvalidSlippageError),
            (("buy", 1, 50, -1), InvalidFeeDiscountError),
            (("swap", 1, 50), ValueError),
        ],
    )
    def test_rejects(self, args, error):
        with pytest.raises(error):
            validate_trade_intent(*args)
