"""Tests for parameter encoding."""

from dataclasses import dataclass
from typing import ClassVar

import pytest

from conftest import USDC_MINT, SOL_MINT, USER_KEY, make_route
from jupiter_client.encoding import WireField, encode_json, encode_query, format_query_value, is_zero
from jupiter_client.errors import ParamEncodingError
from jupiter_client.models import PriceParams, QuoteParams, Route, RoutesMapParams, SwapMode, SwapParams


class TestQueryEncoding:
    """Tests for GET query encoding."""

    def test_quote_required_only(self):
        """Test that zero-valued optional fields are left out."""
        params = QuoteParams(input_mint=SOL_MINT, output_mint=USDC_MINT, amount=100000)

        assert encode_query(params) == [
            ("inputMint", SOL_MINT),
            ("outputMint", USDC_MINT),
            ("amount", "100000"),
        ]

    def test_quote_required_zero_amount_kept(self):
        """Test that required fields are sent even at a zero value."""
        params = QuoteParams(input_mint="", output_mint=USDC_MINT, amount=0)
        query = dict(encode_query(params))

        assert query["inputMint"] == ""
        assert query["amount"] == "0"

    def test_quote_all_fields(self):
        """Test every optional field with a non-zero value."""
        params = QuoteParams(
            input_mint=SOL_MINT,
            output_mint=USDC_MINT,
            amount=100000,
            swap_mode=SwapMode.EXACT_OUT,
            slippage_bps=50,
            fee_bps=4,
            only_direct_routes=True,
            as_legacy_transaction=True,
            user_public_key=USER_KEY,
        )

        assert dict(encode_query(params)) == {
            "inputMint": SOL_MINT,
            "outputMint": USDC_MINT,
            "amount": "100000",
            "swapMode": "ExactOut",
            "slippageBps": "50",
            "feeBps": "4",
            "onlyDirectRoutes": "true",
            "asLegacyTransaction": "true",
            "userPublicKey": USER_KEY,
        }

    def test_price_ids_list_joined(self):
        """Test that a list of ids is comma-joined."""
        params = PriceParams(ids=["SOL", "BONK"], vs_token=USDC_MINT, vs_amount=1.0)

        assert encode_query(params) == [
            ("ids", "SOL,BONK"),
            ("vsToken", USDC_MINT),
            ("vsAmount", "1"),
        ]

    def test_routes_map_false_flag_kept(self):
        """Test that the routes-map flag is always sent."""
        assert encode_query(RoutesMapParams(only_direct_routes=False)) == [("onlyDirectRoutes", "false")]
        assert encode_query(RoutesMapParams(only_direct_routes=True)) == [("onlyDirectRoutes", "true")]

    def test_format_query_value(self):
        """Test scalar rendering."""
        assert format_query_value(True) == "true"
        assert format_query_value(0.25) == "0.25"
        assert format_query_value(2.0) == "2"
        assert format_query_value(SwapMode.EXACT_IN) == "ExactIn"

    def test_unsupported_value_raises(self):
        """Test that values without a query form fail as encoding errors."""

        @dataclass
        class BadParams:
            data: object
            wire_fields: ClassVar = (WireField.required("data", "data"),)

        with pytest.raises(ParamEncodingError) as exc_info:
            encode_query(BadParams(data=object()), operation="quote")

        assert exc_info.value.operation == "quote"
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_params_without_wire_fields_raise(self):
        """Test that undeclared parameter types are rejected."""
        with pytest.raises(ParamEncodingError):
            encode_query({"inputMint": SOL_MINT})


class TestJsonEncoding:
    """Tests for POST JSON encoding."""

    @pytest.fixture
    def route(self):
        return Route.model_validate(make_route())

    def test_swap_minimal_body(self, route):
        """Test that unset optional fields are absent, not null."""
        body = encode_json(SwapParams(route=route, user_public_key=USER_KEY))

        assert set(body) == {"route", "userPublicKey"}
        assert body["userPublicKey"] == USER_KEY
        assert body["route"]["inAmount"] == "100000"
        assert body["route"]["marketInfos"][0]["label"] == "Orca"

    def test_swap_explicit_false_and_zero_sent(self, route):
        """Test that pointer-style fields are sent when explicitly set."""
        body = encode_json(
            SwapParams(
                route=route,
                wrap_unwrap_sol=False,
                as_legacy_transaction=True,
                compute_unit_price_micro_lamports=0,
            )
        )

        assert body["wrapUnwrapSOL"] is False
        assert body["asLegacyTransaction"] is True
        assert body["computeUnitPriceMicroLamports"] == 0
        assert "feeAccount" not in body
        assert "destinationWallet" not in body
        assert "userPublicKey" not in body

    def test_swap_all_fields(self, route):
        """Test every wire key of the swap body."""
        body = encode_json(
            SwapParams(
                route=route,
                user_public_key=USER_KEY,
                wrap_unwrap_sol=True,
                fee_account="FeeAcct1111",
                as_legacy_transaction=True,
                compute_unit_price_micro_lamports=5000,
                destination_wallet="Dest1111",
            )
        )

        assert list(body) == [
            "route",
            "userPublicKey",
            "wrapUnwrapSOL",
            "feeAccount",
            "asLegacyTransaction",
            "computeUnitPriceMicroLamports",
            "destinationWallet",
        ]

    def test_is_zero(self):
        """Test the omit-if-empty predicate."""
        assert is_zero(None)
        assert is_zero("")
        assert is_zero(0)
        assert is_zero(0.0)
        assert is_zero(False)
        assert is_zero([])
        assert not is_zero("x")
        assert not is_zero(SwapMode.EXACT_IN)
