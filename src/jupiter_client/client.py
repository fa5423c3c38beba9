"""Jupiter aggregator client.

Quote, swap, price and routes-map calls, plus the best_swap and
exchange_rate composites built on top of them.
API docs: https://station.jup.ag/docs/apis/swap-api
"""

import logging
from typing import Optional

from pydantic import TypeAdapter

from jupiter_client.amounts import parse_amount
from jupiter_client.config import ClientConfig, ClientOption
from jupiter_client.errors import NoQuotesError
from jupiter_client.models import (
    BestSwapParams,
    ExchangeRateParams,
    IndexedRoutesMap,
    PriceMap,
    PriceParams,
    QuoteParams,
    Rate,
    Route,
    RoutesMapParams,
    SwapMode,
    SwapParams,
    SwapResponse,
)
from jupiter_client.routing import select_best_route
from jupiter_client.transport import Transport, decode_payload

logger = logging.getLogger(__name__)

_ROUTES = TypeAdapter(list[Route])
_PRICES = TypeAdapter(PriceMap)
_SWAP = TypeAdapter(SwapResponse)
_ROUTES_MAP = TypeAdapter(IndexedRoutesMap)


class JupiterClient:
    """Client for the Jupiter swap aggregator.

    Holds only immutable configuration and an HTTP client, so a single
    instance can be shared between threads. Nothing is retried or cached.

    Example:
        with JupiterClient(with_timeout(10.0)) as client:
            rate = client.exchange_rate(ExchangeRateParams(SOL_MINT, USDC_MINT, 100000))
    """

    def __init__(self, *options: ClientOption, config: Optional[ClientConfig] = None):
        """Initialize the client.

        Args:
            options: Option functions applied to ``config`` (or the defaults)
            config: Base configuration
        """
        config = config or ClientConfig()
        for option in options:
            config = option(config)
        self.config = config
        self._transport = Transport(config)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "JupiterClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def quote(self, params: QuoteParams) -> list[Route]:
        """Get candidate routes for a pair and amount.

        Routes are returned in the service's order, which is not guaranteed
        to be sorted by quality.

        Raises:
            NoQuotesError: the service returned no routes
        """
        op = "quote"
        logger.debug(
            f"Requesting quote: {params.amount} {params.input_mint} -> {params.output_mint}"
        )
        response = self._transport.get(self.config.endpoint_quote, params, operation=op)
        data = self._transport.unwrap(response, operation=op)

        routes = decode_payload(data if data is not None else [], _ROUTES, operation=op)
        if not routes:
            logger.warning(f"No quotes for {params.input_mint} -> {params.output_mint}")
            raise NoQuotesError("no quotes returned", operation=op)

        logger.debug(f"Got {len(routes)} route(s) for {params.input_mint} -> {params.output_mint}")
        return routes

    def swap(self, params: SwapParams) -> str:
        """Get the base64 serialized transaction executing a route.

        The caller is responsible for signing and sending it. This endpoint
        answers without the {data, ...} envelope.
        """
        op = "swap"
        response = self._transport.post(self.config.endpoint_swap, params, operation=op)
        swap = self._transport.decode_body(response, _SWAP, operation=op)
        return swap.swap_transaction

    def price(self, params: PriceParams) -> PriceMap:
        """Get prices keyed by the requested ids."""
        op = "price"
        response = self._transport.get(self.config.endpoint_price, params, operation=op)
        data = self._transport.unwrap(response, operation=op)
        return decode_payload(data if data is not None else {}, _PRICES, operation=op)

    def routes_map(self, only_direct_routes: bool = False) -> IndexedRoutesMap:
        """Get the indexed map of which output mints each input mint can reach.

        This endpoint answers without the {data, ...} envelope.
        """
        op = "routes_map"
        response = self._transport.get(
            self.config.endpoint_routes_map,
            RoutesMapParams(only_direct_routes=only_direct_routes),
            operation=op,
        )
        return self._transport.decode_body(response, _ROUTES_MAP, operation=op)

    def best_swap(self, params: BestSwapParams) -> str:
        """Quote a pair, pick the best route and return its swap transaction.

        Swap mode defaults to ExactIn. The transaction wraps/unwraps SOL and
        is built as a legacy transaction.
        """
        swap_mode = params.swap_mode or SwapMode.EXACT_IN
        routes = self.quote(
            QuoteParams(
                input_mint=params.input_mint,
                output_mint=params.output_mint,
                amount=params.amount,
                fee_bps=params.fee_amount,
                swap_mode=swap_mode,
                only_direct_routes=False,
            )
        )
        route = select_best_route(routes, operation="best_swap")

        logger.info(
            f"Best route for {params.input_mint} -> {params.output_mint}: "
            f"{route.in_amount} -> {route.out_amount} via {', '.join(route.labels)}"
        )

        return self.swap(
            SwapParams(
                route=route,
                user_public_key=params.user_public_key,
                destination_wallet=params.destination_public_key,
                fee_account=params.fee_account,
                wrap_unwrap_sol=True,
                as_legacy_transaction=True,
            )
        )

    def exchange_rate(self, params: ExchangeRateParams) -> Rate:
        """Resolve the in/out amounts of the best route for a pair.

        With ExactOut, ``params.amount`` is the amount of the output token.

        Raises:
            AmountParseError: a route amount is not a valid u64
        """
        op = "exchange_rate"
        routes = self.quote(
            QuoteParams(
                input_mint=params.input_mint,
                output_mint=params.output_mint,
                amount=params.amount,
                swap_mode=params.swap_mode,
                only_direct_routes=False,
            )
        )
        route = select_best_route(routes, operation=op)

        return Rate(
            input_mint=params.input_mint,
            output_mint=params.output_mint,
            in_amount=parse_amount(route.in_amount, "in amount", operation=op),
            out_amount=parse_amount(route.out_amount, "out amount", operation=op),
        )
