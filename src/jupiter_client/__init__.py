"""Client library for the Jupiter swap aggregator on Solana.

Modules:
- client: JupiterClient (quote, swap, price, routes map, best swap, exchange rate)
- models: wire models and request parameters
- routing: best-route selection and routes-map lookups
- amounts: base-unit / display amount conversions
- config: immutable client configuration and option functions
- errors: exception hierarchy
"""

from jupiter_client.client import JupiterClient
from jupiter_client.config import (
    ClientConfig,
    ClientSettings,
    get_settings,
    with_api_url,
    with_endpoint_price,
    with_endpoint_quote,
    with_endpoint_routes_map,
    with_endpoint_swap,
    with_http_client,
    with_timeout,
)
from jupiter_client.errors import (
    AmountParseError,
    DecodeError,
    EnvelopeDecodeError,
    JupiterError,
    NoQuotesError,
    NoRouteAvailableError,
    ParamEncodingError,
    PayloadDecodeError,
    TransportError,
    UnexpectedStatusError,
)
from jupiter_client.models import (
    BestSwapParams,
    ExchangeRateParams,
    Fee,
    IndexedRoutesMap,
    MarketInfo,
    Price,
    PriceMap,
    PriceParams,
    QuoteParams,
    Rate,
    Route,
    RouteFees,
    SwapMode,
    SwapParams,
)
from jupiter_client.routing import lookup_reachable_mints, select_best_route

__all__ = [
    # Client
    "JupiterClient",
    # Configuration
    "ClientConfig",
    "ClientSettings",
    "get_settings",
    "with_api_url",
    "with_endpoint_price",
    "with_endpoint_quote",
    "with_endpoint_routes_map",
    "with_endpoint_swap",
    "with_http_client",
    "with_timeout",
    # Models
    "BestSwapParams",
    "ExchangeRateParams",
    "Fee",
    "IndexedRoutesMap",
    "MarketInfo",
    "Price",
    "PriceMap",
    "PriceParams",
    "QuoteParams",
    "Rate",
    "Route",
    "RouteFees",
    "SwapMode",
    "SwapParams",
    # Routing
    "lookup_reachable_mints",
    "select_best_route",
    # Errors
    "AmountParseError",
    "DecodeError",
    "EnvelopeDecodeError",
    "JupiterError",
    "NoQuotesError",
    "NoRouteAvailableError",
    "ParamEncodingError",
    "PayloadDecodeError",
    "TransportError",
    "UnexpectedStatusError",
]
