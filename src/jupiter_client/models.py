"""Wire models and request parameter objects for the Jupiter API.

Response models are pydantic models keyed by the API's camelCase names.
Unknown keys are kept, so a route returned by /quote can be passed back to
/swap unchanged. Request parameters are plain dataclasses that declare their
wire layout through ``wire_fields`` (see jupiter_client.encoding).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from jupiter_client.encoding import WireField


class SwapMode(str, Enum):
    """Which side of the swap the requested amount refers to."""

    EXACT_IN = "ExactIn"
    EXACT_OUT = "ExactOut"


class WireModel(BaseModel):
    """Base for models decoded from API responses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump with API key names, as the service expects them back."""
        return self.model_dump(mode="json", by_alias=True)


# ======================
# Quote / route
# ======================


class Fee(WireModel):
    """A fee charged on one leg of a route."""

    amount: str = ""
    mint: str = ""
    pct: float = 0.0


class MarketInfo(WireModel):
    """One hop of a route through a single liquidity venue."""

    id: str = ""
    label: str = ""
    input_mint: str = ""
    output_mint: str = ""
    not_enough_liquidity: bool = False
    in_amount: str = ""
    out_amount: str = ""
    min_in_amount: str = ""
    min_out_amount: str = ""
    price_impact_pct: float = 0.0
    lp_fee: Optional[Fee] = None
    platform_fee: Optional[Fee] = None

    def to_wire(self) -> dict[str, Any]:
        data = super().to_wire()
        # only present on slippage-bounded legs
        for key in ("minInAmount", "minOutAmount"):
            if not data.get(key):
                data.pop(key, None)
        return data


class RouteFees(WireModel):
    """Lamports needed for signatures and account deposits."""

    signature_fee: int = 0
    open_orders_deposits: list[int] = Field(default_factory=list)
    ata_deposits: list[int] = Field(default_factory=list)
    total_fee_and_deposits: int = 0
    minimum_sol_for_transaction: int = Field(default=0, alias="minimumSOLForTransaction")


class Route(WireModel):
    """A candidate conversion route returned by /quote.

    Amounts are base-unit decimal strings. ``market_infos`` is in execution
    order.
    """

    in_amount: str
    out_amount: str
    price_impact_pct: float
    market_infos: list[MarketInfo]
    amount: str = ""
    slippage_bps: int = 0
    # ExactIn: minimum out amount; ExactOut: maximum in amount
    other_amount_threshold: str = ""
    swap_mode: str = ""
    fees: Optional[RouteFees] = None

    @property
    def labels(self) -> list[str]:
        """Venue label of each leg, in execution order."""
        return [info.label for info in self.market_infos]

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude={"market_infos"})
        data["marketInfos"] = [info.to_wire() for info in self.market_infos]
        if self.fees is None:
            data.pop("fees", None)
        return data


class SwapResponse(WireModel):
    """Body returned by /swap."""

    swap_transaction: str  # base64 encoded transaction


class ResponseEnvelope(WireModel):
    """Generic wrapper used by /quote and /price."""

    data: Any
    time_taken: float = 0.0
    context_slot: int = 0


# ======================
# Price
# ======================


class Price(WireModel):
    """Price of one unit of a token in terms of ``vs_token``."""

    id: str  # token address
    mint_symbol: str = ""
    vs_token: str = ""
    vs_token_symbol: str = ""
    price: float


PriceMap = dict[str, Price]


# ======================
# Routes map
# ======================


class IndexedRoutesMap(WireModel):
    """Compacted directed adjacency of swappable mints.

    ``indexed_route_map`` is keyed by a mint's position in ``mint_keys``
    (as a decimal string) and lists the positions of reachable output mints.
    """

    mint_keys: list[str]
    indexed_route_map: dict[str, list[int]]

    def routes_for_mint(self, mint: str) -> list[str]:
        """Output mints reachable from ``mint``; empty if the mint is unknown."""
        from jupiter_client.routing import lookup_reachable_mints

        return lookup_reachable_mints(self, mint)


# ======================
# Request parameters
# ======================


@dataclass
class QuoteParams:
    """Parameters for GET /quote."""

    input_mint: str
    output_mint: str
    amount: int  # base units
    swap_mode: Optional[SwapMode] = None  # service default: ExactIn
    slippage_bps: int = 0
    fee_bps: int = 0  # only pass in to charge a platform fee
    only_direct_routes: bool = False  # no hops or split trades
    as_legacy_transaction: bool = False
    user_public_key: str = ""

    wire_fields: ClassVar[tuple[WireField, ...]] = (
        WireField.required("input_mint", "inputMint"),
        WireField.required("output_mint", "outputMint"),
        WireField.required("amount", "amount"),
        WireField("swap_mode", "swapMode"),
        WireField("slippage_bps", "slippageBps"),
        WireField("fee_bps", "feeBps"),
        WireField("only_direct_routes", "onlyDirectRoutes"),
        WireField("as_legacy_transaction", "asLegacyTransaction"),
        WireField("user_public_key", "userPublicKey"),
    )


@dataclass
class SwapParams:
    """Parameters for POST /swap.

    Pointer-style fields (``None`` by default) are sent only when set, so an
    explicit False or 0 still reaches the service.
    """

    route: Route
    user_public_key: str = ""
    wrap_unwrap_sol: Optional[bool] = None
    # Token account for the platform fee, only with a fee_bps quote
    fee_account: str = ""
    as_legacy_transaction: Optional[bool] = None
    compute_unit_price_micro_lamports: Optional[int] = None
    # Receives the output instead of the user's wallet
    destination_wallet: str = ""

    wire_fields: ClassVar[tuple[WireField, ...]] = (
        WireField.required("route", "route"),
        WireField("user_public_key", "userPublicKey"),
        WireField.pointer("wrap_unwrap_sol", "wrapUnwrapSOL"),
        WireField("fee_account", "feeAccount"),
        WireField.pointer("as_legacy_transaction", "asLegacyTransaction"),
        WireField.pointer("compute_unit_price_micro_lamports", "computeUnitPriceMicroLamports"),
        WireField("destination_wallet", "destinationWallet"),
    )


@dataclass
class PriceParams:
    """Parameters for GET /price.

    ``ids`` accepts symbols or addresses; a list is joined with commas.
    """

    ids: Union[str, list[str]]
    vs_token: str = ""  # service default: USDC
    vs_amount: float = 0.0  # service default: 1

    wire_fields: ClassVar[tuple[WireField, ...]] = (
        WireField.required("ids", "ids"),
        WireField("vs_token", "vsToken"),
        WireField("vs_amount", "vsAmount"),
    )


@dataclass
class RoutesMapParams:
    """Parameters for GET /indexed-route-map."""

    only_direct_routes: bool = False

    wire_fields: ClassVar[tuple[WireField, ...]] = (
        WireField.required("only_direct_routes", "onlyDirectRoutes"),
    )


@dataclass
class BestSwapParams:
    """Parameters for JupiterClient.best_swap."""

    user_public_key: str
    input_mint: str
    output_mint: str
    amount: int  # base units, side depends on swap_mode
    swap_mode: Optional[SwapMode] = None  # defaults to ExactIn
    destination_public_key: str = ""
    fee_amount: int = 0  # platform fee in bps
    fee_account: str = ""  # required when fee_amount is set


@dataclass
class ExchangeRateParams:
    """Parameters for JupiterClient.exchange_rate."""

    input_mint: str
    output_mint: str
    amount: int  # base units, side depends on swap_mode
    swap_mode: Optional[SwapMode] = None


@dataclass
class Rate:
    """Resolved amounts of the best route for a pair."""

    input_mint: str
    output_mint: str
    in_amount: int = 0
    out_amount: int = 0

    def to_dict(self) -> dict:
        """Convert to the API's camelCase layout."""
        return {
            "inputMint": self.input_mint,
            "outputMint": self.output_mint,
            "inAmount": self.in_amount,
            "outAmount": self.out_amount,
        }
