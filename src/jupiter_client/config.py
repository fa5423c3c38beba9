"""Client configuration.

ClientConfig is an immutable value built from option functions:

    config = ClientConfig.build(
        with_api_url("https://quote-api.jup.ag/v4/"),
        with_timeout(10.0),
    )

ClientSettings loads the same values from JUPITER_* environment variables,
but only when the caller asks for it through ClientConfig.from_settings().
"""

from functools import lru_cache
from typing import Callable, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://quote-api.jup.ag/v4"
DEFAULT_TIMEOUT = 30.0

ENDPOINT_QUOTE = "/quote"
ENDPOINT_SWAP = "/swap"
ENDPOINT_PRICE = "/price"
ENDPOINT_ROUTES_MAP = "/indexed-route-map"


class ClientConfig(BaseModel):
    """Immutable configuration shared by every call of a JupiterClient."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    api_url: str = Field(default=DEFAULT_API_URL, description="Aggregator REST root")
    endpoint_quote: str = Field(default=ENDPOINT_QUOTE, description="Quote endpoint path")
    endpoint_swap: str = Field(default=ENDPOINT_SWAP, description="Swap endpoint path")
    endpoint_price: str = Field(default=ENDPOINT_PRICE, description="Price endpoint path")
    endpoint_routes_map: str = Field(
        default=ENDPOINT_ROUTES_MAP, description="Indexed routes map endpoint path"
    )
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Per-request timeout in seconds")
    http_client: Optional[httpx.Client] = Field(
        default=None,
        description="Caller-owned HTTP client; its own timeout and pool settings apply",
    )

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def build(cls, *options: "ClientOption") -> "ClientConfig":
        """Apply options, in order, to the default configuration."""
        config = cls()
        for option in options:
            config = option(config)
        return config

    @classmethod
    def from_settings(cls, settings: "ClientSettings") -> "ClientConfig":
        """Create a configuration from loaded settings."""
        return cls(
            api_url=settings.api_url,
            endpoint_quote=settings.endpoint_quote,
            endpoint_swap=settings.endpoint_swap,
            endpoint_price=settings.endpoint_price,
            endpoint_routes_map=settings.endpoint_routes_map,
            timeout=settings.timeout,
        )


ClientOption = Callable[[ClientConfig], ClientConfig]


def with_http_client(client: httpx.Client) -> ClientOption:
    """Use a caller-supplied httpx.Client (transport, pool, proxies, timeout)."""
    return lambda config: config.model_copy(update={"http_client": client})


def with_api_url(api_url: str) -> ClientOption:
    """Use another API root. Trailing slashes are stripped."""
    return lambda config: config.model_copy(update={"api_url": api_url.rstrip("/")})


def with_timeout(timeout: float) -> ClientOption:
    """Set the per-request timeout of the client-owned httpx.Client."""
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {timeout}")
    return lambda config: config.model_copy(update={"timeout": timeout})


def with_endpoint_quote(endpoint: str) -> ClientOption:
    return lambda config: config.model_copy(update={"endpoint_quote": endpoint})


def with_endpoint_swap(endpoint: str) -> ClientOption:
    return lambda config: config.model_copy(update={"endpoint_swap": endpoint})


def with_endpoint_price(endpoint: str) -> ClientOption:
    return lambda config: config.model_copy(update={"endpoint_price": endpoint})


def with_endpoint_routes_map(endpoint: str) -> ClientOption:
    return lambda config: config.model_copy(update={"endpoint_routes_map": endpoint})


class ClientSettings(BaseSettings):
    """Client settings loaded from JUPITER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="JUPITER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_url: str = Field(default=DEFAULT_API_URL, description="Aggregator REST root")
    endpoint_quote: str = Field(default=ENDPOINT_QUOTE, description="Quote endpoint path")
    endpoint_swap: str = Field(default=ENDPOINT_SWAP, description="Swap endpoint path")
    endpoint_price: str = Field(default=ENDPOINT_PRICE, description="Price endpoint path")
    endpoint_routes_map: str = Field(
        default=ENDPOINT_ROUTES_MAP, description="Indexed routes map endpoint path"
    )
    timeout: float = Field(default=DEFAULT_TIMEOUT, description="Per-request timeout in seconds")


@lru_cache
def get_settings() -> ClientSettings:
    """Get cached settings instance."""
    return ClientSettings()
