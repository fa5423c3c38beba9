"""Pytest configuration and fixtures."""

import json
from typing import Callable, Optional

import httpx
import pytest

from jupiter_client import JupiterClient, with_api_url, with_http_client

API_URL = "https://jupiter.test/v4"

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USER_KEY = "8HwPMNxtFDrvxXn1fJsAYB258TnA6Ydr1DWCtVYgRW4W"


def make_route(
    in_amount: str = "100000",
    out_amount: str = "2500",
    price_impact_pct: float = 0.1,
    label: str = "Orca",
    **extra,
) -> dict:
    """Build a route payload as /quote returns it."""
    route = {
        "inAmount": in_amount,
        "outAmount": out_amount,
        "priceImpactPct": price_impact_pct,
        "marketInfos": [
            {
                "id": f"{label}-pool",
                "label": label,
                "inputMint": SOL_MINT,
                "outputMint": USDC_MINT,
                "notEnoughLiquidity": False,
                "inAmount": in_amount,
                "outAmount": out_amount,
                "priceImpactPct": price_impact_pct,
                "lpFee": {"amount": "25", "mint": SOL_MINT, "pct": 0.0025},
                "platformFee": {"amount": "0", "mint": USDC_MINT, "pct": 0},
            }
        ],
        "amount": in_amount,
        "slippageBps": 50,
        "otherAmountThreshold": out_amount,
        "swapMode": "ExactIn",
    }
    route.update(extra)
    return route


def envelope(data) -> dict:
    return {"data": data, "timeTaken": 0.042, "contextSlot": 187654321}


class RecordingHandler:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, responses: dict[str, Callable[[httpx.Request], httpx.Response]]):
        self.responses = responses
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v4")
        if path not in self.responses:
            return httpx.Response(404, text="not found")
        return self.responses[path](request)

    def last(self, path: Optional[str] = None) -> httpx.Request:
        for request in reversed(self.requests):
            if path is None or request.url.path.endswith(path):
                return request
        raise AssertionError(f"no request to {path}")

    def last_json(self, path: Optional[str] = None) -> dict:
        return json.loads(self.last(path).content)


def json_response(payload, status_code: int = 200):
    return lambda request: httpx.Response(status_code, json=payload)


@pytest.fixture
def make_client():
    """Create a JupiterClient backed by an httpx.MockTransport."""
    clients = []

    def _make(responses: dict) -> tuple[JupiterClient, RecordingHandler]:
        handler = RecordingHandler(responses)
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        client = JupiterClient(with_api_url(API_URL), with_http_client(http_client))
        clients.append(http_client)
        return client, handler

    yield _make

    for http_client in clients:
        http_client.close()
