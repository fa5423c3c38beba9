"""Route selection and routes-map lookups."""

import logging
from collections.abc import Sequence
from typing import Optional

from jupiter_client.errors import NoRouteAvailableError, PayloadDecodeError
from jupiter_client.models import IndexedRoutesMap, Route

logger = logging.getLogger(__name__)


def select_best_route(routes: Sequence[Route], operation: Optional[str] = None) -> Route:
    """Pick the route with the lowest price impact.

    Routes are compared in the given order and ties keep the earliest one.
    Price impact is a proxy for slippage only: fees and net output are not
    taken into account.

    Raises:
        NoRouteAvailableError: routes is empty
    """
    if not routes:
        raise NoRouteAvailableError("no route available", operation=operation)
    if len(routes) == 1:
        return routes[0]

    best = routes[0]
    for route in routes[1:]:
        if route.price_impact_pct < best.price_impact_pct:
            best = route

    logger.debug(
        f"Selected route {' -> '.join(best.labels) or '(no legs)'} "
        f"out of {len(routes)} (price impact: {best.price_impact_pct}%)"
    )
    return best


def lookup_reachable_mints(routes_map: IndexedRoutesMap, mint: str) -> list[str]:
    """Resolve the output mints reachable from ``mint``.

    Returns an empty list when the mint is not indexed or has no outputs.

    Raises:
        PayloadDecodeError: an adjacency entry points outside mint_keys
    """
    indexes: list[int] = []
    # A well-formed map lists each mint once. If it does not, the last
    # matching position wins.
    for position, key in enumerate(routes_map.mint_keys):
        if key == mint:
            indexes = routes_map.indexed_route_map.get(str(position), [])

    result = []
    for index in indexes:
        if not 0 <= index < len(routes_map.mint_keys):
            raise PayloadDecodeError(
                f"route index {index} out of range for {len(routes_map.mint_keys)} mint keys"
            )
        result.append(routes_map.mint_keys[index])
    return result
