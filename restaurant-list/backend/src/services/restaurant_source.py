from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Protocol, Union

from loguru import logger

from models import Restaurant, RestaurantStatus


class RestaurantLoadError(RuntimeError):
    pass


class RestaurantSource(Protocol):
    async def load_restaurants(self) -> List[Restaurant]:
        """Resolve once with the full restaurant list, or raise."""
        ...


# sortingValues key -> Restaurant field
SORTING_VALUE_FIELDS: Dict[str, str] = {
    "bestMatch": "best_match",
    "newest": "newest",
    "ratingAverage": "rating_average",
    "distance": "distance",
    "popularity": "popularity",
    "averageProductPrice": "average_product_price",
    "deliveryCosts": "delivery_costs",
    "minCost": "min_cost",
}


def _parse_status(raw: Any) -> RestaurantStatus:
    try:
        return RestaurantStatus(str(raw).strip().lower())
    except ValueError:
        raise RestaurantLoadError(f"unknown restaurant status: {raw!r}")


def _parse_restaurant(item: Any) -> Restaurant:
    if not isinstance(item, dict):
        raise RestaurantLoadError("restaurant entry must be an object")
    name = item.get("name")
    if not isinstance(name, str) or not name:
        raise RestaurantLoadError("restaurant entry without a name")
    values = item.get("sortingValues") or {}
    if not isinstance(values, dict):
        raise RestaurantLoadError(f"sortingValues of {name!r} must be an object")

    metrics: Dict[str, Union[int, float]] = {}
    for key, field_name in SORTING_VALUE_FIELDS.items():
        value = values.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise RestaurantLoadError(f"{name!r} has no numeric {key}")
        metrics[field_name] = value

    return Restaurant(name=name, status=_parse_status(item.get("status")), **metrics)


def parse_restaurants(payload: Any) -> List[Restaurant]:
    """Parse the ``{"restaurants": [...]}`` document into domain objects."""
    if not isinstance(payload, dict):
        raise RestaurantLoadError("payload must be an object")
    items = payload.get("restaurants")
    if not isinstance(items, list):
        raise RestaurantLoadError("payload has no restaurants list")
    return [_parse_restaurant(item) for item in items]


class JsonFileRestaurantSource:
    """Reads restaurants from a bundled JSON document."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read(self) -> List[Restaurant]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RestaurantLoadError(f"cannot read {self.path}: {exc}")
        try:
            payload = json.loads(text)
        except ValueError:
            raise RestaurantLoadError(f"invalid json in {self.path}")
        restaurants = parse_restaurants(payload)
        logger.debug("Parsed {} restaurants from {}", len(restaurants), self.path)
        return restaurants

    async def load_restaurants(self) -> List[Restaurant]:
        return await asyncio.to_thread(self._read)
