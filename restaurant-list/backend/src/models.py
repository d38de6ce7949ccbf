"""Data models for the restaurant list screen."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

Metric = Union[int, float]


class RestaurantStatus(str, Enum):
    OPEN = "open"
    ORDER_AHEAD = "order ahead"
    CLOSED = "closed"


@dataclass(frozen=True)
class Restaurant:
    name: str
    status: RestaurantStatus
    # one value per sort dimension
    best_match: Metric = 0.0
    newest: Metric = 0.0
    rating_average: Metric = 0.0
    distance: Metric = 0
    popularity: Metric = 0.0
    average_product_price: Metric = 0
    delivery_costs: Metric = 0
    min_cost: Metric = 0


@dataclass(frozen=True)
class RestaurantRow:
    title: str
    subtitle: str


@dataclass(frozen=True)
class PickerOption:
    title: str
    option_key: str
