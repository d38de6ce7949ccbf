from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol

from models import Metric, PickerOption, Restaurant, RestaurantStatus

Comparator = Callable[[Restaurant, Restaurant], int]


@dataclass(frozen=True)
class SortDimension:
    label: str
    extract: Callable[[Restaurant], Metric]


class SortKey(str, Enum):
    """Sort dimensions offered by the list; the value is the picker identifier."""

    BEST_MATCH = "bestMatch"
    NEWEST = "newest"
    RATING_AVERAGE = "ratingAverage"
    DISTANCE = "distance"
    POPULARITY = "popularity"
    AVERAGE_PRODUCT_PRICE = "averageProductPrice"
    DELIVERY_COSTS = "deliveryCosts"
    MIN_COST = "minCost"

    @classmethod
    def from_identifier(cls, identifier: Optional[str]) -> Optional["SortKey"]:
        if identifier is None:
            return None
        try:
            return cls(identifier)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return SORT_DIMENSIONS[self].label

    def metric(self, restaurant: Restaurant) -> Metric:
        return SORT_DIMENSIONS[self].extract(restaurant)


SORT_DIMENSIONS: Dict[SortKey, SortDimension] = {
    SortKey.BEST_MATCH: SortDimension("Best match", lambda r: r.best_match),
    SortKey.NEWEST: SortDimension("Newest", lambda r: r.newest),
    SortKey.RATING_AVERAGE: SortDimension("Rating average", lambda r: r.rating_average),
    SortKey.DISTANCE: SortDimension("Distance", lambda r: r.distance),
    SortKey.POPULARITY: SortDimension("Popularity", lambda r: r.popularity),
    SortKey.AVERAGE_PRODUCT_PRICE: SortDimension("Average product price", lambda r: r.average_product_price),
    SortKey.DELIVERY_COSTS: SortDimension("Delivery costs", lambda r: r.delivery_costs),
    SortKey.MIN_COST: SortDimension("Minimum cost", lambda r: r.min_cost),
}


def sort_options() -> List[PickerOption]:
    """Picker entries for every sort key, in declaration order."""
    return [PickerOption(title=key.label, option_key=key.value) for key in SortKey]


class SortingProvidable(Protocol):
    def comparator(self, sort_key: SortKey) -> Comparator:
        ...


STATUS_PRIORITY: Dict[RestaurantStatus, int] = {
    RestaurantStatus.OPEN: 0,
    RestaurantStatus.ORDER_AHEAD: 1,
    RestaurantStatus.CLOSED: 2,
}

# higher value ranks first for these keys; the rest rank lowest first
DESCENDING_KEYS = frozenset(
    {SortKey.BEST_MATCH, SortKey.NEWEST, SortKey.RATING_AVERAGE, SortKey.POPULARITY}
)


def _cmp(a: Metric, b: Metric) -> int:
    return (a > b) - (a < b)


class SortingProvider:
    """Orders open restaurants before "order ahead" ones before closed ones,
    then by the selected sort value in its natural direction."""

    def comparator(self, sort_key: SortKey) -> Comparator:
        descending = sort_key in DESCENDING_KEYS

        def compare(left: Restaurant, right: Restaurant) -> int:
            by_status = _cmp(STATUS_PRIORITY[left.status], STATUS_PRIORITY[right.status])
            if by_status:
                return by_status
            by_value = _cmp(sort_key.metric(left), sort_key.metric(right))
            return -by_value if descending else by_value

        return compare
