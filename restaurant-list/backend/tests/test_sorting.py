from __future__ import annotations

from functools import cmp_to_key

from models import Restaurant, RestaurantStatus
from services.sorting import DESCENDING_KEYS, SortingProvider, SortKey, sort_options


def _sorted(restaurants, key: SortKey):
    return sorted(restaurants, key=cmp_to_key(SortingProvider().comparator(key)))


def test_identifiers_round_trip() -> None:
    for key in SortKey:
        assert SortKey.from_identifier(key.value) is key
    assert SortKey.from_identifier("ratingAverage") is SortKey.RATING_AVERAGE
    assert SortKey.from_identifier("rating") is None
    assert SortKey.from_identifier(None) is None


def test_every_key_has_label_and_metric() -> None:
    r = Restaurant(
        name="Roti Shop",
        status=RestaurantStatus.OPEN,
        best_match=4.0,
        newest=247.0,
        rating_average=4.5,
        distance=2308,
        popularity=81.0,
        average_product_price=915,
        delivery_costs=0,
        min_cost=2000,
    )
    expected = [4.0, 247.0, 4.5, 2308, 81.0, 915, 0, 2000]
    assert [key.metric(r) for key in SortKey] == expected
    assert all(key.label for key in SortKey)
    assert [o.title for o in sort_options()] == [k.label for k in SortKey]


def test_open_restaurants_come_before_closed() -> None:
    closed = Restaurant(name="Closed", status=RestaurantStatus.CLOSED, distance=1)
    ahead = Restaurant(name="Ahead", status=RestaurantStatus.ORDER_AHEAD, distance=2)
    open_ = Restaurant(name="Open", status=RestaurantStatus.OPEN, distance=3)
    ranked = _sorted([closed, ahead, open_], SortKey.DISTANCE)
    assert [r.name for r in ranked] == ["Open", "Ahead", "Closed"]


def test_rating_sorts_high_to_low_and_costs_low_to_high() -> None:
    cheap = Restaurant(name="Cheap", status=RestaurantStatus.OPEN, rating_average=3.0, min_cost=500)
    pricey = Restaurant(name="Pricey", status=RestaurantStatus.OPEN, rating_average=4.5, min_cost=2500)
    assert [r.name for r in _sorted([cheap, pricey], SortKey.RATING_AVERAGE)] == ["Pricey", "Cheap"]
    assert [r.name for r in _sorted([pricey, cheap], SortKey.MIN_COST)] == ["Cheap", "Pricey"]
    assert SortKey.RATING_AVERAGE in DESCENDING_KEYS
    assert SortKey.MIN_COST not in DESCENDING_KEYS
