from __future__ import annotations

import weakref
from functools import cmp_to_key
from typing import Any, List, Optional, Protocol

from loguru import logger

from models import PickerOption, Restaurant, RestaurantRow
from services.restaurant_source import RestaurantSource
from services.sorting import SortingProvidable, SortKey, sort_options
from utils import format_metric, name_matches, normalize_search_text


class RestaurantListDelegate(Protocol):
    def on_rows_changed(self) -> None:
        ...


class LoadErrorSink(Protocol):
    def on_load_error(self, error: Exception) -> None:
        ...


class RestaurantNavigationDelegate(Protocol):
    def show_details(self, restaurant: Restaurant) -> None:
        ...


def build_row(restaurant: Restaurant, sort_key: SortKey) -> RestaurantRow:
    """Two-line row: status, then the active sort label and the restaurant's value for it."""
    value = format_metric(sort_key.metric(restaurant))
    subtitle = restaurant.status.value + "\n" + sort_key.label + ": " + value
    return RestaurantRow(title=restaurant.name, subtitle=subtitle)


def _weak(target: Any) -> Optional[weakref.ref]:
    return weakref.ref(target) if target is not None else None


def _deref(ref: Optional[weakref.ref]) -> Any:
    return ref() if ref is not None else None


class RestaurantListController:
    """Sorted, searchable restaurant list behind the list screen.

    The master list is always kept sorted by the active sort key; search only
    narrows it. Observers are held weakly and are told to reload only when the
    visible rows actually changed.
    """

    screen_title = "Restaurant List"
    sort_button_title = "Sort"
    search_placeholder_text = "Type Restaurant name"

    def __init__(
        self,
        source: RestaurantSource,
        sorting_provider: SortingProvidable,
        default_sort: SortKey,
    ) -> None:
        self._source = source
        self._sorting_provider = sorting_provider
        self._sort_key = default_sort
        self._search_text = ""
        self._restaurants: List[Restaurant] = []
        self._visible: List[Restaurant] = []
        self._rows: List[RestaurantRow] = []
        self._loads_in_flight = 0
        self._delegate: Optional[weakref.ref] = None
        self._error_sink: Optional[weakref.ref] = None
        self._navigation_delegate: Optional[weakref.ref] = None

    # collaborators are never owned by the controller
    @property
    def delegate(self) -> Optional[RestaurantListDelegate]:
        return _deref(self._delegate)

    @delegate.setter
    def delegate(self, value: Optional[RestaurantListDelegate]) -> None:
        self._delegate = _weak(value)

    @property
    def error_sink(self) -> Optional[LoadErrorSink]:
        return _deref(self._error_sink)

    @error_sink.setter
    def error_sink(self, value: Optional[LoadErrorSink]) -> None:
        self._error_sink = _weak(value)

    @property
    def navigation_delegate(self) -> Optional[RestaurantNavigationDelegate]:
        return _deref(self._navigation_delegate)

    @navigation_delegate.setter
    def navigation_delegate(self, value: Optional[RestaurantNavigationDelegate]) -> None:
        self._navigation_delegate = _weak(value)

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def restaurants(self) -> List[Restaurant]:
        return list(self._restaurants)

    @property
    def sort_options(self) -> List[PickerOption]:
        return sort_options()

    async def initialize(self) -> None:
        """Load the restaurants once and publish the first sorted rows."""
        if self._loads_in_flight:
            # TODO: decide whether overlapping loads should cancel the earlier one
            logger.warning("Restaurant load requested while another is in flight; last to finish wins")
        self._loads_in_flight += 1
        try:
            restaurants = await self._source.load_restaurants()
        except Exception as exc:
            logger.warning("Restaurant list failed to load: {}", exc)
            sink = self.error_sink
            if sink is not None:
                sink.on_load_error(exc)
            return
        finally:
            self._loads_in_flight -= 1

        logger.info("Loaded {} restaurants", len(restaurants))
        self._restaurants = list(restaurants)
        self.select_sort_option(self._sort_key.value)

    def select_sort_option(self, option: str) -> None:
        sort_key = SortKey.from_identifier(option)
        if sort_key is None:
            logger.debug("Ignoring unknown sort option {!r}", option)
            return

        self._sort_key = sort_key
        self._restaurants.sort(key=cmp_to_key(self._sorting_provider.comparator(sort_key)))
        self._refresh()

    def set_search_text(self, text: Optional[str]) -> None:
        if text is None:
            return
        self._search_text = text
        self._refresh()

    def number_of_rows(self) -> int:
        return len(self._rows)

    def row_at(self, index: int) -> Optional[RestaurantRow]:
        if index < 0 or index >= len(self._rows):
            return None
        return self._rows[index]

    def select_row(self, index: int) -> None:
        if index < 0 or index >= len(self._visible):
            return
        navigation = self.navigation_delegate
        if navigation is not None:
            navigation.show_details(self._visible[index])

    def _refresh(self) -> None:
        term = normalize_search_text(self._search_text)
        visible = [r for r in self._restaurants if name_matches(r.name, term)]
        rows = [build_row(r, self._sort_key) for r in visible]
        self._visible = visible
        if rows == self._rows:
            return
        self._rows = rows
        delegate = self.delegate
        if delegate is not None:
            delegate.on_rows_changed()
