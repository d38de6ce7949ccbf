from __future__ import annotations

from typing import List, Optional

from loguru import logger

from models import Restaurant, RestaurantRow
from services.restaurant_list import RestaurantListController


class RestaurantListScreen:
    """Host for a list controller: owns it and receives its callbacks.

    The controller only holds weak references back to the screen, so whoever
    serves the screen must keep the screen itself alive.
    """

    def __init__(self, controller: RestaurantListController) -> None:
        self.controller = controller
        self.reload_count = 0
        self.load_error: Optional[Exception] = None
        self.selected: Optional[Restaurant] = None
        controller.delegate = self
        controller.error_sink = self
        controller.navigation_delegate = self

    def on_rows_changed(self) -> None:
        self.reload_count += 1
        logger.debug("Rows changed ({} visible)", self.controller.number_of_rows())

    def on_load_error(self, error: Exception) -> None:
        self.load_error = error

    def show_details(self, restaurant: Restaurant) -> None:
        logger.info("Selected restaurant {}", restaurant.name)
        self.selected = restaurant

    def rows(self) -> List[RestaurantRow]:
        rows: list[RestaurantRow] = []
        for idx in range(self.controller.number_of_rows()):
            row = self.controller.row_at(idx)
            if row is not None:
                rows.append(row)
        return rows
