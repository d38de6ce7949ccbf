from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from config import Configuration
from services.restaurant_list import RestaurantListController
from services.restaurant_source import JsonFileRestaurantSource
from services.screen import RestaurantListScreen
from services.sorting import SortingProvider, SortKey

load_dotenv()


def build_screen(cfg: Configuration) -> RestaurantListScreen:
    controller = RestaurantListController(
        JsonFileRestaurantSource(cfg.restaurants_path),
        SortingProvider(),
        cfg.resolve_default_sort(),
    )
    return RestaurantListScreen(controller)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    cfg = Configuration.from_env()
    logger.remove()
    logger.add(sys.stderr, level=cfg.log_level.upper())
    logger.info("cfg: {}", cfg.log_summary())

    screen = build_screen(cfg)
    app.state.screen = screen
    await screen.controller.initialize()
    yield


app = FastAPI(title="Restaurant List", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RowPayload(BaseModel):
    title: str
    subtitle: str


class ListPayload(BaseModel):
    title: str
    search_placeholder: str
    sort: str
    search: str
    rows: List[RowPayload] = []


class SortOptionPayload(BaseModel):
    title: str
    option_key: str


class SortRequest(BaseModel):
    option: str = Field(..., description="Sort option identifier, e.g. 'distance'")


class SearchRequest(BaseModel):
    text: Optional[str] = Field(None, description="Restaurant name fragment; empty clears the filter")


class RestaurantPayload(BaseModel):
    name: str
    status: str
    best_match: float
    newest: float
    rating_average: float
    distance: float
    popularity: float
    average_product_price: float
    delivery_costs: float
    min_cost: float


def _screen(request: Request) -> RestaurantListScreen:
    return request.app.state.screen


def _list_payload(screen: RestaurantListScreen) -> ListPayload:
    controller = screen.controller
    if screen.load_error is not None and not controller.restaurants:
        raise HTTPException(status_code=503, detail=f"restaurant list unavailable: {screen.load_error}")
    return ListPayload(
        title=controller.screen_title,
        search_placeholder=controller.search_placeholder_text,
        sort=controller.sort_key.value,
        search=controller.search_text,
        rows=[RowPayload(title=row.title, subtitle=row.subtitle) for row in screen.rows()],
    )


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}


@app.get("/restaurants", response_model=ListPayload)
async def list_restaurants(request: Request) -> ListPayload:
    return _list_payload(_screen(request))


@app.get("/sort-options", response_model=List[SortOptionPayload])
async def list_sort_options(request: Request) -> List[SortOptionPayload]:
    controller = _screen(request).controller
    return [SortOptionPayload(title=o.title, option_key=o.option_key) for o in controller.sort_options]


@app.post("/sort", response_model=ListPayload)
async def select_sort(req: SortRequest, request: Request) -> ListPayload:
    if SortKey.from_identifier(req.option) is None:
        raise HTTPException(status_code=400, detail=f"unknown sort option: {req.option}")
    screen = _screen(request)
    screen.controller.select_sort_option(req.option)
    return _list_payload(screen)


@app.post("/search", response_model=ListPayload)
async def search(req: SearchRequest, request: Request) -> ListPayload:
    screen = _screen(request)
    screen.controller.set_search_text(req.text)
    return _list_payload(screen)


@app.post("/restaurants/{index}/select", response_model=RestaurantPayload)
async def select_restaurant(index: int, request: Request) -> RestaurantPayload:
    screen = _screen(request)
    screen.selected = None
    screen.controller.select_row(index)
    restaurant = screen.selected
    if restaurant is None:
        raise HTTPException(status_code=404, detail=f"no row at index {index}")
    return RestaurantPayload(
        name=restaurant.name,
        status=restaurant.status.value,
        best_match=restaurant.best_match,
        newest=restaurant.newest,
        rating_average=restaurant.rating_average,
        distance=restaurant.distance,
        popularity=restaurant.popularity,
        average_product_price=restaurant.average_product_price,
        delivery_costs=restaurant.delivery_costs,
        min_cost=restaurant.min_cost,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8010, reload=True)
