from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from pricecheck.core.config import get_settings
from pricecheck.core.errors import InvalidRequest
from pricecheck.schemas.prices import (
    CommissaryPricesResponse,
    ErrorResponse,
    NearbyStoresResponse,
    StoreSchema,
)
from pricecheck.schemas.queries import (
    ITEMS_NOT_ARRAY,
    CommissaryPriceQuery,
    ItemsInput,
    NearbyStoresQuery,
    normalize_item_list,
    parse_coordinate,
    require_string_items,
)
from pricecheck.services.commissary import RESPONSE_SOURCE, lookup_prices
from pricecheck.services.stores import filter_stores_by_items, get_popular_stores

logger = logging.getLogger(__name__)

router = APIRouter(tags=["prices"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _raw_items(values: Optional[list[str]]) -> Optional[ItemsInput]:
    """A single ``items`` value is a JSON document; a repeated key is the list itself."""
    if not values:
        return None
    if len(values) == 1:
        return values[0] or None
    return values


async def _commissary_params(
    store_name: Optional[str] = Query(None, alias="storeName"),
    items: Optional[list[str]] = Query(None),
) -> CommissaryPriceQuery:
    raw_items = _raw_items(items)
    if not store_name or raw_items is None:
        raise InvalidRequest("Missing required parameters: storeName and items")

    parsed = normalize_item_list(raw_items)
    if not isinstance(parsed, list):
        raise InvalidRequest(ITEMS_NOT_ARRAY)

    return CommissaryPriceQuery(store_name=store_name, items=require_string_items(parsed))


async def _nearby_params(
    latitude: Optional[str] = Query(None),
    longitude: Optional[str] = Query(None),
    items: Optional[list[str]] = Query(None),
) -> NearbyStoresQuery:
    if not latitude or not longitude:
        raise InvalidRequest("Missing required parameters: latitude and longitude")

    lat = parse_coordinate(latitude)
    lon = parse_coordinate(longitude)

    wanted: list[str] = []
    raw_items = _raw_items(items)
    if raw_items is not None:
        parsed = normalize_item_list(raw_items)
        # Anything other than a non-empty array leaves the catalog unfiltered
        if isinstance(parsed, list) and parsed:
            wanted = require_string_items(parsed)

    return NearbyStoresQuery(latitude=lat, longitude=lon, items=wanted)


@router.get("/commissary-prices", responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}})
async def commissary_prices(
    params: CommissaryPriceQuery = Depends(_commissary_params),
) -> CommissaryPricesResponse:
    logger.info("Looking up prices for %d items at %s", len(params.items), params.store_name)

    prices = lookup_prices(params.items, settings=get_settings())
    return CommissaryPricesResponse(
        store_name=params.store_name,
        prices=prices,
        source=RESPONSE_SOURCE,
    )


@router.get("/nearby-stores", responses=ERROR_RESPONSES)
async def nearby_stores(
    params: NearbyStoresQuery = Depends(_nearby_params),
) -> NearbyStoresResponse:
    stores = get_popular_stores(params.latitude, params.longitude)
    matching = filter_stores_by_items(stores, params.items)
    logger.info(
        "Found %d of %d stores near (%s, %s) carrying %d items",
        len(matching),
        len(stores),
        params.latitude,
        params.longitude,
        len(params.items),
    )
    return NearbyStoresResponse(stores=[StoreSchema.from_record(store) for store in matching])


__all__ = ["router"]
