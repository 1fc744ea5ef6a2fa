from __future__ import annotations

import json
import math
from typing import Any, Sequence, Union

from pydantic import BaseModel, Field

from pricecheck.core.errors import InvalidRequest

ItemsInput = Union[str, Sequence[Any]]

INVALID_ITEMS_FORMAT = "Invalid items format. Expected JSON array."
ITEMS_NOT_ARRAY = "Items must be an array"
ITEMS_NOT_STRINGS = "Items must be an array of strings"
INVALID_COORDINATES = "Invalid coordinates: latitude and longitude must be numbers"


def normalize_item_list(raw: ItemsInput) -> Any:
    """
    Turn the ``items`` parameter into a Python value.

    A string is decoded as JSON; anything else is taken as an already-parsed
    sequence and copied into a list. The result is not guaranteed to be a list
    when the JSON document holds some other value.
    """
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise InvalidRequest(INVALID_ITEMS_FORMAT) from exc
    return list(raw)


def require_string_items(values: list[Any]) -> list[str]:
    if not all(isinstance(value, str) for value in values):
        raise InvalidRequest(ITEMS_NOT_STRINGS)
    return values


def parse_coordinate(value: str) -> float:
    # float() accepts digit separators ("1_0" == 10.0); coordinates may not use them
    if "_" in value:
        raise InvalidRequest(INVALID_COORDINATES)
    try:
        parsed = float(value)
    except ValueError as exc:
        raise InvalidRequest(INVALID_COORDINATES) from exc
    if not math.isfinite(parsed):
        raise InvalidRequest(INVALID_COORDINATES)
    return parsed


class CommissaryPriceQuery(BaseModel):
    store_name: str
    items: list[str] = Field(default_factory=list)


class NearbyStoresQuery(BaseModel):
    latitude: float
    longitude: float
    items: list[str] = Field(default_factory=list)


__all__ = [
    "CommissaryPriceQuery",
    "ItemsInput",
    "NearbyStoresQuery",
    "normalize_item_list",
    "parse_coordinate",
    "require_string_items",
]
