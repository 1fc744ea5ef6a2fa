from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from pricecheck.services.commissary import PriceRecord

STORE_SOURCE = "store-database"


@dataclass(frozen=True)
class StoreTemplate:
    name: str
    distance_miles: float
    lat_offset: float
    lon_offset: float
    prices: Mapping[str, str]


@dataclass
class StoreRecord:
    name: str
    distance_miles: float
    latitude: float
    longitude: float
    items: dict[str, PriceRecord] = field(default_factory=dict)

    def carries(self, item: str) -> bool:
        return item.lower() in self.items


# Popular chains with a sample basket; coordinates are offsets from the caller.
POPULAR_STORES: tuple[StoreTemplate, ...] = (
    StoreTemplate(
        name="Walmart Supercenter",
        distance_miles=2.4,
        lat_offset=0.01,
        lon_offset=0.01,
        prices={"apples": "3.97", "milk": "3.78", "bread": "2.24", "eggs": "4.16", "chicken": "3.92"},
    ),
    StoreTemplate(
        name="Target",
        distance_miles=3.1,
        lat_offset=-0.01,
        lon_offset=-0.005,
        prices={"apples": "4.49", "milk": "3.99", "bread": "3.19", "eggs": "4.29", "chicken": "4.99"},
    ),
    StoreTemplate(
        name="Safeway",
        distance_miles=1.9,
        lat_offset=-0.005,
        lon_offset=0.008,
        prices={"apples": "3.49", "milk": "4.29", "bread": "3.49", "eggs": "4.79", "chicken": "5.49"},
    ),
    # Bulk packs: 5lb apples, 2-pack bread, 5 dozen eggs, family-pack chicken
    StoreTemplate(
        name="Costco Wholesale",
        distance_miles=5.2,
        lat_offset=0.03,
        lon_offset=-0.02,
        prices={"apples": "9.99", "milk": "4.99", "bread": "6.99", "eggs": "9.99", "chicken": "24.99"},
    ),
    # Organic lines
    StoreTemplate(
        name="Whole Foods Market",
        distance_miles=4.5,
        lat_offset=-0.02,
        lon_offset=0.015,
        prices={"apples": "5.99", "milk": "5.49", "bread": "4.99", "eggs": "6.49", "chicken": "8.99"},
    ),
)


def get_popular_stores(latitude: float, longitude: float) -> list[StoreRecord]:
    """Build the sample store catalog around the given coordinates."""
    return [
        StoreRecord(
            name=template.name,
            distance_miles=template.distance_miles,
            latitude=latitude + template.lat_offset,
            longitude=longitude + template.lon_offset,
            items={
                item: PriceRecord(price=price, source=STORE_SOURCE)
                for item, price in template.prices.items()
            },
        )
        for template in POPULAR_STORES
    ]


def filter_stores_by_items(stores: Sequence[StoreRecord], items: Sequence[str]) -> list[StoreRecord]:
    """Keep only stores that carry every requested item. No items means no filtering."""
    if not items:
        return list(stores)
    return [store for store in stores if all(store.carries(item) for item in items)]


__all__ = [
    "POPULAR_STORES",
    "STORE_SOURCE",
    "StoreRecord",
    "StoreTemplate",
    "filter_stores_by_items",
    "get_popular_stores",
]
