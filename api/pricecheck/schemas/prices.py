from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pricecheck.services.stores import StoreRecord


class PriceRecordSchema(BaseModel):
    price: str
    source: str


class CommissaryPricesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    store_name: str = Field(alias="storeName")
    prices: dict[str, str]
    source: str


class StoreSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    distance_miles: float = Field(alias="distance")
    latitude: float
    longitude: float
    items: dict[str, PriceRecordSchema]

    @classmethod
    def from_record(cls, record: StoreRecord) -> "StoreSchema":
        return cls(
            name=record.name,
            distance_miles=record.distance_miles,
            latitude=record.latitude,
            longitude=record.longitude,
            items={
                item: PriceRecordSchema(price=price.price, source=price.source)
                for item, price in record.items.items()
            },
        )


class NearbyStoresResponse(BaseModel):
    success: bool = True
    stores: list[StoreSchema]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


__all__ = [
    "CommissaryPricesResponse",
    "ErrorResponse",
    "NearbyStoresResponse",
    "PriceRecordSchema",
    "StoreSchema",
]
