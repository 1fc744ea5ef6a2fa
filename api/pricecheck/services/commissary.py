from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from pricecheck.core.config import FallbackStrategy, Settings, get_settings
from pricecheck.core.errors import PriceUnavailable

logger = logging.getLogger(__name__)

COMMISSARY_SOURCE = "commissary"
RESPONSE_SOURCE = "commissary-database"

CENT = Decimal("0.01")

_rng = random.SystemRandom()


@dataclass(frozen=True)
class PriceRecord:
    price: str
    source: str


def _commissary(price: str) -> PriceRecord:
    return PriceRecord(price=price, source=COMMISSARY_SOURCE)


# Sample commissary pricing keyed by lowercase item name.
COMMISSARY_PRICES: Mapping[str, PriceRecord] = MappingProxyType(
    {
        # Groceries
        "commissary milk": _commissary("3.29"),
        "commissary bread": _commissary("1.99"),
        "commissary eggs": _commissary("2.49"),
        "commissary cheese": _commissary("3.99"),
        "commissary butter": _commissary("3.49"),
        "commissary chicken": _commissary("2.99"),
        "commissary ground beef": _commissary("3.79"),
        "commissary apples": _commissary("1.29"),
        "commissary bananas": _commissary("0.59"),
        "commissary potatoes": _commissary("2.99"),
        "commissary onions": _commissary("1.19"),
        "commissary carrots": _commissary("1.49"),
        "commissary lettuce": _commissary("1.79"),
        "commissary tomatoes": _commissary("2.29"),
        "commissary rice": _commissary("2.49"),
        "commissary pasta": _commissary("1.29"),
        "commissary cereal": _commissary("3.49"),
        "commissary coffee": _commissary("6.99"),
        "commissary sugar": _commissary("2.39"),
        "commissary flour": _commissary("2.19"),
        # Household
        "commissary toilet paper": _commissary("4.99"),
        "commissary paper towels": _commissary("3.99"),
        "commissary laundry detergent": _commissary("8.99"),
        "commissary dish soap": _commissary("2.99"),
        # Personal care
        "commissary shampoo": _commissary("3.49"),
        "commissary toothpaste": _commissary("2.29"),
        "commissary deodorant": _commissary("3.29"),
        # Baby & pet
        "commissary baby food": _commissary("1.49"),
        "commissary diapers": _commissary("17.99"),
        "commissary dog food": _commissary("15.99"),
        "commissary cat food": _commissary("12.99"),
    }
)


def format_price(value: Decimal) -> str:
    return str(value.quantize(CENT, rounding=ROUND_HALF_UP))


def random_fallback_price(minimum: Decimal = Decimal("1.00"), maximum: Decimal = Decimal("6.00")) -> str:
    """
    Whole-cent price drawn uniformly from ``[minimum, maximum)``.

    Integer cents keep the formatted value strictly below ``maximum``.
    """
    low = int((minimum / CENT).to_integral_value(rounding=ROUND_HALF_UP))
    high = int((maximum / CENT).to_integral_value(rounding=ROUND_HALF_UP))
    cents = _rng.randrange(low, high)
    return format_price(Decimal(cents) * CENT)


def find_price(item: str) -> Optional[PriceRecord]:
    return COMMISSARY_PRICES.get(item.lower())


def lookup_prices(
    items: Iterable[str],
    *,
    strategy: Optional[FallbackStrategy] = None,
    settings: Optional[Settings] = None,
) -> dict[str, str]:
    """
    Resolve a price string for each item, keyed by the item as given.

    Items are matched case-insensitively against the commissary table. Misses
    are filled according to ``strategy`` (defaults to the configured one):

    - ``random``: placeholder price within the configured fallback range
    - ``fixed``: the configured fixed fallback price
    - ``error``: raise :class:`PriceUnavailable` listing every miss
    """
    settings = settings or get_settings()
    strategy = strategy or settings.fallback_price_strategy

    prices: dict[str, str] = {}
    missing: list[str] = []

    for item in items:
        record = find_price(item)
        if record is not None:
            prices[item] = record.price
            continue

        if strategy == "random":
            prices[item] = random_fallback_price(settings.fallback_price_min, settings.fallback_price_max)
        elif strategy == "fixed":
            prices[item] = format_price(settings.fallback_fixed_price)
        else:
            missing.append(item)

    if missing:
        raise PriceUnavailable(missing)

    logger.debug("Resolved %d prices (%s fallback)", len(prices), strategy)
    return prices


__all__ = [
    "COMMISSARY_PRICES",
    "PriceRecord",
    "RESPONSE_SOURCE",
    "find_price",
    "format_price",
    "lookup_prices",
    "random_fallback_price",
]
