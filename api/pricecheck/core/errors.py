"""Errors raised by request handlers and mapped to JSON responses in ``main``."""
from __future__ import annotations

from typing import Sequence


class InvalidRequest(Exception):
    """Missing or malformed query parameters (HTTP 400)."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PriceUnavailable(Exception):
    """No price could be produced for one or more items (HTTP 404)."""

    status_code = 404

    def __init__(self, items: Sequence[str]) -> None:
        self.items = list(items)
        self.message = f"No price available for: {', '.join(self.items)}"
        super().__init__(self.message)


__all__ = ["InvalidRequest", "PriceUnavailable"]
