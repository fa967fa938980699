"""
Domain entity for a current price snapshot.
Zero external dependencies: pure Python dataclass only.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class PriceSnapshot:
    ticker: str
    price: float
    day_change: Optional[float] = None
    day_change_percent: Optional[float] = None
    time: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any, ticker: str = "") -> "PriceSnapshot":
        """Build a snapshot from a /prices/snapshot response body.

        Accepts both the ``{"snapshot": {...}}`` envelope and a bare snapshot
        object.

        Raises:
            ValueError: if the payload is not an object or carries no finite, positive price.
        """
        if not isinstance(payload, dict):
            raise ValueError("Snapshot payload is not a JSON object")
        body = payload.get("snapshot", payload)
        if not isinstance(body, dict):
            raise ValueError("Snapshot payload is not a JSON object")

        price = body.get("price")
        # bool is an int subclass; a True price is still malformed.
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValueError("Price is not a number")
        if not math.isfinite(price) or price <= 0:
            raise ValueError("Price is not a number")

        return cls(
            ticker=body.get("ticker") or ticker,
            price=float(price),
            day_change=body.get("day_change"),
            day_change_percent=body.get("day_change_percent"),
            time=body.get("time"),
        )
