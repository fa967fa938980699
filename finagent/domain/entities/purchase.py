"""
Domain entity for a validated, not-yet-executed simulated stock purchase.
Zero external dependencies: pure Python dataclass only.
"""

import json
from dataclasses import dataclass

PURCHASE_STOCK_TOOL = "purchase_stock"


@dataclass(frozen=True)
class PendingPurchase:
    """A purchase that passed the price-ceiling check and awaits confirmation.

    tool_call_id: id of the purchase_stock call that produced this record, so
                  execution never has to rediscover it from the transcript.
    """

    ticker: str
    quantity: int
    max_purchase_price: float
    tool_call_id: str

    def __post_init__(self) -> None:
        if not self.ticker or not self.ticker.strip():
            raise ValueError("ticker must be a non-empty string")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("quantity must be an integer")
        if self.quantity < 1:
            raise ValueError("quantity must be at least 1")
        if not self.max_purchase_price > 0:
            raise ValueError("max_purchase_price must be positive")
        if not self.tool_call_id:
            raise ValueError("tool_call_id is required")

    def to_payload(self) -> dict:
        return {
            "ticker": self.ticker,
            "quantity": self.quantity,
            "maxPurchasePrice": self.max_purchase_price,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload())
