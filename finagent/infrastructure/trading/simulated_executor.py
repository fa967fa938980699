"""
Infrastructure adapter: simulated trade execution → ITradeExecutor.
No broker is contacted; orders are logged and kept in memory.
"""

import logging
import uuid

from finagent.domain.entities.purchase import PendingPurchase
from finagent.domain.ports.trade_executor_port import ITradeExecutor

logger = logging.getLogger(__name__)


class SimulatedTradeExecutor(ITradeExecutor):
    def __init__(self) -> None:
        self._orders: list[tuple[str, PendingPurchase]] = []

    @property
    def orders(self) -> list[tuple[str, PendingPurchase]]:
        return list(self._orders)

    def execute(self, purchase: PendingPurchase) -> str:
        order_ref = f"SIM-{uuid.uuid4().hex[:8].upper()}"
        logger.info(
            "Simulated purchase: %d %s at <= %.2f (order %s)",
            purchase.quantity,
            purchase.ticker,
            purchase.max_purchase_price,
            order_ref,
        )
        self._orders.append((order_ref, purchase))
        return order_ref
