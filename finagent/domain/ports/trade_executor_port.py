"""
Port (interface) for trade execution.
Infrastructure adapters (e.g. SimulatedTradeExecutor) must implement this interface.
"""

from abc import ABC, abstractmethod

from finagent.domain.entities.purchase import PendingPurchase


class ITradeExecutor(ABC):
    @abstractmethod
    def execute(self, purchase: PendingPurchase) -> str:
        """Place the order for *purchase* and return an order reference."""
        ...
