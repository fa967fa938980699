"""
Port (interface) for free-text web search.
Infrastructure adapters (e.g. TavilyWebSearch) must implement this interface.
"""

from abc import ABC, abstractmethod


class IWebSearch(ABC):
    @abstractmethod
    async def search(self, query: str) -> str:
        """Run *query* and return the results serialized as text.

        Raises:
            FinancialDataError: if the search provider fails.
        """
        ...
