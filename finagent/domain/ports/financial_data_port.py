"""
Port (interface) for financial data providers.
Infrastructure adapters (e.g. FinancialDatasetsClient) must implement this interface.

Every method returns the decoded JSON body of the upstream response and raises
FinancialDataError on network failures, non-2xx responses, or missing credentials.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IFinancialDataProvider(ABC):
    @abstractmethod
    async def get_income_statements(self, ticker: str, period: str, limit: int) -> dict: ...

    @abstractmethod
    async def get_balance_sheets(self, ticker: str, period: str, limit: int) -> dict: ...

    @abstractmethod
    async def get_cash_flow_statements(self, ticker: str, period: str, limit: int) -> dict: ...

    @abstractmethod
    async def get_company_facts(self, ticker: str) -> dict: ...

    @abstractmethod
    async def get_price_snapshot(self, ticker: str) -> dict: ...

    @abstractmethod
    async def get_financial_metrics_snapshot(self, ticker: str) -> dict: ...

    @abstractmethod
    async def search_financials(self, body: dict[str, Any]) -> dict: ...

    @abstractmethod
    async def get_sec_filings(
        self,
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        filing_type: Optional[str] = None,
    ) -> dict: ...

    @abstractmethod
    async def get_available_tickers(self) -> dict: ...
