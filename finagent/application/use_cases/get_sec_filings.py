"""
Use-cases: SEC filings lookup and the list of covered tickers.
Depends only on Domain ports: no infrastructure imports.
"""

from typing import Optional

from finagent.domain.ports.financial_data_port import IFinancialDataProvider


class GetSecFilingsUseCase:
    def __init__(self, provider: IFinancialDataProvider) -> None:
        self._provider = provider

    async def execute(
        self,
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        filing_type: Optional[str] = None,
    ) -> list:
        """Return the filings list for a company identified by *ticker* or *cik*.

        Raises:
            ValueError: if neither ticker nor cik is given.
            FinancialDataError: propagated from the provider on API failure.
        """
        if not ticker and not cik:
            raise ValueError("Either ticker or CIK must be provided.")
        data = await self._provider.get_sec_filings(
            ticker=ticker.upper().strip() if ticker else None,
            cik=cik,
            filing_type=filing_type,
        )
        return data.get("filings") or []


class ListAvailableTickersUseCase:
    def __init__(self, provider: IFinancialDataProvider) -> None:
        self._provider = provider

    async def execute(self) -> list[str]:
        data = await self._provider.get_available_tickers()
        return data.get("tickers") or []
