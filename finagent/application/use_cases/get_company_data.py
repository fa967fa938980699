"""
Use-cases: company facts and the financial metrics snapshot for one ticker.
Depends only on Domain ports: no infrastructure imports.
"""

from finagent.domain.ports.financial_data_port import IFinancialDataProvider


class GetCompanyFactsUseCase:
    def __init__(self, provider: IFinancialDataProvider) -> None:
        self._provider = provider

    async def execute(self, ticker: str) -> dict:
        if not ticker or not ticker.strip():
            raise ValueError("ticker must be a non-empty string")
        return await self._provider.get_company_facts(ticker.upper().strip())


class GetFinancialMetricsSnapshotUseCase:
    def __init__(self, provider: IFinancialDataProvider) -> None:
        self._provider = provider

    async def execute(self, ticker: str) -> dict:
        if not ticker or not ticker.strip():
            raise ValueError("ticker must be a non-empty string")
        return await self._provider.get_financial_metrics_snapshot(ticker.upper().strip())
