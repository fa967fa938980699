"""
Use-case: retrieve income statements, balance sheets, or cash flow statements.
Depends only on Domain ports: no infrastructure imports.
"""

from finagent.domain.ports.financial_data_port import IFinancialDataProvider

STATEMENT_KINDS = ("income", "balance", "cash_flow")
PERIODS = ("annual", "quarterly", "ttm")


class GetFinancialStatementsUseCase:
    def __init__(self, provider: IFinancialDataProvider) -> None:
        self._provider = provider

    async def execute(
        self,
        kind: str,
        ticker: str,
        period: str = "annual",
        limit: int = 5,
    ) -> dict:
        """Fetch *limit* statements of *kind* for *ticker*.

        Args:
            kind:   One of 'income', 'balance', 'cash_flow'.
            ticker: Ticker symbol (case-insensitive).
            period: 'annual', 'quarterly' or 'ttm'.
            limit:  Number of statements, at least 1.

        Raises:
            ValueError: on a blank ticker or an unknown kind/period/limit.
            FinancialDataError: propagated from the provider on API failure.
        """
        if not ticker or not ticker.strip():
            raise ValueError("ticker must be a non-empty string")
        if kind not in STATEMENT_KINDS:
            raise ValueError(f"Unknown statement kind: {kind!r}")
        if period not in PERIODS:
            raise ValueError(f"Unknown period: {period!r}")
        if limit < 1:
            raise ValueError("limit must be positive")

        symbol = ticker.upper().strip()
        if kind == "income":
            return await self._provider.get_income_statements(symbol, period, limit)
        if kind == "balance":
            return await self._provider.get_balance_sheets(symbol, period, limit)
        return await self._provider.get_cash_flow_statements(symbol, period, limit)
