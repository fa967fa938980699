"""
Use-case: multi-criteria screen over financial statement line items.
Depends only on Domain ports: no infrastructure imports.
"""

from typing import Any

from finagent.domain.ports.financial_data_port import IFinancialDataProvider


class SearchFinancialsUseCase:
    def __init__(self, provider: IFinancialDataProvider) -> None:
        self._provider = provider

    async def execute(self, request: dict[str, Any]) -> dict:
        """Run a financials search.

        Args:
            request: Search body with a non-empty ``filters`` list of
                     {field, operator, value} objects plus optional period,
                     limit, order_by, currency and historical keys. Keys whose
                     value is None are dropped before the request is sent.

        Raises:
            ValueError: if no filters are given.
            FinancialDataError: propagated from the provider on API failure.
        """
        if not request.get("filters"):
            raise ValueError("at least one filter is required")
        body = {key: value for key, value in request.items() if value is not None}
        return await self._provider.search_financials(body)
