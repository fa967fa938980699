"""
Use-case: retrieve the current price snapshot for a given ticker.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from finagent.domain.entities.price_snapshot import PriceSnapshot
from finagent.domain.ports.financial_data_port import IFinancialDataProvider


class GetPriceSnapshotUseCase:
    def __init__(self, provider: IFinancialDataProvider) -> None:
        self._provider = provider

    async def execute(self, ticker: str) -> PriceSnapshot:
        """Fetch and parse the current price for *ticker* (uppercased).

        Raises:
            ValueError: if *ticker* is blank or the payload has no numeric price.
            FinancialDataError: propagated from the provider on API failure.
        """
        if not ticker or not ticker.strip():
            raise ValueError("ticker must be a non-empty string")
        symbol = ticker.upper().strip()
        payload = await self._provider.get_price_snapshot(symbol)
        return PriceSnapshot.from_payload(payload, ticker=symbol)
