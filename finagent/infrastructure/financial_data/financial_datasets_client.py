"""
Infrastructure adapter: financialdatasets.ai REST API → IFinancialDataProvider.
All HTTP details (base URL, X-API-KEY header, error decoding) are confined here;
the rest of the codebase depends only on IFinancialDataProvider.
"""

import json
from typing import Any, Optional

import httpx

from finagent.domain.errors import FinancialDataError
from finagent.domain.ports.financial_data_port import IFinancialDataProvider


class FinancialDatasetsClient(IFinancialDataProvider):
    """Async client for https://api.financialdatasets.ai."""

    BASE_URL = "https://api.financialdatasets.ai"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            api_key:   FINANCIAL_DATASETS_API_KEY. Checked per request, so the
                       client can be built before the key is available.
            transport: Optional httpx transport (used by tests to mock the API).
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    # ------------------------------------------------------------------
    # IFinancialDataProvider interface
    # ------------------------------------------------------------------

    async def get_income_statements(self, ticker: str, period: str, limit: int) -> dict:
        return await self._request(
            "/financials/income-statements",
            params={"ticker": ticker, "period": period, "limit": str(limit)},
        )

    async def get_balance_sheets(self, ticker: str, period: str, limit: int) -> dict:
        return await self._request(
            "/financials/balance-sheets",
            params={"ticker": ticker, "period": period, "limit": str(limit)},
        )

    async def get_cash_flow_statements(self, ticker: str, period: str, limit: int) -> dict:
        return await self._request(
            "/financials/cash-flow-statements",
            params={"ticker": ticker, "period": period, "limit": str(limit)},
        )

    async def get_company_facts(self, ticker: str) -> dict:
        return await self._request("/company/facts", params={"ticker": ticker})

    async def get_price_snapshot(self, ticker: str) -> dict:
        return await self._request("/prices/snapshot", params={"ticker": ticker})

    async def get_financial_metrics_snapshot(self, ticker: str) -> dict:
        return await self._request("/financial-metrics/snapshot", params={"ticker": ticker})

    async def search_financials(self, body: dict[str, Any]) -> dict:
        return await self._request("/financials/search", method="POST", body=body)

    async def get_sec_filings(
        self,
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        filing_type: Optional[str] = None,
    ) -> dict:
        params = {}
        if ticker:
            params["ticker"] = ticker
        if cik:
            params["cik"] = cik
        if filing_type:
            params["filing_type"] = filing_type
        return await self._request("/filings", params=params)

    async def get_available_tickers(self) -> dict:
        return await self._request("/filings/tickers/")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        endpoint: str,
        params: Optional[dict[str, str]] = None,
        method: str = "GET",
        body: Optional[dict[str, Any]] = None,
    ) -> dict:
        if not self._api_key:
            raise FinancialDataError("FINANCIAL_DATASETS_API_KEY is not set", endpoint=endpoint)

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    endpoint,
                    params=params,
                    json=body,
                    headers={"X-API-KEY": self._api_key},
                )
        except httpx.HTTPError as exc:
            raise FinancialDataError(
                f"Failed to fetch data from {endpoint}: {exc}", endpoint=endpoint
            ) from exc

        if not response.is_success:
            raise FinancialDataError(
                f"Failed to fetch data from {endpoint}.\n"
                f"Status: {response.status_code}\n"
                f"Response: {self._describe(response)}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise FinancialDataError(
                f"Malformed JSON response from {endpoint}", endpoint=endpoint
            ) from exc

    @staticmethod
    def _describe(response: httpx.Response) -> str:
        try:
            return json.dumps(response.json(), indent=2)
        except ValueError:
            return response.text or response.reason_phrase
