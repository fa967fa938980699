"""Tests for the LangChain tool wrappers bound to the reasoning engine."""

import json

import pytest
from fakes import FakeFinancialData, FakeWebSearch

from finagent.domain.errors import FinancialDataError
from finagent.infrastructure.entrypoints.tool_registry import create_tools

EXPECTED_TOOLS = {
    "income_statements",
    "balance_sheets",
    "cash_flow_statements",
    "company_facts",
    "price_snapshot",
    "purchase_stock",
    "financial_metrics_snapshot",
    "financials_search",
    "web_search",
    "sec_filings",
    "get_available_tickers",
}


@pytest.fixture
def provider():
    return FakeFinancialData(prices={"AAPL": 190.0})


@pytest.fixture
def search():
    return FakeWebSearch(results="Apple shares rose today.")


@pytest.fixture
def tools(provider, search):
    return {t.name: t for t in create_tools(provider, search)}


def test_registry_exposes_every_tool_with_a_description(tools):
    assert set(tools) == EXPECTED_TOOLS
    assert all(t.description for t in tools.values())


class TestDataTools:
    @pytest.mark.asyncio
    async def test_price_snapshot_renders_json(self, tools):
        output = await tools["price_snapshot"].ainvoke({"ticker": "AAPL"})

        assert json.loads(output) == {
            "ticker": "AAPL",
            "price": 190.0,
            "day_change": 1.5,
            "day_change_percent": 0.8,
            "time": "2024-05-01T16:00:00Z",
        }

    @pytest.mark.asyncio
    async def test_upstream_error_becomes_text(self, search):
        provider = FakeFinancialData(error=FinancialDataError("Status: 401"))
        tools = {t.name: t for t in create_tools(provider, search)}

        output = await tools["price_snapshot"].ainvoke({"ticker": "AAPL"})

        assert output == "An error occurred while fetching price snapshots: Status: 401"

    @pytest.mark.asyncio
    async def test_sec_filings_returns_filings_list(self, tools, provider):
        output = await tools["sec_filings"].ainvoke({"ticker": "aapl", "filing_type": "10-Q"})

        assert json.loads(output) == [{"ticker": "AAPL", "cik": None, "formType": "10-Q"}]
        assert provider.calls == [("sec_filings", "AAPL", None, "10-Q")]

    @pytest.mark.asyncio
    async def test_available_tickers(self, tools):
        output = await tools["get_available_tickers"].ainvoke({})

        assert json.loads(output) == ["AAPL", "MSFT"]

    @pytest.mark.asyncio
    async def test_financials_search_drops_unset_fields(self, tools, provider):
        await tools["financials_search"].ainvoke(
            {"filters": [{"field": "revenue", "operator": "gt", "value": 100000000}]}
        )

        ((_, body),) = provider.calls
        assert body == {
            "filters": [{"field": "revenue", "operator": "gt", "value": 100000000.0}],
            "period": "ttm",
            "limit": 100,
            "historical": False,
        }

    @pytest.mark.asyncio
    async def test_web_search_passes_text_through(self, tools, search):
        output = await tools["web_search"].ainvoke({"query": "AAPL news"})

        assert output == "Apple shares rose today."
        assert search.queries == ["AAPL news"]


class TestPurchaseTool:
    def test_body_describes_the_request(self, tools):
        output = tools["purchase_stock"].invoke(
            {"ticker": "AAPL", "quantity": 5, "maxPurchasePrice": 300}
        )

        assert output == "Please confirm that you want to purchase 5 shares of AAPL at $300.00 per share."

    def test_schema_requires_max_purchase_price(self, tools):
        schema = tools["purchase_stock"].args_schema.model_json_schema()

        assert schema["required"] == ["maxPurchasePrice"]
