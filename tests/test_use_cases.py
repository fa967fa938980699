"""Tests for the data use-cases' input checks and the ticker resolver."""

import pytest
from fakes import FakeFinancialData, FakeLanguageModel, FakeWebSearch

from finagent.application.use_cases.get_financial_statements import GetFinancialStatementsUseCase
from finagent.application.use_cases.get_sec_filings import GetSecFilingsUseCase
from finagent.application.use_cases.resolve_ticker import ResolveTickerUseCase
from finagent.application.use_cases.search_financials import SearchFinancialsUseCase


class TestFinancialStatements:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind,endpoint", [
        ("income", "income_statements"),
        ("balance", "balance_sheets"),
        ("cash_flow", "cash_flow_statements"),
    ])
    async def test_kind_selects_endpoint(self, kind, endpoint):
        provider = FakeFinancialData()

        await GetFinancialStatementsUseCase(provider).execute(kind, " msft ", "ttm", 2)

        assert provider.calls == [(endpoint, "MSFT", "ttm", 2)]

    @pytest.mark.asyncio
    async def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown statement kind"):
            await GetFinancialStatementsUseCase(FakeFinancialData()).execute("equity", "AAPL")


class TestSearchAndFilings:
    @pytest.mark.asyncio
    async def test_search_requires_filters(self):
        provider = FakeFinancialData()

        with pytest.raises(ValueError):
            await SearchFinancialsUseCase(provider).execute({"filters": []})
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_filings_require_ticker_or_cik(self):
        with pytest.raises(ValueError):
            await GetSecFilingsUseCase(FakeFinancialData()).execute()


class TestResolveTicker:
    @pytest.mark.asyncio
    async def test_rejects_text_that_is_not_a_ticker(self):
        llm = FakeLanguageModel(extraction={"ticker": "I could not find it"})
        resolver = ResolveTickerUseCase(FakeWebSearch(results="no results"), llm)

        assert await resolver.execute("Unknown Holdings") is None

    @pytest.mark.asyncio
    async def test_accepts_share_class_suffix(self):
        llm = FakeLanguageModel(extraction={"ticker": "brk.b"})
        resolver = ResolveTickerUseCase(FakeWebSearch(results="Berkshire (BRK.B)"), llm)

        assert await resolver.execute("Berkshire Hathaway") == "BRK.B"
