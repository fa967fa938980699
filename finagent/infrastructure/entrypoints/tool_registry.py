"""
LangChain @tool wrappers: Infrastructure entrypoint / Composition Root.

The @tool decorator is a LangChain infrastructure concern and must NOT appear
in the application or domain layers. This module binds each application
use-case to a tool callable that can be passed to build_agent_graph(). Argument
contracts come from application.agent.tool_schemas so the engine and the
dispatch boundary agree on them.

Every tool returns text: JSON on success, a human-readable error otherwise.
"""

import dataclasses
import json
import logging
from typing import Any, Awaitable, Optional

from langchain_core.tools import tool

from finagent.application.agent.tool_schemas import (
    FinancialsSearchInput,
    FinancialStatementsInput,
    NoInput,
    PurchaseStockInput,
    SecFilingsInput,
    TickerInput,
    WebSearchInput,
)
from finagent.application.use_cases.get_company_data import (
    GetCompanyFactsUseCase,
    GetFinancialMetricsSnapshotUseCase,
)
from finagent.application.use_cases.get_financial_statements import GetFinancialStatementsUseCase
from finagent.application.use_cases.get_price_snapshot import GetPriceSnapshotUseCase
from finagent.application.use_cases.get_sec_filings import (
    GetSecFilingsUseCase,
    ListAvailableTickersUseCase,
)
from finagent.application.use_cases.search_financials import SearchFinancialsUseCase
from finagent.domain.entities.purchase import PURCHASE_STOCK_TOOL
from finagent.domain.ports.financial_data_port import IFinancialDataProvider
from finagent.domain.ports.web_search_port import IWebSearch

logger = logging.getLogger(__name__)


async def _as_tool_output(action: str, pending: Awaitable[Any]) -> str:
    """Await a use-case call and render it, turning any failure into error text."""
    try:
        result = await pending
    except Exception as exc:
        logger.warning("Error %s: %s", action, exc)
        return f"An error occurred while {action}: {exc}"
    if dataclasses.is_dataclass(result):
        result = dataclasses.asdict(result)
    return result if isinstance(result, str) else json.dumps(result, default=str)


def create_tools(
    financial_data: IFinancialDataProvider,
    web_search: IWebSearch,
) -> list:
    """Build and return the agent's LangChain tools with injected use-case dependencies.

    Args:
        financial_data: IFinancialDataProvider implementation (e.g. FinancialDatasetsClient).
        web_search:     IWebSearch implementation (e.g. TavilyWebSearch).

    Returns:
        List of @tool callables ready to be passed to build_agent_graph().
    """
    statements_uc = GetFinancialStatementsUseCase(financial_data)
    facts_uc = GetCompanyFactsUseCase(financial_data)
    metrics_uc = GetFinancialMetricsSnapshotUseCase(financial_data)
    price_uc = GetPriceSnapshotUseCase(financial_data)
    search_uc = SearchFinancialsUseCase(financial_data)
    filings_uc = GetSecFilingsUseCase(financial_data)
    tickers_uc = ListAvailableTickersUseCase(financial_data)

    @tool("income_statements", args_schema=FinancialStatementsInput)
    async def income_statements(ticker: str, period: str = "annual", limit: int = 5) -> str:
        """Retrieves income statements for a company over a chosen period.

        Includes revenue, cost of revenue, gross profit, operating expenses,
        operating income, net income, EBIT, income tax, earnings per share
        (basic and diluted), dividends per share and share counts.
        """
        return await _as_tool_output(
            "fetching income statements",
            statements_uc.execute("income", ticker, period, limit),
        )

    @tool("balance_sheets", args_schema=FinancialStatementsInput)
    async def balance_sheets(ticker: str, period: str = "annual", limit: int = 5) -> str:
        """Fetches balance sheets for a company at specific points in time.

        Includes total, current and non-current assets and liabilities, cash,
        inventory, investments, property and equipment, goodwill, debt,
        payables, retained earnings and shareholders' equity.
        """
        return await _as_tool_output(
            "fetching balance sheets",
            statements_uc.execute("balance", ticker, period, limit),
        )

    @tool("cash_flow_statements", args_schema=FinancialStatementsInput)
    async def cash_flow_statements(ticker: str, period: str = "annual", limit: int = 5) -> str:
        """Obtains cash flow statements for a company.

        Includes net cash flow from operating, investing and financing
        activities, depreciation, share-based compensation, capital expenditure,
        acquisitions, debt and equity issuance, dividends and change in cash.
        """
        return await _as_tool_output(
            "fetching cash flow statements",
            statements_uc.execute("cash_flow", ticker, period, limit),
        )

    @tool("company_facts", args_schema=TickerInput)
    async def company_facts(ticker: str) -> str:
        """Provides key facts about a company: name, CIK, market cap, employees,
        SIC code and description, website, listing date and whether it is active."""
        return await _as_tool_output("fetching company facts", facts_uc.execute(ticker))

    @tool("price_snapshot", args_schema=TickerInput)
    async def price_snapshot(ticker: str) -> str:
        """Retrieves the current stock price for a company, with the day's change
        in price and percent and the time of the quote. Call this before
        discussing the price of a stock purchase."""
        return await _as_tool_output("fetching price snapshots", price_uc.execute(ticker))

    @tool("financial_metrics_snapshot", args_schema=TickerInput)
    async def financial_metrics_snapshot(ticker: str) -> str:
        """Retrieves current financial metrics for a company: P/E, P/B, P/S,
        growth rates, margins, returns, liquidity and leverage ratios."""
        return await _as_tool_output(
            "fetching financial metrics snapshot", metrics_uc.execute(ticker)
        )

    @tool("financials_search", args_schema=FinancialsSearchInput)
    async def financials_search(
        filters: list,
        period: str = "ttm",
        limit: int = 100,
        order_by: Optional[str] = None,
        currency: Optional[str] = None,
        historical: bool = False,
    ) -> str:
        """Searches for companies using filters on income statement, balance sheet
        and cash flow line items (e.g. revenue greater than $100 million and
        total_debt less than $1 billion)."""
        request = FinancialsSearchInput(
            filters=filters,
            period=period,
            limit=limit,
            order_by=order_by,
            currency=currency,
            historical=historical,
        ).model_dump()
        return await _as_tool_output("running financial search", search_uc.execute(request))

    @tool("sec_filings", args_schema=SecFilingsInput)
    async def sec_filings(
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        filing_type: Optional[str] = None,
    ) -> str:
        """Fetches SEC filings (10-K, 10-Q, 8-K, ...) for a company by ticker or CIK.
        One of ticker or cik is required; filing_type optionally narrows the list."""
        return await _as_tool_output(
            "fetching SEC filings", filings_uc.execute(ticker, cik, filing_type)
        )

    @tool("get_available_tickers", args_schema=NoInput)
    async def get_available_tickers() -> str:
        """Lists every ticker for which SEC filings and financial data are available."""
        return await _as_tool_output("fetching available tickers", tickers_uc.execute())

    @tool("web_search", args_schema=WebSearchInput)
    async def web_search_tool(query: str) -> str:
        """Searches the web. Use as a last resort for general news or to find the
        ticker of an obscure company."""
        return await _as_tool_output("searching the web", web_search.search(query))

    @tool(PURCHASE_STOCK_TOOL, args_schema=PurchaseStockInput)
    def purchase_stock(
        maxPurchasePrice: float,
        ticker: Optional[str] = None,
        companyName: Optional[str] = None,
        quantity: int = 1,
    ) -> str:
        """This tool should be called when a user wants to purchase a stock."""
        target = ticker or companyName or "the requested stock"
        return (
            f"Please confirm that you want to purchase {quantity} shares of {target} "
            f"at ${maxPurchasePrice:.2f} per share."
        )

    return [
        income_statements,
        balance_sheets,
        cash_flow_statements,
        company_facts,
        price_snapshot,
        purchase_stock,
        financial_metrics_snapshot,
        financials_search,
        web_search_tool,
        sec_filings,
        get_available_tickers,
    ]
