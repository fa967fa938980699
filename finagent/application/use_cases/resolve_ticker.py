"""
Use-case: resolve a company name to a ticker symbol.

Two steps: a web search for the ticker, then a structured extraction over the
search text constrained to TickerExtraction. Any failure along the way yields
None so the caller can tell the user the ticker could not be determined.
"""

import logging
import re
from typing import Optional

from langchain_core.messages import HumanMessage

from finagent.application.agent.prompts import TICKER_EXTRACTION_PROMPT
from finagent.application.agent.tool_schemas import TickerExtraction
from finagent.domain.errors import FinancialDataError
from finagent.domain.ports.llm_port import ILanguageModel
from finagent.domain.ports.web_search_port import IWebSearch

logger = logging.getLogger(__name__)

_TICKER_RE = re.compile(r"^[A-Z0-9][A-Z0-9.\-]{0,9}$")


class ResolveTickerUseCase:
    def __init__(self, web_search: IWebSearch, llm: ILanguageModel) -> None:
        self._web_search = web_search
        self._extractor = llm.with_structured_output(TickerExtraction)

    async def execute(self, company_name: str) -> Optional[str]:
        """Return the uppercased ticker for *company_name*, or None if unknown."""
        try:
            search_results = await self._web_search.search(
                f"What is the ticker symbol for {company_name}?"
            )
        except FinancialDataError as exc:
            logger.warning("Ticker search failed for %r: %s", company_name, exc)
            return None

        prompt = TICKER_EXTRACTION_PROMPT.format(
            company_name=company_name,
            search_results=search_results,
        )
        try:
            extracted = await self._extractor.ainvoke([HumanMessage(content=prompt)])
        except Exception as exc:
            # Parser errors and engine failures (throttling, client errors) alike.
            logger.warning("Ticker extraction failed for %r: %s", company_name, exc)
            return None

        ticker = (getattr(extracted, "ticker", None) or "").strip().upper()
        if not _TICKER_RE.match(ticker):
            logger.info("No usable ticker extracted for %r: %r", company_name, ticker)
            return None
        return ticker
