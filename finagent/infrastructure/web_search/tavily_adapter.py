"""
Infrastructure adapter: Tavily (via langchain_community) → IWebSearch.

TavilySearchResults is imported and constructed lazily so the module can be
loaded, and the tool registry built, before TAVILY_API_KEY is set.
"""

import json
from typing import Any

from finagent.domain.errors import FinancialDataError
from finagent.domain.ports.web_search_port import IWebSearch


class TavilyWebSearch(IWebSearch):
    """Wraps the LangChain community TavilySearchResults tool."""

    def __init__(self, max_results: int = 2) -> None:
        self._max_results = max_results
        self._tool: Any = None

    def _get_tool(self) -> Any:
        if self._tool is None:
            from langchain_community.tools.tavily_search import TavilySearchResults
            self._tool = TavilySearchResults(max_results=self._max_results)
        return self._tool

    async def search(self, query: str) -> str:
        try:
            results = await self._get_tool().ainvoke(query)
        except Exception as exc:
            raise FinancialDataError(f"Web search failed: {exc}", endpoint="tavily") from exc
        if isinstance(results, str):
            return results
        return json.dumps(results)
