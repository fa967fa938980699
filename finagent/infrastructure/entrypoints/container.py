"""
Composition Root: wires infrastructure adapters into the application layer.

Shared by the FastAPI app and the CLI so both entrypoints run the same graph.
"""

from typing import Any, Optional

from langgraph.checkpoint.memory import MemorySaver

from finagent.application.agent.graph import build_agent_graph
from finagent.application.services.purchase_execution import ExecutePurchaseService
from finagent.application.services.purchase_preparation import PreparePurchaseService
from finagent.application.use_cases.get_price_snapshot import GetPriceSnapshotUseCase
from finagent.application.use_cases.resolve_ticker import ResolveTickerUseCase
from finagent.application.use_cases.run_agent import RunAgentUseCase
from finagent.infrastructure.config import Settings
from finagent.infrastructure.entrypoints.tool_registry import create_tools
from finagent.infrastructure.financial_data.financial_datasets_client import (
    FinancialDatasetsClient,
)
from finagent.infrastructure.llm.bedrock_adapter import BedrockChatAdapter
from finagent.infrastructure.observability.langfuse_adapter import build_observability_handler
from finagent.infrastructure.trading.simulated_executor import SimulatedTradeExecutor
from finagent.infrastructure.web_search.tavily_adapter import TavilyWebSearch


def build_run_agent_use_case(
    settings: Settings,
    checkpointer: Optional[Any] = None,
) -> RunAgentUseCase:
    """Build the agent with every dependency resolved from *settings*.

    Conversation state lives in *checkpointer* (an in-process MemorySaver by
    default), keyed by session id.
    """
    financial_data = FinancialDatasetsClient(
        api_key=settings.financial_datasets_api_key,
        base_url=settings.financial_datasets_base_url,
        timeout=settings.financial_datasets_timeout,
    )
    web_search = TavilyWebSearch(max_results=settings.web_search_max_results)
    llm = BedrockChatAdapter(model_id=settings.bedrock_model_id, region=settings.aws_region)

    tools = create_tools(financial_data, web_search)
    preparation = PreparePurchaseService(
        price_snapshot=GetPriceSnapshotUseCase(financial_data),
        resolve_ticker=ResolveTickerUseCase(web_search, llm),
    )
    execution = ExecutePurchaseService(SimulatedTradeExecutor())

    graph = build_agent_graph(
        llm,
        tools,
        preparation,
        execution,
        checkpointer=checkpointer if checkpointer is not None else MemorySaver(),
    )
    return RunAgentUseCase(
        graph,
        build_observability_handler(settings),
        recursion_limit=settings.recursion_limit,
    )
