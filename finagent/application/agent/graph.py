"""
LangGraph agent graph factory.

Dependency-injection contract:
  - Receives ILanguageModel, the tool list, and the two purchase services.
  - Never imports ChatBedrock, langfuse, httpx, or tavily directly.
  - langchain_core and langgraph are treated as orchestration-framework imports,
    acceptable in the application layer.

Shape:
    llm ──route_after_llm──> tools ─────────────┐
     ^                  ├──> prepare_purchase ──┤
     │                  ├──> execute_purchase ──┤
     │                  └──> END                │
     └──────────────────────────────────────────┘

tools and prepare_purchase may both fire for one response; they run in the
same superstep and llm runs once after both have returned.
"""

from typing import Any, Optional

from langchain_core.messages import SystemMessage
from langgraph.graph import END, START, StateGraph

from finagent.application.agent.prompts import SYSTEM_PROMPT
from finagent.application.agent.routing import (
    EXECUTE_PURCHASE_NODE,
    LLM_NODE,
    PREPARE_PURCHASE_NODE,
    TOOLS_NODE,
    last_assistant_message,
    route_after_llm,
    split_tool_calls,
)
from finagent.application.agent.state import AgentState
from finagent.application.services.purchase_execution import ExecutePurchaseService
from finagent.application.services.purchase_preparation import PreparePurchaseService
from finagent.application.services.tool_dispatch import ToolDispatcher
from finagent.domain.ports.llm_port import ILanguageModel


def build_agent_graph(
    llm: ILanguageModel,
    tools: list,
    purchase_preparation: PreparePurchaseService,
    purchase_execution: ExecutePurchaseService,
    checkpointer: Optional[Any] = None,
):
    """Build and compile the agent graph.

    Args:
        llm:                  ILanguageModel implementation, injected.
        tools:                LangChain tools from tool_registry, including purchase_stock
                              (bound so the engine can request it; never dispatched).
        purchase_preparation: Handles purchase_stock calls when nothing is pending.
        purchase_execution:   Confirms the pending purchase.
        checkpointer:         Optional LangGraph checkpointer; required for a pending
                              purchase to survive into the next user turn.

    Returns:
        Compiled LangGraph CompiledStateGraph ready for astream() calls.
    """
    llm_with_tools = llm.bind_tools(tools)
    dispatcher = ToolDispatcher(tools)

    async def llm_node(state: AgentState) -> dict:
        """Reasoning step: prepend system prompt if absent, then call the LLM."""
        existing = state["messages"]
        if existing and isinstance(existing[0], SystemMessage):
            messages = existing
        else:
            messages = [SystemMessage(content=SYSTEM_PROMPT)] + existing
        response = await llm_with_tools.ainvoke(messages)
        return {"messages": [response]}

    async def tool_node(state: AgentState) -> dict:
        """Action step: run every non-purchase tool call of the last LLM message."""
        _, tool_calls = split_tool_calls(last_assistant_message(state).tool_calls)
        return {"messages": await dispatcher.dispatch(tool_calls)}

    async def prepare_purchase_node(state: AgentState) -> dict:
        return await purchase_preparation.prepare(
            last_assistant_message(state),
            state.get("pending_purchase"),
        )

    def execute_purchase_node(state: AgentState) -> dict:
        return purchase_execution.execute(
            last_assistant_message(state),
            state.get("pending_purchase"),
        )

    workflow = StateGraph(AgentState)
    workflow.add_node(LLM_NODE, llm_node)
    workflow.add_node(TOOLS_NODE, tool_node)
    workflow.add_node(PREPARE_PURCHASE_NODE, prepare_purchase_node)
    workflow.add_node(EXECUTE_PURCHASE_NODE, execute_purchase_node)
    workflow.add_edge(START, LLM_NODE)
    workflow.add_conditional_edges(
        LLM_NODE,
        route_after_llm,
        [TOOLS_NODE, PREPARE_PURCHASE_NODE, EXECUTE_PURCHASE_NODE, END],
    )
    workflow.add_edge(TOOLS_NODE, LLM_NODE)
    workflow.add_edge(PREPARE_PURCHASE_NODE, LLM_NODE)
    workflow.add_edge(EXECUTE_PURCHASE_NODE, LLM_NODE)
    return workflow.compile(checkpointer=checkpointer)
