"""
Routing predicate for the agent graph.

route_after_llm() is evaluated after every reasoning step and decides which
node(s) run next. It is a pure function of the latest assistant message and
the pending purchase, so it is tested without building a graph.
"""

import logging
from typing import Union

from langchain_core.messages import AIMessage
from langgraph.graph import END

from finagent.application.agent.state import AgentState
from finagent.domain.entities.purchase import PURCHASE_STOCK_TOOL
from finagent.domain.errors import EmptyToolCallsError, ProtocolViolationError

logger = logging.getLogger(__name__)

LLM_NODE = "llm"
TOOLS_NODE = "tools"
PREPARE_PURCHASE_NODE = "prepare_purchase"
EXECUTE_PURCHASE_NODE = "execute_purchase"

# Stop reasons reported by Bedrock/Anthropic and OpenAI-style engines when a
# response is meant to carry tool calls.
_TOOL_USE_STOP_REASONS = {"tool_use", "tool_calls"}


def last_assistant_message(state: AgentState) -> AIMessage:
    """Return the latest message, which must be an assistant message."""
    messages = state.get("messages") or []
    if not messages or not isinstance(messages[-1], AIMessage):
        raise ProtocolViolationError("Expected the last message to be an AI message")
    return messages[-1]


def split_tool_calls(tool_calls: list[dict]) -> tuple[list[dict], list[dict]]:
    """Partition tool calls into (purchase requests, everything else)."""
    purchase_calls = [tc for tc in tool_calls if tc["name"] == PURCHASE_STOCK_TOOL]
    other_calls = [tc for tc in tool_calls if tc["name"] != PURCHASE_STOCK_TOOL]
    return purchase_calls, other_calls


def claims_tool_use(message: AIMessage) -> bool:
    if message.invalid_tool_calls:
        return True
    metadata = message.response_metadata or {}
    reason = metadata.get("stop_reason") or metadata.get("finish_reason")
    return reason in _TOOL_USE_STOP_REASONS


def route_after_llm(state: AgentState) -> Union[str, list[str]]:
    """Route: stop, confirm a pending purchase, or fan out to the tool handlers."""
    message = last_assistant_message(state)

    if not message.tool_calls:
        if claims_tool_use(message):
            raise EmptyToolCallsError(
                "Expected tool_calls to be an array with at least one element"
            )
        return END

    for tool_call in message.tool_calls:
        if not tool_call.get("id"):
            raise ProtocolViolationError(f"Tool call {tool_call['name']!r} has no id")

    if state.get("pending_purchase") is not None:
        logger.debug("Pending purchase present; routing to %s", EXECUTE_PURCHASE_NODE)
        return [EXECUTE_PURCHASE_NODE]

    purchase_calls, other_calls = split_tool_calls(message.tool_calls)
    destinations = []
    if other_calls:
        destinations.append(TOOLS_NODE)
    if purchase_calls:
        destinations.append(PREPARE_PURCHASE_NODE)
    logger.debug("Routing %d tool call(s) to %s", len(message.tool_calls), destinations)
    return destinations
