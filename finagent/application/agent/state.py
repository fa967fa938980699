"""
LangGraph agent state: the transcript plus at most one pending purchase.
"""

from typing import Annotated, Optional, TypedDict

from langgraph.graph.message import add_messages

from finagent.domain.entities.purchase import PendingPurchase


class AgentState(TypedDict):
    """Conversation state threaded through every node of the agent graph.

    messages:         append-only list of LangChain BaseMessage objects managed
                      by the add_messages reducer.
    pending_purchase: the single validated purchase awaiting confirmation, or
                      None. Written only by the prepare_purchase node (set) and
                      the execute_purchase node (clear).
    """

    messages: Annotated[list, add_messages]
    pending_purchase: Optional[PendingPurchase]
