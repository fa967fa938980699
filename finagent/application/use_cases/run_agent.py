"""
Use-case: execute a user query through the compiled LangGraph agent.
langchain_core.messages is treated as framework (not infrastructure) because
LangGraph is the orchestration framework used throughout the application layer.
"""

import uuid
from typing import Any, AsyncGenerator, Optional

from langchain_core.messages import HumanMessage

from finagent.domain.ports.observability_port import IObservabilityHandler


class RunAgentUseCase:
    def __init__(
        self,
        graph: Any,
        observability: IObservabilityHandler,
        recursion_limit: int = 25,
    ) -> None:
        """
        Args:
            graph:           Compiled LangGraph StateGraph returned by build_agent_graph().
            observability:   IObservabilityHandler implementation (e.g. Langfuse adapter).
            recursion_limit: Maximum supersteps per turn.
        """
        self._graph = graph
        self._observability = observability
        self._recursion_limit = recursion_limit

    def _config(self, user_id: Optional[str], session_id: Optional[str]) -> dict:
        callback = self._observability.as_callback()
        return {
            "callbacks": [callback] if callback is not None else [],
            "metadata": self._observability.trace_metadata(user_id, session_id),
            "configurable": {"thread_id": session_id or str(uuid.uuid4())},
            "recursion_limit": self._recursion_limit,
        }

    async def execute(
        self,
        query: str,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> AsyncGenerator[dict, None]:
        """Stream agent events for a user *query*.

        Yields dicts of shape:
            {"node": str, "content": str, "type": str}
        plus a "pending_purchase" key (payload dict or None) whenever a node
        sets or clears the pending purchase.

        Args:
            query:      The user's natural-language question.
            user_id:    Caller identity for tracing (optional).
            session_id: Conversation id. Turns sharing a session share history
                        and any pending purchase. A fresh id is used if omitted.

        Raises:
            OrchestrationError: if the graph's invariants are violated mid-turn.
        """
        try:
            async for chunk in self._graph.astream(
                {"messages": [HumanMessage(content=query)]},
                config=self._config(user_id, session_id),
                stream_mode="updates",
            ):
                for node_name, update in chunk.items():
                    if update:
                        yield self._to_event(node_name, update)
        finally:
            self._observability.flush()

    @staticmethod
    def _to_event(node_name: str, update: dict) -> dict:
        messages = update.get("messages") or []
        if messages:
            last_msg = messages[-1]
            event = {
                "node": node_name,
                "content": last_msg.content if hasattr(last_msg, "content") else str(last_msg),
                "type": last_msg.__class__.__name__,
            }
        else:
            event = {"node": node_name, "content": "", "type": "StateUpdate"}
        if "pending_purchase" in update:
            pending = update["pending_purchase"]
            event["pending_purchase"] = pending.to_payload() if pending else None
        return event
