"""
Infrastructure adapters: Langfuse → IObservabilityHandler, plus a no-op handler.

Langfuse is imported lazily inside the methods so the module can be loaded
even when LANGFUSE_* environment variables are not set (e.g. during testing).
build_observability_handler() only picks Langfuse when its keys are configured.
"""

from typing import Any, Optional

from finagent.domain.ports.observability_port import IObservabilityHandler
from finagent.infrastructure.config import Settings


class LangfuseObservabilityHandler(IObservabilityHandler):
    """Wraps the Langfuse LangChain CallbackHandler."""

    TAGS = ["financial-agent"]

    def __init__(self) -> None:
        from langfuse.langchain import CallbackHandler
        self._handler = CallbackHandler()

    def as_callback(self) -> Any:
        """Return the Langfuse CallbackHandler for use in LangChain/LangGraph configs."""
        return self._handler

    def trace_metadata(self, user_id: Optional[str], session_id: Optional[str]) -> dict:
        return {
            "langfuse_user_id": user_id,
            "langfuse_session_id": session_id,
            "langfuse_tags": list(self.TAGS),
        }

    def flush(self) -> None:
        """Flush pending traces to the Langfuse backend before the process exits."""
        from langfuse import get_client
        get_client().flush()


class NoopObservabilityHandler(IObservabilityHandler):
    """Used when tracing is not configured."""

    def as_callback(self) -> None:
        return None

    def trace_metadata(self, user_id: Optional[str], session_id: Optional[str]) -> dict:
        return {"user_id": user_id, "session_id": session_id}

    def flush(self) -> None:
        pass


def build_observability_handler(settings: Settings) -> IObservabilityHandler:
    if settings.langfuse_enabled:
        return LangfuseObservabilityHandler()
    return NoopObservabilityHandler()
