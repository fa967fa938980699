"""
Domain error taxonomy.

Two families:
  - FinancialDataError: upstream data-source failures. Recoverable; callers
    fold them into tool-result messages so the reasoning step can adapt.
  - OrchestrationError and subclasses: the agent graph's invariants were
    violated. Fatal to the turn; they propagate to the entrypoint.
"""

from typing import Optional


class FinancialDataError(Exception):
    """An external financial-data or search request failed."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class OrchestrationError(RuntimeError):
    """Base class for contract violations inside the agent graph."""


class ProtocolViolationError(OrchestrationError):
    """The transcript does not have the shape the graph expects."""


class EmptyToolCallsError(ProtocolViolationError):
    """The engine signalled tool use but returned no tool calls."""


class PurchaseFlowError(OrchestrationError):
    """The two-phase purchase sub-flow was entered in an invalid state."""
