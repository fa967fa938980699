"""
Application service: second phase of the purchase sub-flow.

Executes the pending purchase exactly once and clears it. The confirmation
answers the assistant message that triggered execution: its purchase_stock
call if it has one, otherwise its first call. Any other call in that message
is answered with a deferral notice so no call id is left without a result.
"""

import logging
from typing import Optional

from langchain_core.messages import AIMessage, ToolMessage

from finagent.domain.entities.purchase import PURCHASE_STOCK_TOOL, PendingPurchase
from finagent.domain.errors import ProtocolViolationError, PurchaseFlowError
from finagent.domain.ports.trade_executor_port import ITradeExecutor

logger = logging.getLogger(__name__)

DEFERRED_TEXT = (
    "Deferred: a pending purchase confirmation took priority over this call. "
    "Request it again if it is still needed."
)


def confirmation_text(purchase: PendingPurchase, order_ref: str) -> str:
    return (
        f"Simulated purchase of {purchase.quantity} of {purchase.ticker} "
        f"at <= {purchase.max_purchase_price:.2f} (order {order_ref})."
    )


class ExecutePurchaseService:
    def __init__(self, executor: ITradeExecutor) -> None:
        self._executor = executor

    def execute(self, message: AIMessage, pending: Optional[PendingPurchase]) -> dict:
        """Execute *pending* and answer every tool call in *message*.

        Returns:
            State delta with the ToolMessages and ``pending_purchase`` cleared.

        Raises:
            PurchaseFlowError: if no purchase is pending.
            ProtocolViolationError: if *message* has no tool calls or a call has no id.
        """
        if pending is None:
            raise PurchaseFlowError("Missing purchase details")
        if not message.tool_calls:
            raise ProtocolViolationError("Cannot find tool_call_id for purchase response")
        for tool_call in message.tool_calls:
            if not tool_call.get("id"):
                raise ProtocolViolationError(f"Tool call {tool_call['name']!r} has no id")

        binding = next(
            (tc for tc in message.tool_calls if tc["name"] == PURCHASE_STOCK_TOOL),
            message.tool_calls[0],
        )

        order_ref = self._executor.execute(pending)
        logger.info(
            "Executed purchase %s prepared by call %s; confirming on call %s",
            order_ref,
            pending.tool_call_id,
            binding["id"],
        )

        messages = []
        for tool_call in message.tool_calls:
            if tool_call is binding:
                content = confirmation_text(pending, order_ref)
            else:
                content = DEFERRED_TEXT
            messages.append(
                ToolMessage(content=content, tool_call_id=tool_call["id"], name=tool_call["name"])
            )
        return {"messages": messages, "pending_purchase": None}
