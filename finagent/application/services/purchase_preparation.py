"""
Application service: first phase of the purchase sub-flow.

Turns a purchase_stock tool call into a PendingPurchase, or into a tool result
explaining why it could not. Recoverable conditions (missing ticker,
unresolvable company, price errors, price above the ceiling) never raise; they
are reported back to the engine. Every purchase_stock call id in the message
receives exactly one ToolMessage.
"""

import logging
from typing import NamedTuple, Optional

from langchain_core.messages import AIMessage, ToolMessage
from pydantic import ValidationError

from finagent.application.agent.routing import split_tool_calls
from finagent.application.agent.tool_schemas import PurchaseStockInput
from finagent.application.use_cases.get_price_snapshot import GetPriceSnapshotUseCase
from finagent.application.use_cases.resolve_ticker import ResolveTickerUseCase
from finagent.domain.entities.purchase import PURCHASE_STOCK_TOOL, PendingPurchase
from finagent.domain.errors import (
    FinancialDataError,
    ProtocolViolationError,
    PurchaseFlowError,
)

logger = logging.getLogger(__name__)

MISSING_TARGET_TEXT = "Ticker or company name required."
UNKNOWN_TICKER_TEXT = "Could not determine ticker."
EXTRA_PURCHASE_TEXT = (
    "Only one purchase can be prepared at a time. "
    "Request this purchase again after the current one is confirmed."
)


class _Outcome(NamedTuple):
    content: str
    clarification: Optional[str] = None
    purchase: Optional[PendingPurchase] = None


class PreparePurchaseService:
    def __init__(
        self,
        price_snapshot: GetPriceSnapshotUseCase,
        resolve_ticker: ResolveTickerUseCase,
    ) -> None:
        self._price_snapshot = price_snapshot
        self._resolve_ticker = resolve_ticker

    async def prepare(
        self,
        message: AIMessage,
        pending: Optional[PendingPurchase],
    ) -> dict:
        """Prepare the first purchase request in *message*.

        Returns:
            State delta: ``messages`` (one ToolMessage per purchase_stock call,
            optionally followed by an assistant clarification) and, on success,
            ``pending_purchase``.

        Raises:
            PurchaseFlowError: if a purchase is already pending.
            ProtocolViolationError: if *message* holds no purchase_stock call
                or a call has no id.
        """
        if pending is not None:
            raise PurchaseFlowError("A purchase is already pending confirmation")

        purchase_calls, other_calls = split_tool_calls(message.tool_calls)
        if not purchase_calls:
            raise ProtocolViolationError(f"Expected a {PURCHASE_STOCK_TOOL} tool call")
        for tool_call in purchase_calls:
            if not tool_call.get("id"):
                raise ProtocolViolationError("Purchase stock tool call ID missing")

        primary, *extra = purchase_calls
        outcome = await self._prepare_one(primary)

        messages = [
            ToolMessage(content=outcome.content, tool_call_id=primary["id"], name=PURCHASE_STOCK_TOOL)
        ]
        messages.extend(
            ToolMessage(content=EXTRA_PURCHASE_TEXT, tool_call_id=tc["id"], name=PURCHASE_STOCK_TOOL)
            for tc in extra
        )
        # A trailing assistant message is only safe when no sibling handler is
        # still answering calls from the same response.
        if outcome.clarification and not other_calls:
            messages.append(AIMessage(content=outcome.clarification))

        delta: dict = {"messages": messages}
        if outcome.purchase is not None:
            delta["pending_purchase"] = outcome.purchase
        return delta

    async def _prepare_one(self, tool_call: dict) -> _Outcome:
        try:
            args = PurchaseStockInput.model_validate(tool_call.get("args") or {})
        except ValidationError as exc:
            logger.info("Rejected purchase request arguments: %s", exc)
            return _Outcome(f"Invalid purchase request: {exc}")

        ticker = (args.ticker or "").strip().upper()
        if not ticker:
            if not args.companyName:
                return _Outcome(
                    f"Missing info for {PURCHASE_STOCK_TOOL}: a ticker or company name is required.",
                    clarification=MISSING_TARGET_TEXT,
                )
            ticker = await self._resolve_ticker.execute(args.companyName)
            if not ticker:
                return _Outcome(UNKNOWN_TICKER_TEXT, clarification=UNKNOWN_TICKER_TEXT)

        try:
            snapshot = await self._price_snapshot.execute(ticker)
        except (FinancialDataError, ValueError) as exc:
            logger.warning("Price lookup for %s failed: %s", ticker, exc)
            return _Outcome(f"Price error: {exc}")

        if snapshot.price > args.maxPurchasePrice:
            return _Outcome(f"Price {snapshot.price:.2f} > max {args.maxPurchasePrice:.2f}")

        purchase = PendingPurchase(
            ticker=ticker,
            quantity=args.quantity,
            max_purchase_price=args.maxPurchasePrice,
            tool_call_id=tool_call["id"],
        )
        logger.info(
            "Prepared purchase of %d %s at <= %.2f (current %.2f)",
            purchase.quantity,
            purchase.ticker,
            purchase.max_purchase_price,
            snapshot.price,
        )
        return _Outcome(purchase.to_json(), purchase=purchase)
