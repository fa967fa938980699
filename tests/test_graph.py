"""End-to-end tests of the compiled agent graph with a scripted language model."""

import pytest
from fakes import FakeFinancialData, FakeLanguageModel, FakeWebSearch, ai_with_calls, tool_call
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage
from langgraph.checkpoint.memory import MemorySaver

from finagent.application.agent.graph import build_agent_graph
from finagent.application.services.purchase_execution import ExecutePurchaseService
from finagent.application.services.purchase_preparation import PreparePurchaseService
from finagent.application.use_cases.get_price_snapshot import GetPriceSnapshotUseCase
from finagent.application.use_cases.resolve_ticker import ResolveTickerUseCase
from finagent.domain.entities.purchase import PendingPurchase
from finagent.domain.errors import EmptyToolCallsError
from finagent.infrastructure.entrypoints.tool_registry import create_tools
from finagent.infrastructure.trading.simulated_executor import SimulatedTradeExecutor


def _build(responses, checkpointer=None, prices=None):
    provider = FakeFinancialData(prices=prices or {"AAPL": 190.0})
    search = FakeWebSearch(results="Apple Inc. (NASDAQ: AAPL)")
    llm = FakeLanguageModel(responses=responses)
    executor = SimulatedTradeExecutor()
    graph = build_agent_graph(
        llm,
        create_tools(provider, search),
        PreparePurchaseService(
            price_snapshot=GetPriceSnapshotUseCase(provider),
            resolve_ticker=ResolveTickerUseCase(search, llm),
        ),
        ExecutePurchaseService(executor),
        checkpointer=checkpointer,
    )
    return graph, llm, executor


def _ask(text: str) -> dict:
    return {"messages": [HumanMessage(content=text)]}


def _tool_results(messages) -> dict:
    return {m.tool_call_id: m for m in messages if isinstance(m, ToolMessage)}


class TestTermination:
    @pytest.mark.asyncio
    async def test_plain_answer_ends_the_turn(self):
        graph, llm, _ = _build([AIMessage(content="Apple designs consumer electronics.")])

        state = await graph.ainvoke(_ask("What does Apple do?"))

        assert state["messages"][-1].content == "Apple designs consumer electronics."
        assert len(llm.calls) == 1
        assert isinstance(llm.calls[0][0], SystemMessage)

    def test_every_tool_including_purchase_is_bound(self):
        _, llm, _ = _build([])

        names = {t.name for t in llm.bound_tools}

        assert "purchase_stock" in names
        assert "price_snapshot" in names
        assert len(names) == 11

    @pytest.mark.asyncio
    async def test_tool_use_claim_without_calls_aborts_the_turn(self):
        bad = AIMessage(content="", response_metadata={"stop_reason": "tool_use"})
        graph, _, _ = _build([bad])

        with pytest.raises(EmptyToolCallsError):
            await graph.ainvoke(_ask("Price of AAPL?"))


class TestToolLoop:
    @pytest.mark.asyncio
    async def test_tool_result_is_fed_back_to_the_engine(self):
        graph, llm, _ = _build(
            [
                ai_with_calls(tool_call("price_snapshot", {"ticker": "AAPL"}, "c1")),
                AIMessage(content="AAPL trades at 190."),
            ]
        )

        state = await graph.ainvoke(_ask("Price of AAPL?"))

        assert state["messages"][-1].content == "AAPL trades at 190."
        second_prompt = llm.calls[1]
        assert isinstance(second_prompt[-1], ToolMessage)
        assert second_prompt[-1].tool_call_id == "c1"
        assert '"price": 190.0' in second_prompt[-1].content

    @pytest.mark.asyncio
    async def test_unknown_tool_is_answered_with_an_error(self):
        graph, llm, _ = _build(
            [
                ai_with_calls(tool_call("crystal_ball", {}, "c1")),
                AIMessage(content="I cannot do that."),
            ]
        )

        await graph.ainvoke(_ask("Predict the market"))

        result = _tool_results(llm.calls[1])["c1"]
        assert result.status == "error"

    @pytest.mark.asyncio
    async def test_mixed_fan_out_answers_every_call_before_next_step(self):
        """Data calls and a purchase call in one response all get results first."""
        graph, llm, _ = _build(
            [
                ai_with_calls(
                    tool_call("price_snapshot", {"ticker": "AAPL"}, "c1"),
                    tool_call("company_facts", {"ticker": "AAPL"}, "c2"),
                    tool_call(
                        "purchase_stock",
                        {"ticker": "AAPL", "quantity": 5, "maxPurchasePrice": 300},
                        "c3",
                    ),
                ),
                AIMessage(content="Please confirm the purchase of 5 AAPL."),
            ]
        )

        state = await graph.ainvoke(_ask("Tell me about AAPL and buy 5 under 300"))

        assert len(llm.calls) == 2
        assert set(_tool_results(llm.calls[1])) == {"c1", "c2", "c3"}
        assert state["pending_purchase"] == PendingPurchase("AAPL", 5, 300.0, "c3")


class TestPurchaseRoundTrip:
    @pytest.mark.asyncio
    async def test_pending_purchase_survives_into_next_turn_and_executes_once(self):
        graph, llm, executor = _build(
            [
                ai_with_calls(
                    tool_call(
                        "purchase_stock",
                        {"ticker": "AAPL", "quantity": 5, "maxPurchasePrice": 300},
                        "buy_1",
                    )
                ),
                AIMessage(content="Confirm: buy 5 AAPL at up to $300?"),
                ai_with_calls(
                    tool_call(
                        "purchase_stock",
                        {"ticker": "AAPL", "quantity": 5, "maxPurchasePrice": 300},
                        "buy_2",
                    )
                ),
                AIMessage(content="Done."),
            ],
            checkpointer=MemorySaver(),
        )
        config = {"configurable": {"thread_id": "session-1"}}

        await graph.ainvoke(_ask("Buy 5 AAPL, max $300"), config=config)

        snapshot = await graph.aget_state(config)
        assert snapshot.values["pending_purchase"].ticker == "AAPL"
        assert executor.orders == []

        state = await graph.ainvoke(_ask("Yes, confirm"), config=config)

        assert state["pending_purchase"] is None
        assert state["messages"][-1].content == "Done."
        confirmation = _tool_results(state["messages"])["buy_2"]
        assert confirmation.content.startswith("Simulated purchase of 5 of AAPL at <= 300.00")
        assert len(executor.orders) == 1

    @pytest.mark.asyncio
    async def test_price_above_ceiling_leaves_nothing_pending(self):
        graph, llm, executor = _build(
            [
                ai_with_calls(
                    tool_call("purchase_stock", {"ticker": "MSFT", "maxPurchasePrice": 100}, "buy_1")
                ),
                AIMessage(content="MSFT is above your limit."),
            ],
            prices={"MSFT": 150.0},
        )

        state = await graph.ainvoke(_ask("Buy MSFT under 100"))

        assert state.get("pending_purchase") is None
        assert _tool_results(llm.calls[1])["buy_1"].content == "Price 150.00 > max 100.00"
        assert executor.orders == []
