"""
Application service: execute the non-purchase tool calls of one assistant message.

Calls run concurrently and are joined before returning, so the graph never
re-enters the reasoning step with an outstanding call. Dispatch never raises:
unknown tools, invalid arguments and tool failures all come back as error-text
ToolMessages tagged with the originating call id, so the engine can reason
about them like any other tool output.
"""

import asyncio
import json
import logging
from typing import Any

from langchain_core.messages import ToolMessage
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


def validate_arguments(tool: Any, args: dict) -> dict:
    """Validate *args* against the tool's schema and fill in declared defaults.

    Raises:
        ValidationError: if required fields are missing or mistyped.
    """
    schema = getattr(tool, "args_schema", None)
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return schema.model_validate(args).model_dump()
    return dict(args)


def _as_text(output: Any) -> str:
    if isinstance(output, str):
        return output
    return json.dumps(output, default=str)


class ToolDispatcher:
    def __init__(self, tools: list) -> None:
        self._tools_by_name = {t.name: t for t in tools}

    async def dispatch(self, tool_calls: list[dict]) -> list[ToolMessage]:
        """Run every call in *tool_calls* and return one ToolMessage per call."""
        results = await asyncio.gather(*(self._run(tool_call) for tool_call in tool_calls))
        return list(results)

    async def _run(self, tool_call: dict) -> ToolMessage:
        name = tool_call["name"]
        call_id = tool_call["id"]

        tool = self._tools_by_name.get(name)
        if tool is None:
            logger.warning("Engine requested unknown tool %r", name)
            return self._error(call_id, name, f"Error: unknown tool '{name}'.")

        try:
            args = validate_arguments(tool, tool_call.get("args") or {})
        except ValidationError as exc:
            logger.warning("Invalid arguments for %s: %s", name, exc)
            return self._error(call_id, name, f"Error: invalid arguments for {name}: {exc}")

        try:
            output = await tool.ainvoke(args)
        except Exception as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            return self._error(call_id, name, f"Error: {name} failed: {exc}")

        return ToolMessage(content=_as_text(output), tool_call_id=call_id, name=name)

    @staticmethod
    def _error(call_id: str, name: str, text: str) -> ToolMessage:
        return ToolMessage(content=text, tool_call_id=call_id, name=name, status="error")
