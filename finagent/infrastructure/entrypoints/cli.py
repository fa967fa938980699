"""
CLI entry point: interactive chat with the agent in one session.

    export FINANCIAL_DATASETS_API_KEY=... TAVILY_API_KEY=...
    python -m finagent.infrastructure.entrypoints.cli
"""

import asyncio
import uuid

from dotenv import load_dotenv

from finagent.application.use_cases.run_agent import RunAgentUseCase
from finagent.domain.errors import OrchestrationError
from finagent.infrastructure.config import Settings
from finagent.infrastructure.entrypoints.container import build_run_agent_use_case
from finagent.infrastructure.logging_config import configure_logging

EXIT_COMMANDS = {"exit", "quit"}


async def chat(run_use_case: RunAgentUseCase, session_id: str) -> None:
    while True:
        try:
            prompt = (await asyncio.to_thread(input, "\nyou> ")).strip()
        except EOFError:
            return
        if not prompt:
            continue
        if prompt.lower() in EXIT_COMMANDS:
            return

        try:
            async for event in run_use_case.execute(query=prompt, session_id=session_id):
                if event.get("pending_purchase"):
                    print(f"  [pending purchase] {event['pending_purchase']}")
                if event["node"] == "llm" and event["content"]:
                    print(f"agent> {event['content']}")
                elif event["type"] == "ToolMessage":
                    print(f"  [{event['node']}] {str(event['content'])[:200]}")
        except OrchestrationError as exc:
            print(f"error> {exc}")


def main() -> None:
    load_dotenv()
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    run_use_case = build_run_agent_use_case(settings)
    session_id = str(uuid.uuid4())
    print(f"Session {session_id}. Type 'exit' to quit.")
    asyncio.run(chat(run_use_case, session_id))


if __name__ == "__main__":
    main()
