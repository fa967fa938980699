"""
FastAPI entry point: local development server.

The agent is built on first use through the get_run_use_case dependency, so
tests can override it without touching AWS or any API.

Run locally:
    uvicorn finagent.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import json
import logging
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from finagent.application.use_cases.run_agent import RunAgentUseCase
from finagent.domain.errors import OrchestrationError
from finagent.infrastructure.config import Settings
from finagent.infrastructure.entrypoints.container import build_run_agent_use_case
from finagent.infrastructure.logging_config import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_run_use_case() -> RunAgentUseCase:
    """FastAPI dependency: the process-wide agent, wired once."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return build_run_agent_use_case(settings)


app = FastAPI(title="Financial Analysis Agent API")


class QueryRequest(BaseModel):
    prompt: str
    session_id: Optional[str] = None
    user_id: Optional[str] = None


@app.post("/query")
async def query_agent(
    body: QueryRequest,
    run_use_case: RunAgentUseCase = Depends(get_run_use_case),
):
    """Stream the agent's response as Server-Sent Events."""

    async def event_stream():
        try:
            async for event in run_use_case.execute(
                query=body.prompt,
                user_id=body.user_id,
                session_id=body.session_id,
            ):
                yield f"data: {json.dumps(event, default=str)}\n\n"
        except OrchestrationError as exc:
            logger.error("Agent turn aborted: %s", exc)
            error_event = {"node": None, "content": str(exc), "type": "error"}
            yield f"data: {json.dumps(error_event)}\n\n"
        yield "data: [DONE]\n\n"

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@app.get("/health")
async def health():
    return {"status": "ok"}
