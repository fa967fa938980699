"""
Process configuration read from environment variables.

Entrypoints call load_dotenv() before Settings.from_env(), so a local .env file
works the same way as real environment variables.
"""

import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

DEFAULT_FINANCIAL_DATASETS_URL = "https://api.financialdatasets.ai"
DEFAULT_BEDROCK_MODEL_ID = "us.amazon.nova-pro-v1:0"

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off", "")

T = TypeVar("T", int, float)


def _number(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be numeric, got {raw!r}")


def _flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    if raw.lower() in _TRUE:
        return True
    if raw.lower() in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    financial_datasets_api_key: Optional[str]
    financial_datasets_base_url: str
    financial_datasets_timeout: float
    web_search_max_results: int
    bedrock_model_id: str
    aws_region: str
    recursion_limit: int
    langfuse_enabled: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment.

        Raises:
            ValueError: if a numeric or boolean variable cannot be parsed.
        """
        langfuse_keys = bool(os.environ.get("LANGFUSE_PUBLIC_KEY")) and bool(
            os.environ.get("LANGFUSE_SECRET_KEY")
        )
        return cls(
            financial_datasets_api_key=os.environ.get("FINANCIAL_DATASETS_API_KEY"),
            financial_datasets_base_url=os.environ.get(
                "FINANCIAL_DATASETS_BASE_URL", DEFAULT_FINANCIAL_DATASETS_URL
            ),
            financial_datasets_timeout=_number("FINANCIAL_DATASETS_TIMEOUT", 30.0, float),
            web_search_max_results=_number("WEB_SEARCH_MAX_RESULTS", 2, int),
            bedrock_model_id=os.environ.get("BEDROCK_MODEL_ID", DEFAULT_BEDROCK_MODEL_ID),
            aws_region=os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
            recursion_limit=_number("AGENT_RECURSION_LIMIT", 25, int),
            langfuse_enabled=_flag("LANGFUSE_ENABLED", True) and langfuse_keys,
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
