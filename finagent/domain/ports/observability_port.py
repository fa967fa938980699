"""
Port (interface) for observability / tracing handlers.
Infrastructure adapters (e.g. LangfuseObservabilityHandler) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class IObservabilityHandler(ABC):
    @abstractmethod
    def as_callback(self) -> Optional[Any]:
        """Return the framework-native callback object, or None when tracing is off."""
        ...

    @abstractmethod
    def trace_metadata(self, user_id: Optional[str], session_id: Optional[str]) -> dict:
        """Return run metadata that associates a trace with a user and session."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Flush any buffered telemetry data to the remote backend."""
        ...
