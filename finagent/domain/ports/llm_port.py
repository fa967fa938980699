"""
Port (interface) for language model providers.
Infrastructure adapters (e.g. BedrockChatAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILanguageModel(ABC):
    @abstractmethod
    async def ainvoke(self, messages: list[Any]) -> Any:
        """Invoke the model and return a response message.

        For a structured-output model (see with_structured_output) the response
        is an instance of the bound schema.
        """
        ...

    @abstractmethod
    def bind_tools(self, tools: list) -> "ILanguageModel":
        """Return a new model instance with the given tools bound for function-calling."""
        ...

    @abstractmethod
    def with_structured_output(self, schema: type) -> "ILanguageModel":
        """Return a new model instance whose responses conform to *schema*."""
        ...
