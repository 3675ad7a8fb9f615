# app/services/llm/base.py
from abc import ABC, abstractmethod
from typing import AsyncGenerator

from app.schemas.model import ModelConfig


class LLMError(Exception):
    """Base exception for LLM-related errors."""
    pass


class GenerationError(LLMError):
    """Raised when the provider cannot be reached, rejects the request, or breaks off mid-stream."""
    pass


class BaseLLMService(ABC):
    """Base interface for all LLM implementations.

    A service turns one flattened prompt into a lazy stream of text fragments.
    Each call makes a single attempt against the provider.
    """

    def validate(self, prompt: str, config: ModelConfig) -> None:
        if not prompt:
            raise GenerationError("Prompt must not be empty")
        if not config.baseUrl:
            raise GenerationError("Model endpoint must not be empty")

    @abstractmethod
    def generate_stream(
            self,
            prompt: str,
            config: ModelConfig
    ) -> AsyncGenerator[str, None]:
        """Yield the model's output fragments in generation order."""
        pass

    async def aclose(self) -> None:
        """Release any client the service holds."""
        pass
