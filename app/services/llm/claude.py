# app/services/llm/claude.py
import logging
from typing import AsyncGenerator, Optional

import httpx
from anthropic import AnthropicError, AsyncAnthropic

from app.schemas.model import ModelConfig
from .base import BaseLLMService, GenerationError

logger = logging.getLogger(__name__)


class ClaudeService(BaseLLMService):
    """Anthropic Messages API."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def generate_stream(
            self,
            prompt: str,
            config: ModelConfig
    ) -> AsyncGenerator[str, None]:
        self.validate(prompt, config)
        if not config.apiKey:
            raise GenerationError("Anthropic API key not provided")

        http_client = httpx.AsyncClient(transport=self.transport) if self.transport else None
        try:
            async with AsyncAnthropic(
                    api_key=config.apiKey,
                    base_url=config.baseUrl,
                    max_retries=0,
                    http_client=http_client
            ) as client:
                async with client.messages.stream(
                        model=config.model,
                        messages=[{"role": "user", "content": prompt}],
                        temperature=min(config.temperature, 1.0),
                        max_tokens=config.maxTokens
                ) as stream:
                    async for text in stream.text_stream:
                        if text:
                            yield text
        except (AnthropicError, httpx.HTTPError) as e:
            logger.error(f"Claude stream failed: {str(e)}")
            raise GenerationError(f"Stream generation failed: {str(e)}") from e
