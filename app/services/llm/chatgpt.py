# app/services/llm/chatgpt.py
import logging
from typing import AsyncGenerator, Optional

import httpx
from openai import AsyncOpenAI, OpenAIError

from app.schemas.model import ModelConfig
from .base import BaseLLMService, GenerationError

logger = logging.getLogger(__name__)


class ChatGPTService(BaseLLMService):
    """Any OpenAI-compatible chat completions endpoint (OpenAI, OpenRouter, ...)."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def generate_stream(
            self,
            prompt: str,
            config: ModelConfig
    ) -> AsyncGenerator[str, None]:
        self.validate(prompt, config)

        http_client = httpx.AsyncClient(transport=self.transport) if self.transport else None
        try:
            async with AsyncOpenAI(
                    api_key=config.apiKey or "",
                    base_url=config.baseUrl,
                    max_retries=0,
                    http_client=http_client
            ) as client:
                response = await client.chat.completions.create(
                    model=config.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=config.temperature,
                    max_tokens=config.maxTokens,
                    stream=True
                )
                async for chunk in response:
                    if chunk.choices and chunk.choices[0].delta.content:
                        yield chunk.choices[0].delta.content
        except (OpenAIError, httpx.HTTPError) as e:
            logger.error(f"OpenAI-compatible stream failed: {str(e)}")
            raise GenerationError(f"Stream generation failed: {str(e)}") from e
