# app/services/llm/ollama.py
import json
import logging
from typing import AsyncGenerator, Optional

import httpx

from app.schemas.model import ModelConfig
from .base import BaseLLMService, GenerationError

logger = logging.getLogger(__name__)


class OllamaService(BaseLLMService):
    def __init__(
            self,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout = timeout
        self.transport = transport

    async def generate_stream(
            self,
            prompt: str,
            config: ModelConfig
    ) -> AsyncGenerator[str, None]:
        self.validate(prompt, config)

        try:
            async with httpx.AsyncClient(
                    base_url=config.baseUrl,
                    timeout=self.timeout,
                    transport=self.transport
            ) as client:
                async with client.stream(
                        "POST",
                        "/api/chat",
                        json={
                            "model": config.model,
                            "messages": [{"role": "user", "content": prompt}],
                            "stream": True,
                            "options": {
                                "temperature": config.temperature,
                                "num_predict": config.maxTokens
                            }
                        }
                ) as response:
                    if response.status_code != 200:
                        body = (await response.aread()).decode(errors="replace")
                        raise GenerationError(f"Ollama error: {response.status_code} - {body}")

                    async for line in response.aiter_lines():
                        if not line:
                            continue
                        try:
                            data = json.loads(line)
                        except json.JSONDecodeError as e:
                            raise GenerationError(f"Malformed Ollama stream line: {line!r}") from e
                        if data.get("error"):
                            raise GenerationError(f"Ollama error: {data['error']}")
                        content = (data.get("message") or {}).get("content")
                        if content:
                            yield content
                        if data.get("done"):
                            return
        except httpx.HTTPError as e:
            logger.error(f"Error communicating with Ollama: {str(e)}")
            raise GenerationError(f"Stream generation failed: {str(e)}") from e
