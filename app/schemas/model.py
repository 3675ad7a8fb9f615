# app/schemas/model.py
from enum import Enum

from pydantic import BaseModel, Field

from ..core.config import Settings


class Provider(str, Enum):
    OPENAI = "openai"
    CLAUDE = "claude"
    OLLAMA = "ollama"


DEFAULT_BASE_URLS = {
    Provider.OPENAI: "https://openrouter.ai/api/v1",
    Provider.CLAUDE: "https://api.anthropic.com",
    Provider.OLLAMA: "http://localhost:11434",
}


class ModelConfig(BaseModel):
    provider: Provider = Provider.OPENAI
    model: str
    temperature: float = Field(0.7, ge=0, le=2)
    maxTokens: int = Field(500, gt=0)
    baseUrl: str
    apiKey: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelConfig":
        """Generation config from settings; the endpoint defaults per provider."""
        provider = Provider(settings.LLM_PROVIDER)
        return cls(
            provider=provider,
            model=settings.LLM_MODEL,
            temperature=settings.LLM_TEMPERATURE,
            maxTokens=settings.LLM_MAX_TOKENS,
            baseUrl=settings.LLM_BASE_URL or DEFAULT_BASE_URLS[provider],
            apiKey=settings.LLM_API_KEY,
        )
