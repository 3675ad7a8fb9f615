# app/services/llm/factory.py
from app.schemas.model import ModelConfig, Provider
from app.services.llm.base import BaseLLMService
from app.services.llm.chatgpt import ChatGPTService
from app.services.llm.claude import ClaudeService
from app.services.llm.ollama import OllamaService


def create_llm_service(config: ModelConfig) -> BaseLLMService:
    """Create the LLM service matching the configured provider"""
    if config.provider == Provider.OPENAI:
        return ChatGPTService()
    elif config.provider == Provider.CLAUDE:
        return ClaudeService()
    elif config.provider == Provider.OLLAMA:
        return OllamaService()
    raise ValueError(f"Unsupported provider: {config.provider}")
