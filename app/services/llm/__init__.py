# app/services/llm/__init__.py
from .base import BaseLLMService, GenerationError, LLMError
from .factory import create_llm_service

__all__ = [
    'BaseLLMService',
    'GenerationError',
    'LLMError',
    'create_llm_service',
]
