# app/dependencies.py
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .core.config import settings
from .db.session import async_session, get_db
from .schemas.model import ModelConfig
from .services.chat import ChatService
from .services.llm.base import BaseLLMService
from .services.transcript import TranscriptService


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_session


def get_llm_service(request: Request) -> BaseLLMService:
    return request.app.state.llm_service


def get_model_config() -> ModelConfig:
    return ModelConfig.from_settings(settings)


async def get_transcript_service(
        db: AsyncSession = Depends(get_db)
) -> TranscriptService:
    return TranscriptService(db)


async def get_chat_service(
        session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
        llm_service: BaseLLMService = Depends(get_llm_service),
        model_config: ModelConfig = Depends(get_model_config)
) -> ChatService:
    return ChatService(session_factory, llm_service, model_config, settings.SYSTEM_PROMPT)
