# app/api/chat.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ..core.config import settings
from ..dependencies import get_chat_service, get_transcript_service
from ..schemas.chat import ChatRequest
from ..services.chat import ChatService, chat_title, latest_user_text
from ..services.llm.base import GenerationError
from ..services.transcript import TranscriptService
from ..utils.errors import AIServiceError, ChatNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


async def _stream_reply(chat_service: ChatService, chat_id: int, request: ChatRequest) -> StreamingResponse:
    try:
        reply = await chat_service.open_reply(chat_id, request)
    except GenerationError as e:
        logger.error(f"AI service failed before streaming chat {chat_id}: {str(e)}")
        raise AIServiceError(str(e))

    return StreamingResponse(
        reply.events(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Chat-Id": str(chat_id),
        }
    )


@router.post("")
async def start_chat(
        request: ChatRequest,
        transcript: TranscriptService = Depends(get_transcript_service),
        chat_service: ChatService = Depends(get_chat_service)
) -> StreamingResponse:
    logger.info(f"POST /chat with {len(request.messages)} messages")
    latest_user_text(request.messages)

    title = chat_title(request.messages, settings.TITLE_MAX_LENGTH, settings.DEFAULT_CHAT_TITLE)
    chat = await transcript.create_chat(title)
    return await _stream_reply(chat_service, chat.id, request)


@router.post("/{chat_id}")
async def send_message(
        chat_id: int,
        request: ChatRequest,
        transcript: TranscriptService = Depends(get_transcript_service),
        chat_service: ChatService = Depends(get_chat_service)
) -> StreamingResponse:
    logger.info(f"POST /chat/{chat_id} with {len(request.messages)} messages")
    if not await transcript.exists(chat_id):
        logger.warning(f"Chat {chat_id} not found")
        raise ChatNotFoundError(chat_id)
    return await _stream_reply(chat_service, chat_id, request)
