# app/api/chats.py
import logging

from fastapi import APIRouter, Depends, Response, status

from ..dependencies import get_transcript_service
from ..schemas.chat import Chat, ChatCreate, ChatSummary, ChatUpdate
from ..services.transcript import TranscriptService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chats", tags=["chats"])


@router.get("")
async def list_chats(
        transcript: TranscriptService = Depends(get_transcript_service)
) -> list[ChatSummary]:
    logger.info("GET /chats")
    return await transcript.list_chats()


@router.get("/{chat_id}")
async def get_chat(
        chat_id: int,
        transcript: TranscriptService = Depends(get_transcript_service)
) -> Chat:
    logger.info(f"GET /chats/{chat_id}")
    return await transcript.get_chat(chat_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_chat(
        payload: ChatCreate | None = None,
        transcript: TranscriptService = Depends(get_transcript_service)
) -> ChatSummary:
    logger.info("POST /chats")
    return await transcript.create_chat(payload.title if payload else None)


@router.put("/{chat_id}")
async def update_chat(
        chat_id: int,
        payload: ChatUpdate,
        transcript: TranscriptService = Depends(get_transcript_service)
) -> ChatSummary:
    logger.info(f"PUT /chats/{chat_id}")
    return await transcript.update_chat_title(chat_id, payload.title)


@router.delete("/{chat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat(
        chat_id: int,
        transcript: TranscriptService = Depends(get_transcript_service)
) -> Response:
    logger.info(f"DELETE /chats/{chat_id}")
    await transcript.delete_chat(chat_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
