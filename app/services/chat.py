# app/services/chat.py
import asyncio
import json
import logging
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .llm.base import BaseLLMService
from .transcript import TranscriptService
from ..schemas.chat import ChatRequest, HistoryEntry, IncomingMessage, Role, extract_text
from ..schemas.model import ModelConfig
from ..utils.errors import NoUserMessageError

logger = logging.getLogger(__name__)

DONE_EVENT = "data: [DONE]\n\n"


def format_event(payload: dict) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False, separators=(',', ':'))}\n\n"


def text_delta_event(fragment: str) -> str:
    return format_event({"type": "text-delta", "textDelta": fragment})


def error_event(details: str) -> str:
    return format_event({"type": "error", "error": "AI Service Error", "details": details})


def build_context(history: list[HistoryEntry], preamble: str) -> str:
    """Flatten a chat history into the single prompt sent to the model."""
    turns = "".join(f"{entry.role.value}: {entry.content}\n\n" for entry in history)
    return f"{preamble}\n\n{turns}assistant:"


def latest_user_text(messages: list[IncomingMessage]) -> str:
    for message in reversed(messages):
        if message.role == Role.USER.value:
            return extract_text(message)
    raise NoUserMessageError()


def chat_title(messages: list[IncomingMessage], max_length: int, default: str) -> str:
    """Title for a new chat: the first user message, truncated."""
    for message in messages:
        if message.role == Role.USER.value:
            return extract_text(message)[:max_length] or default
    return default


class ReplyStream:
    """A single exchange with the model for one chat.

    ``open`` records the user's message, rebuilds the context from the store
    and pulls the first fragment, so any failure up to that point happens
    before a response has started. ``events`` then relays the fragments as
    server-sent events and records the reply. The stream owns its session
    and releases it whichever way the exchange ends.
    """

    def __init__(
            self,
            chat_id: int,
            session: AsyncSession,
            llm_service: BaseLLMService,
            model_config: ModelConfig,
            system_prompt: str
    ):
        self.chat_id = chat_id
        self.session = session
        self.llm = llm_service
        self.model_config = model_config
        self.system_prompt = system_prompt
        self.transcript = TranscriptService(session)
        self._fragments: AsyncGenerator[str, None] | None = None
        self._first: str | None = None
        self._closed = False

    async def open(self, user_text: str) -> None:
        try:
            await self.transcript.append_message(self.chat_id, Role.USER, user_text)
            history = await self.transcript.list_messages(self.chat_id)
            context = build_context(history, self.system_prompt)
            logger.debug(f"Context for chat {self.chat_id}: {context}")

            self._fragments = self.llm.generate_stream(context, self.model_config)
            self._first = await anext(self._fragments, None)
        except Exception:
            await self.aclose()
            raise

    async def events(self) -> AsyncGenerator[str, None]:
        reply = []
        try:
            if self._first is not None:
                reply.append(self._first)
                yield text_delta_event(self._first)
                async for fragment in self._fragments:
                    reply.append(fragment)
                    yield text_delta_event(fragment)

            yield DONE_EVENT

            full_response = "".join(reply)
            logger.info(f"Stream completed for chat {self.chat_id} ({len(full_response)} chars)")
            logger.debug(f"Response preview: {full_response[:100]}")

            if full_response:
                await self.transcript.append_message(self.chat_id, Role.ASSISTANT, full_response)
            await self.transcript.touch_chat(self.chat_id)
        except asyncio.CancelledError:
            logger.warning(f"Client disconnected from chat {self.chat_id} after {len(reply)} fragments")
            raise
        except SQLAlchemyError as e:
            logger.error(f"Database error while finishing chat {self.chat_id}: {str(e)}")
            yield error_event("Database operation failed")
        except Exception as e:
            logger.error(f"Error during AI streaming for chat {self.chat_id}: {str(e)}")
            yield error_event(str(e))
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._fragments is not None:
                await self._fragments.aclose()
        finally:
            await self.session.close()


class ChatService:
    def __init__(
            self,
            session_factory: async_sessionmaker[AsyncSession],
            llm_service: BaseLLMService,
            model_config: ModelConfig,
            system_prompt: str
    ):
        self.session_factory = session_factory
        self.llm = llm_service
        self.model_config = model_config
        self.system_prompt = system_prompt

    async def open_reply(self, chat_id: int, request: ChatRequest) -> ReplyStream:
        """Start answering the latest user message of ``request`` in an existing chat."""
        user_text = latest_user_text(request.messages)

        reply = ReplyStream(
            chat_id,
            self.session_factory(),
            self.llm,
            self.model_config,
            self.system_prompt
        )
        await reply.open(user_text)
        logger.info(f"Streaming reply for chat {chat_id}")
        return reply
