# app/services/transcript.py
import logging

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from ..core.config import settings
from ..db.models import ChatModel, MessageModel, utcnow
from ..schemas.chat import Chat, ChatSummary, HistoryEntry, Message, MessagePart, Role
from ..utils.errors import ChatNotFoundError

logger = logging.getLogger(__name__)


def _summary(chat: ChatModel) -> ChatSummary:
    return ChatSummary(
        id=chat.id,
        title=chat.title,
        created_at=chat.created_at,
        updated_at=chat.updated_at
    )


class TranscriptService:
    """Durable, ordered chat history on top of the chats/messages tables.

    Every write commits before returning. Storage errors roll the session back
    and propagate unchanged.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self):
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def _get(self, chat_id: int) -> ChatModel:
        result = await self.db.execute(select(ChatModel).filter(ChatModel.id == chat_id))
        chat = result.scalar_one_or_none()
        if not chat:
            raise ChatNotFoundError(chat_id)
        return chat

    async def list_chats(self) -> list[ChatSummary]:
        result = await self.db.execute(
            select(ChatModel).order_by(ChatModel.updated_at.desc(), ChatModel.id.desc())
        )
        return [_summary(chat) for chat in result.scalars().all()]

    async def get_chat(self, chat_id: int) -> Chat:
        chat = await self._get(chat_id)
        result = await self.db.execute(
            select(MessageModel)
            .filter(MessageModel.chat_id == chat_id)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        messages = [
            Message(
                id=m.id,
                role=Role(m.role),
                content=m.content,
                parts=[MessagePart(type="text", text=m.content)],
                created_at=m.created_at
            ) for m in result.scalars().all()
        ]
        return Chat(**_summary(chat).model_dump(), messages=messages)

    async def exists(self, chat_id: int) -> bool:
        result = await self.db.execute(select(ChatModel.id).filter(ChatModel.id == chat_id))
        return result.scalar_one_or_none() is not None

    async def create_chat(self, title: str | None = None) -> ChatSummary:
        now = utcnow()
        chat = ChatModel(
            title=title if title and title.strip() else settings.DEFAULT_CHAT_TITLE,
            created_at=now,
            updated_at=now
        )
        self.db.add(chat)
        await self._commit()
        logger.info(f"Created chat {chat.id} titled {chat.title!r}")
        return _summary(chat)

    async def update_chat_title(self, chat_id: int, title: str) -> ChatSummary:
        chat = await self._get(chat_id)
        chat.title = title
        chat.updated_at = utcnow()
        await self._commit()
        return _summary(chat)

    async def delete_chat(self, chat_id: int) -> None:
        result = await self.db.execute(select(ChatModel).filter(ChatModel.id == chat_id))
        chat = result.scalar_one_or_none()
        if chat:
            await self.db.delete(chat)
            await self._commit()
            logger.info(f"Deleted chat {chat_id}")

    async def append_message(self, chat_id: int, role: Role, content: str) -> int:
        message = MessageModel(chat_id=chat_id, role=Role(role).value, content=content, created_at=utcnow())
        self.db.add(message)
        await self._commit()
        logger.debug(f"Stored {message.role} message {message.id} in chat {chat_id}")
        return message.id

    async def list_messages(self, chat_id: int) -> list[HistoryEntry]:
        await self._get(chat_id)
        result = await self.db.execute(
            select(MessageModel.role, MessageModel.content)
            .filter(MessageModel.chat_id == chat_id)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        return [HistoryEntry(role=Role(role), content=content) for role, content in result.all()]

    async def touch_chat(self, chat_id: int) -> None:
        await self.db.execute(
            update(ChatModel)
            .where(ChatModel.id == chat_id)
            .values(updated_at=utcnow())
        )
        await self._commit()
