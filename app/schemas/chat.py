# app/schemas/chat.py
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import BaseModel, Discriminator, Tag


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class MessagePart(BaseModel):
    type: str = "text"
    text: str | None = None


class Message(BaseModel):
    id: int
    role: Role
    content: str
    parts: list[MessagePart]
    created_at: datetime


class HistoryEntry(BaseModel):
    role: Role
    content: str


class ChatSummary(BaseModel):
    id: int
    title: str
    created_at: datetime
    updated_at: datetime


class Chat(ChatSummary):
    messages: list[Message]


class ChatCreate(BaseModel):
    title: str | None = None


class ChatUpdate(BaseModel):
    title: str


class PartsMessage(BaseModel):
    """A client message carrying structured parts, possibly alongside a flat fallback."""
    role: str = ""
    parts: list[MessagePart]
    content: str | None = None


class FlatMessage(BaseModel):
    """A client message carrying a single content string, or nothing at all."""
    role: str = ""
    content: str | None = None


def message_kind(value: Any) -> str:
    parts = value.get("parts") if isinstance(value, dict) else getattr(value, "parts", None)
    return "flat" if parts is None else "parts"


IncomingMessage = Annotated[
    Union[
        Annotated[PartsMessage, Tag("parts")],
        Annotated[FlatMessage, Tag("flat")],
    ],
    Discriminator(message_kind),
]


class ChatRequest(BaseModel):
    messages: list[IncomingMessage] = []


def extract_text(message: PartsMessage | FlatMessage) -> str:
    """Plain text of a client message.

    The concatenated text parts win when any of them is non-empty; otherwise
    the flat ``content`` field is used.
    """
    if isinstance(message, PartsMessage):
        text = "".join(p.text or "" for p in message.parts if p.type == "text")
        if text:
            return text
    return message.content or ""
