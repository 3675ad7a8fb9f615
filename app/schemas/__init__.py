# app/schemas/__init__.py
from .chat import (
    Chat,
    ChatCreate,
    ChatRequest,
    ChatSummary,
    ChatUpdate,
    HistoryEntry,
    Message,
    MessagePart,
    Role,
    extract_text,
)

from .model import (
    ModelConfig,
    Provider,
)

__all__ = [
    'Chat',
    'ChatCreate',
    'ChatRequest',
    'ChatSummary',
    'ChatUpdate',
    'HistoryEntry',
    'Message',
    'MessagePart',
    'Role',
    'extract_text',
    'ModelConfig',
    'Provider',
]
