# app/utils/errors.py
from typing import Any, Dict, Optional

from fastapi import HTTPException


class ErrorCode:
    # Chat related errors
    CHAT_001 = "CHAT_001"  # Chat not found
    CHAT_002 = "CHAT_002"  # No user message in request

    # Model related errors
    MODEL_001 = "MODEL_001"  # Generation failed


class APIError(HTTPException):
    def __init__(
            self,
            code: str,
            message: str,
            status_code: int = 400,
            details: Optional[Any] = None
    ):
        self.error_code = code
        self.error_message = message
        self.error_details = details
        super().__init__(status_code=status_code, detail=message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error_message}
        if self.error_details is not None:
            body["details"] = self.error_details
        return body


class ChatNotFoundError(APIError):
    def __init__(self, chat_id: int | None = None):
        self.chat_id = chat_id
        super().__init__(ErrorCode.CHAT_001, "Chat not found", 404)


class NoUserMessageError(APIError):
    def __init__(self):
        super().__init__(ErrorCode.CHAT_002, "No user message provided", 400)


class AIServiceError(APIError):
    def __init__(self, details: Optional[str] = None):
        super().__init__(ErrorCode.MODEL_001, "AI Service Error", 500, details)
