# app/core/middleware.py
import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except SQLAlchemyError as e:
            logger.error(f"Database Error on {request.method} {request.url.path}: {str(e)}")
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal Server Error",
                    "details": "Database operation failed"
                }
            )
        except Exception as e:
            logger.exception(f"Unexpected Error on {request.method} {request.url.path}: {str(e)}")
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal Server Error",
                    "details": str(e)
                }
            )
