# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import chat, chats
from .core.config import settings
from .core.middleware import ErrorHandlingMiddleware
from .db.init_db import init_db, verify_db_connection
from .db.session import engine
from .schemas.model import ModelConfig
from .services.llm import create_llm_service
from .utils.errors import APIError

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Setup database
    await verify_db_connection(engine)
    await init_db(engine, reset=settings.DB_RESET_ON_STARTUP)

    # Setup services
    model_config = ModelConfig.from_settings(settings)
    llm_service = create_llm_service(model_config)
    app.state.llm_service = llm_service
    logger.info(f"Using {model_config.provider.value} model {model_config.model} at {model_config.baseUrl}")

    yield

    await llm_service.aclose()
    await engine.dispose()


app = FastAPI(lifespan=lifespan)

app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Chat-Id"],
)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


# Include routers
app.include_router(chats.router)
app.include_router(chat.router)
