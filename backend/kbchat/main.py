"""kbchat API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map KbChatError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers and request logging live in api/ and are registered here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kbchat import __version__
from kbchat.api.error_handlers import register_error_handlers
from kbchat.api.request_context import REQUEST_ID_HEADER, register_request_logging
from kbchat.api.routes import conversations, health, naming
from kbchat.config import get_settings
from kbchat.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"kbchat API started ({settings.environment})")
    yield
    logger.info("kbchat API shutting down")


app = FastAPI(title="kbchat API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)
register_request_logging(app)

app.include_router(health.router)
app.include_router(naming.router)
app.include_router(conversations.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point — serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("kbchat.main:app", host=settings.host, port=settings.port)
