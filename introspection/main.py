"""Introspection API."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy import text

from core.observability.observability import (
    RequestContextMiddleware,
    setup_structlog_json,
)
from core.utils.logging import get_logger
from introspection.config import settings

from .deps import db_manager
from .routers.introspect import router as introspect_router

logger = get_logger(__name__)

root_path = settings.APP_ROOT_PATH


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup/shutdown hooks."""
    setup_structlog_json()
    db_manager.init(settings.DB_URL)
    logger.info("introspection.startup", issuer=settings.OIDC_ISSUER)
    yield
    await db_manager.close()


app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    openapi_url=f"{root_path}{settings.OPENAPI_URL}",
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
    root_path=root_path,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
)
app.add_middleware(RequestContextMiddleware)

app.include_router(introspect_router)


@app.get("/healthz")
async def health_check():
    """Health check; verifies the token store answers."""
    try:
        async with db_manager.session() as session:
            await session.execute(text("SELECT 1"))
        return ORJSONResponse(content={"status": "ok"}, status_code=status.HTTP_200_OK)
    except Exception:
        logger.exception("health_check_failed")
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "fail"},
        )


@app.exception_handler(Exception)
async def log_unhandled_exception(request: Request, ex: Exception):
    """Log unhandled exceptions with request context; the body stays empty."""
    logger.exception(
        "unhandled_exception",
        method=request.method,
        path=request.url.path,
    )
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
