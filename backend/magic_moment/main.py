"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from magic_moment.config import settings
from magic_moment.errors import MagicMomentError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.magic_moment_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


async def _domain_error_handler(request: Request, exc: MagicMomentError) -> JSONResponse:
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Magic Moment",
        description="Smart-crop geometry and text-overlay compositing for postcards",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MagicMomentError, _domain_error_handler)

    from magic_moment.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
