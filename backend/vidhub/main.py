"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from vidhub import runtime
from vidhub.api.routers.users import router as users_router
from vidhub.auth.http import ApiError
from vidhub.auth.http import handle_api_error
from vidhub.auth.http import handle_http_exception
from vidhub.auth.http import handle_unexpected_exception
from vidhub.auth.http import handle_validation_exception
from vidhub.core.config import Settings
from vidhub.core.config import load_settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app; settings are loaded here once and handed to the runtime."""
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        runtime.startup(settings)
        yield

    app = FastAPI(title="vidhub", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)

    app.include_router(users_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
