"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_api.api import admin_logs, analyze, chatbot
from portfolio_api.api.deps import Services, build_services
from portfolio_api.config import AppConfig, load_config
from portfolio_api.errors import PortfolioApiError

logger = logging.getLogger(__name__)


async def _portfolio_error_handler(request: Request, exc: PortfolioApiError) -> JSONResponse:
    content = {"error": exc.error}
    if exc.message:
        content["message"] = exc.message
    return JSONResponse(status_code=exc.status_code, content=content)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
    return JSONResponse(status_code=400, content={"error": "Invalid request", "message": detail})


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 405:
        return JSONResponse(status_code=405, content={"error": "Method not allowed"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


def create_app(config: AppConfig | None = None, services: Services | None = None) -> FastAPI:
    """Build the API. Tests pass ``services`` with stubbed collaborators."""
    if services is None:
        services = build_services(config or load_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await services.interaction_log.dispose()

    app = FastAPI(title="portfolio-api", lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PortfolioApiError, _portfolio_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    app.include_router(analyze.router)
    app.include_router(chatbot.router)
    app.include_router(admin_logs.router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
