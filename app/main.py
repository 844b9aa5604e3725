"""
Application factory for the fact list API.

`create_app` wires the layers together: repository → FactListService →
logging middleware → HTTP router. Collaborators can be injected, which is
how the tests get a fresh store per client. The module-level `app` is what
gunicorn / uvicorn serve.
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, settings as default_settings
from app.core.errors import (
    JSONUTF8Response,
    TriviaException,
    http_exception_handler,
    trivia_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.core.logging import get_logger, setup_logging
from app.repositories import FactRepository, build_repository
from app.routers import fact as fact_router
from app.services.factlist import FactListService, LoggingMiddleware, chain


def create_app(
    settings: Settings | None = None,
    repository: FactRepository | None = None,
    logger=None,
) -> FastAPI:
    settings = settings or default_settings
    if logger is None:
        setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
        logger = get_logger("trivia")
    if repository is None:
        repository = build_repository(settings)

    app = FastAPI(
        title="Trivia Fact List API",
        description=(
            "Create, list, replace and delete trivia facts (question/answer pairs).\n\n"
            'All error responses follow the `{"error": message}` envelope.'
        ),
        version="1.0.0",
        default_response_class=JSONUTF8Response,
    )

    app.state.logger = logger
    app.state.fact_service = chain(
        FactListService(repository),
        LoggingMiddleware(logger.bind(component="factlist")),
    )

    # --- Exception handlers (most specific first) ---
    app.add_exception_handler(TriviaException, trivia_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # --- Routers ---
    app.include_router(fact_router.router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["health"], summary="Health check")
    def health():
        """Liveness probe; does not touch the store."""
        return {"status": "ok", "repository": type(repository).__name__}

    logger.info("app configured", prefix=settings.API_PREFIX, repository=type(repository).__name__)
    return app


app = create_app()
