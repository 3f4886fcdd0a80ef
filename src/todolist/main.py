from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .logging_config import configure_logging
from .routers import lifecycle as lifecycle_router
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .store import ToDoStore

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "Create, edit, complete and delete to-dos."},
    {"name": "lifecycle", "description": "Client lifecycle signals that checkpoint the store."},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load the store when the application starts and save it when it stops."""
    store: ToDoStore = app.state.store
    from_archive = store.load()
    logger.info(
        "Serving %d to-dos (%s)", len(store), "from archive" if from_archive else "sample data"
    )
    yield
    store.save()


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[ToDoStore] = None) -> FastAPI:
    """
    Build the application around a single store.

    Args:
        settings: Configuration; read from the environment when omitted.
        store: The store to serve; built from `settings` when omitted.

    Returns:
        A FastAPI app whose store is available as `app.state.store`.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if store is None:
        store = ToDoStore(settings.data_path, archive_format=settings.archive_format, autosave=settings.autosave)

    app = FastAPI(
        title="ToDo List",
        description="Single-user to-do list persisted to a property-list file.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.store = store

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers for consistent JSON on validation errors
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_errors(exc),
            },
        )

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        current: ToDoStore = request.app.state.store
        return {
            "message": "Healthy",
            "archive_format": current.archive_format.value,
            "count": len(current),
        }

    app.include_router(todos_router.router)
    app.include_router(lifecycle_router.router)
    return app


def _utf8_safe(text: str) -> str:
    return text.encode("utf-8", "backslashreplace").decode("utf-8")


def jsonable_errors(exc: RequestValidationError) -> list:
    """
    Validation errors with their exception contexts rendered as strings.

    Rejected input is echoed back, so lone surrogates are escaped to keep the
    response encodable as UTF-8.
    """
    return jsonable_encoder(exc.errors(), custom_encoder={str: _utf8_safe, Exception: str})


app = create_app()
