"""
FastAPI main application for the Bookstore API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.books import router as books_router
from api.config import APIConfig
from api.database import BookRepository
from api.models import ErrorResponse, HealthResponse
from utilities.config import BookstoreDatabaseSettings
from utilities.logger import bind_request_context, setup_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared database handle on startup and close it on shutdown."""
    settings: BookstoreDatabaseSettings = app.state.db_settings
    logger.info("Starting Bookstore API", database=settings.database_name, collection=settings.collection_name)

    client = AsyncIOMotorClient(
        settings.connection_string,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms
    )
    try:
        database = client[settings.database_name]
        await database.command("ping")
        logger.info("Database connection established")
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        client.close()
        raise

    app.state.book_repository = BookRepository(database[settings.collection_name])

    yield

    logger.info("Shutting down Bookstore API")
    client.close()


def create_app(
    api_config: Optional[APIConfig] = None,
    db_settings: Optional[BookstoreDatabaseSettings] = None
) -> FastAPI:
    """
    Build the application.

    Settings are read from the environment when not given and are
    attached to ``app.state`` for the request dependencies.
    """
    api_config = api_config or APIConfig()
    db_settings = db_settings or BookstoreDatabaseSettings()

    setup_logging(
        log_level=api_config.log_level,
        log_format=api_config.log_format,
        log_file=api_config.log_file,
        debug=api_config.debug,
        service_version=api_config.api_version
    )

    app = FastAPI(
        title=api_config.api_title,
        description=api_config.api_description,
        version=api_config.api_version,
        lifespan=lifespan
    )
    app.state.api_config = api_config
    app.state.db_settings = db_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors_origins,
        allow_credentials=api_config.cors_allow_credentials,
        allow_methods=api_config.cors_allow_methods,
        allow_headers=api_config.cors_allow_headers,
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        """Tag log events with the request and echo its id."""
        request_id = bind_request_context(
            request.method,
            request.url.path,
            request.headers.get("X-Request-ID")
        )
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=str(exc.detail),
                status_code=exc.status_code
            ).model_dump(),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed requests as 400."""
        logger.warning("Request validation failed", path=request.url.path, errors=len(exc.errors()))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(ErrorResponse(
                error="Invalid request",
                detail=exc.errors(),
                status_code=status.HTTP_400_BAD_REQUEST
            ).model_dump())
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Internal server error",
                detail=str(exc) if api_config.debug else None,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            ).model_dump()
        )

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint."""
        repository: Optional[BookRepository] = getattr(request.app.state, "book_repository", None)

        db_status = "unavailable"
        if repository is not None:
            health_info = await repository.ping()
            db_status = health_info.get("status", "unknown")

        return HealthResponse(
            status="healthy" if db_status == "healthy" else "degraded",
            timestamp=datetime.now(timezone.utc),
            version=api_config.api_version,
            database_status=db_status
        )

    app.include_router(books_router)

    return app


app = create_app()
