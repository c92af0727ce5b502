"""
Idears FastAPI Application Entry Point.

Run with: uvicorn idears.main:app --reload
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from idears import __version__
from idears.api.routes import attachments, ideas, notes
from idears.config import Settings, get_settings
from idears.db.session import Database
from idears.services.storage import FileStorage

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    """First validation problem as `field: message`, e.g. `title: Field required`."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{field}: {first.get('msg')}" if field else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    """Every error response carries the body `{"error": <message>}`."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        # ServerErrorMiddleware re-raises after this response, so the server logs the traceback
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit Settings instance."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Open the store and upload directory; a failure here aborts startup."""
        database = Database(settings)
        storage = FileStorage(settings)
        storage.ensure_root()
        try:
            await database.create_all()
        except Exception:
            logger.critical("Failed to initialize database at %s", settings.database_path, exc_info=True)
            await database.dispose()
            raise

        app.state.db = database
        app.state.storage = storage
        yield
        await database.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title=settings.app_name,
        description="Idea tracking API: ideas, votes, notes and attachments",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(ideas.router, prefix=settings.api_prefix)
    app.include_router(notes.router, prefix=settings.api_prefix)
    app.include_router(attachments.router, prefix=settings.api_prefix)

    # Serve stored attachments at the path recorded in their metadata
    app.mount(
        FileStorage.url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the default application with uvicorn."""
    import uvicorn

    uvicorn.run("idears.main:app", host="0.0.0.0", port=8000)
