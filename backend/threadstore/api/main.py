"""Main FastAPI application with CORS and middleware configuration."""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, Request, status  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: E402

from .comment_endpoints import router as comment_router  # noqa: E402
from .post_endpoints import router as post_router  # noqa: E402
from .. import __version__, config  # noqa: E402
from ..services.thread_service import ThreadService  # noqa: E402
from ..storage.base import ContentStore  # noqa: E402
from ..storage.errors import StoreError  # noqa: E402
from ..storage.factory import create_store  # noqa: E402
from ..utils.error_handler import error_handler  # noqa: E402

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting up Threadstore API...")
    for key, value in config.describe().items():
        logger.info(f"- {key}: {value}")

    owns_store = app.state.store is None
    if owns_store:
        app.state.store = create_store()
    app.state.thread_service = ThreadService(app.state.store)
    logger.info(f"Content store ready: {app.state.store.name}")

    yield

    # Shutdown
    logger.info("Shutting down Threadstore API...")
    if owns_store:
        app.state.store.close()
        app.state.store = None
    app.state.thread_service = None


def create_app(store: Optional[ContentStore] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Content store to serve; when None one is created from
            configuration at startup and closed at shutdown
    """
    app = FastAPI(
        title="Threadstore API",
        description="Posts with unbounded-depth threaded comments",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan
    )
    app.state.store = store
    app.state.thread_service = None

    # Configure CORS
    origins = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    if config.PRODUCTION_ORIGIN:
        origins.append(config.PRODUCTION_ORIGIN)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add unique request ID to each request."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.3f}s - "
            f"ID: {request_id}"
        )
        return response

    # Exception handlers
    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        """Translate storage engine errors."""
        request_id = getattr(request.state, "request_id", "unknown")
        error_info = error_handler.process_store_error(exc, request_id)
        return JSONResponse(
            status_code=error_info["status_code"],
            content=error_info["content"],
            headers={"X-Request-ID": request_id}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "http_error",
                "message": exc.detail,
                "request_id": request_id
            },
            headers={"X-Request-ID": request_id}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors."""
        request_id = getattr(request.state, "request_id", "unknown")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "validation_error",
                "message": "Invalid request data",
                "details": exc.errors(),
                "request_id": request_id
            },
            headers={"X-Request-ID": request_id}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(f"Unexpected error for request {request_id}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred",
                "request_id": request_id
            },
            headers={"X-Request-ID": request_id}
        )

    # Simple ping endpoint for basic connectivity test
    @app.get("/ping", tags=["health"])
    async def ping():
        """Simple ping endpoint."""
        return {"message": "pong", "status": "alive"}

    @app.get("/health", tags=["health"])
    def health_check(request: Request) -> Dict[str, Any]:
        """Health check with backend name and row counts."""
        store = request.app.state.store
        if store is None:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "starting", "version": __version__}
            )
        return {
            "status": "healthy",
            "version": __version__,
            "storage": store.name,
            "counts": store.stats(),
            "timestamp": time.time()
        }

    # Include routers
    app.include_router(post_router, prefix="/api/v1")
    app.include_router(comment_router, prefix="/api/v1")

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "threadstore.api.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        log_level=config.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
