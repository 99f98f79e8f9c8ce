from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from miniblog.core import exceptions
from miniblog.core.config import Settings, load_settings
from miniblog.core.cors import add_cors
from miniblog.core.database import Database
from miniblog.core.logging import configure_logging, get_logger
from miniblog.core.response.handlers import (
    global_exception_handler,
    http_exception_handler,
    request_validation_handler,
    service_exception_handler,
)
from miniblog.core.response.schemas import HealthResponse

# Import routers from apps
from miniblog.apps.blog import build_post_router, get_post_service

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Everything the application needs, built once and handed to create_app."""

    settings: Settings
    database: Database
    clock: Callable[[], datetime] = field(default=None)  # type: ignore[assignment]

    def __post_init__(self):
        if self.clock is None:
            self.clock = self.settings.get_now

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(settings=settings, database=Database(settings.DATABASE_URL))


@asynccontextmanager
async def lifespan(app: FastAPI):
    context: AppContext = app.state.context
    # Startup: an unreachable store is fatal
    await context.database.connect()
    await context.database.create_all()
    logger.info("database_connected", url=context.database.engine.url.render_as_string())
    yield
    # Shutdown: release pooled connections
    await context.database.disconnect()
    logger.info("database_disconnected")


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if context is None:
        settings = load_settings()
        configure_logging(settings)
        context = AppContext.from_settings(settings)
    settings = context.settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_INFO,
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
    )
    app.state.context = context

    add_cors(app, settings.frontend_origins)

    app.add_exception_handler(exceptions.ServiceException, service_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)

    @app.get("/api", tags=["Health"], response_model=HealthResponse)
    async def health_check():
        """Liveness check with service identity."""
        return HealthResponse(
            message="Blog API is running!",
            service=settings.PROJECT_NAME,
            version=settings.PROJECT_VERSION,
            timestamp=context.clock().isoformat(),
        )

    post_service = get_post_service(
        context.database,
        clock=context.clock,
        expose_errors=not settings.is_production,
    )
    app.include_router(build_post_router(post_service), prefix="/api")

    return app


def run(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False) -> None:
    settings = load_settings()
    configure_logging(settings)
    host = host or settings.HOST
    port = port or settings.PORT
    logger.info("server_starting", host=host, port=port, api=f"http://localhost:{port}/api")
    uvicorn.run(
        "miniblog.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
