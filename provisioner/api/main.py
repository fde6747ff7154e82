"""Provisioning API - FastAPI over the provisioning orchestrator."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from .. import __version__
from ..config import Settings, get_settings
from ..errors import IdentityPolicyViolationError, ProvisioningError
from ..logging import new_correlation_id, setup_logging
from ..orchestrator import ProvisioningOrchestrator
from ..storage import SqlProjectStorage
from . import routers
from .dependencies import build_orchestrator, build_storage


def create_app(
    settings: Settings | None = None,
    orchestrator: ProvisioningOrchestrator | None = None,
) -> FastAPI:
    """Build the API; an explicit orchestrator replaces the configured adapters."""
    settings = settings or get_settings()
    if orchestrator is None:
        orchestrator = build_orchestrator(settings, build_storage(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        setup_logging(
            service_name=settings.service_name,
            log_format=settings.log_format,
            log_level=settings.log_level,
        )
        storage = app.state.orchestrator.storage
        if isinstance(storage, SqlProjectStorage):
            await storage.create_schema()
        yield
        if isinstance(storage, SqlProjectStorage):
            await storage.dispose()

    app = FastAPI(
        title="Project Provisioner API",
        description="Provision bugtracker, wiki, SCM and platform projects",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.orchestrator = orchestrator

    @app.middleware("http")
    async def correlation_middleware(request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        request.state.correlation_id = correlation_id
        logger = structlog.get_logger().bind(
            correlation_id=correlation_id, method=request.method, path=request.url.path
        )

        start = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start) * 1000
            logger.error(
                "http_request_exception",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2),
                exc_info=True,
            )
            raise

        duration_ms = (time.time() - start) * 1000
        if response.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "http_request_failed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
        else:
            logger.info(
                "http_request", status_code=response.status_code, duration_ms=round(duration_ms, 2)
            )
        response.headers["X-Correlation-ID"] = correlation_id
        return response

    @app.exception_handler(ProvisioningError)
    async def provisioning_error_handler(request: Request, exc: ProvisioningError):
        content: dict = {"detail": exc.message}
        if isinstance(exc, IdentityPolicyViolationError) and exc.violations:
            content["violations"] = exc.violations
        return JSONResponse(status_code=int(exc.http_status), content=content)

    @app.get("/")
    async def root():
        """Root endpoint - API information."""
        return {
            "name": "Project Provisioner API",
            "version": __version__,
        }

    app.include_router(routers.health.router)
    app.include_router(routers.projects.router, prefix="/api/v2")
    return app
