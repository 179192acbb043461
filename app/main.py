import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException

from app.api.routers import db, env, health, notes, ui
from app.core.config import Settings, settings as default_settings
from app.core.logging import configure_logging
from app.db.session import build_engine, build_sessionmaker
from app.services.bootstrap import bootstrap_schema
from app.services.health import HealthReporter
from app.services.lifecycle import Bootstrapper, ServiceLifecycle
from app.services.readiness import ReadinessGate

configure_logging(default_settings.log_level)

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return JSONResponse(status_code=400, content={"error": "; ".join(messages) or "invalid request"})


async def database_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Request %s %s failed", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or exc.__class__.__name__})


def create_app(
    settings: Settings | None = None,
    engine: AsyncEngine | None = None,
    bootstrap: Bootstrapper = bootstrap_schema,
) -> FastAPI:
    settings = settings or default_settings
    engine = engine or build_engine(settings)

    gate = ReadinessGate()
    lifecycle = ServiceLifecycle(gate, engine, settings.startup_delay_seconds, bootstrap=bootstrap)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Listening on port %s", settings.port)
        lifecycle.start()
        try:
            yield
        finally:
            await lifecycle.stop()

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    app.state.gate = gate
    app.state.lifecycle = lifecycle
    app.state.reporter = HealthReporter(gate, engine, settings.probe_timeout_seconds)

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(OSError, database_exception_handler)
    # Not an OSError subclass before Python 3.11.
    app.add_exception_handler(asyncio.TimeoutError, database_exception_handler)

    app.include_router(ui.router, tags=["ui"])
    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(db.router, prefix="/db", tags=["db"])
    app.include_router(notes.router, prefix="/notes", tags=["notes"])
    app.include_router(env.router, prefix="/env", tags=["env"])

    return app


app = create_app()
