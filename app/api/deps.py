from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from app.core.config import Settings
from app.services.health import HealthReporter
from app.services.readiness import ReadinessGate


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.sessionmaker() as db:
        yield db


def get_engine(request: Request) -> AsyncEngine:
    return request.app.state.engine


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gate(request: Request) -> ReadinessGate:
    return request.app.state.gate


def get_reporter(request: Request) -> HealthReporter:
    return request.app.state.reporter
