import asyncio
import logging
from enum import Enum

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from app.services.readiness import ReadinessGate

logger = logging.getLogger(__name__)

PROBE_QUERY = text("SELECT 1")


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    STARTING = "starting"


class DatabaseStatus(str, Enum):
    CONNECTED = "connected"
    UNREACHABLE = "unreachable"


class HealthReport(BaseModel):
    status: HealthStatus
    uptime_seconds: int | None = None
    database: DatabaseStatus | None = None
    started_at: str | None = None

    def is_starting(self) -> bool:
        return self.status == HealthStatus.STARTING

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class HealthReporter:
    """Builds a point-in-time health snapshot from the gate and a live probe."""

    def __init__(self, gate: ReadinessGate, engine: AsyncEngine, probe_timeout: float):
        self.gate = gate
        self.engine = engine
        self.probe_timeout = probe_timeout

    async def compute_report(self) -> HealthReport:
        # A starting service must not be masked by transient connection errors.
        if not self.gate.is_ready():
            return HealthReport(status=HealthStatus.STARTING)

        db_ok = await self.probe_database()
        return HealthReport(
            status=HealthStatus.HEALTHY if db_ok else HealthStatus.DEGRADED,
            uptime_seconds=self.gate.uptime_seconds(),
            database=DatabaseStatus.CONNECTED if db_ok else DatabaseStatus.UNREACHABLE,
            started_at=self.gate.started_at_iso,
        )

    async def probe_database(self) -> bool:
        try:
            value = await asyncio.wait_for(self._run_probe(), timeout=self.probe_timeout)
        except asyncio.TimeoutError:
            logger.warning("Database probe timed out after %.1fs", self.probe_timeout)
            return False
        except Exception as exc:
            logger.warning("Database probe failed: %s", exc)
            return False
        return value == 1

    async def _run_probe(self):
        async with self.engine.connect() as conn:
            result = await conn.execute(PROBE_QUERY)
            return result.scalar()
