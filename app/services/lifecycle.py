import asyncio
import logging
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncEngine

from app.services.bootstrap import bootstrap_schema
from app.services.readiness import ReadinessGate

logger = logging.getLogger(__name__)

Bootstrapper = Callable[[AsyncEngine], Awaitable[bool]]


class ServiceLifecycle:
    """Owns the delayed startup task and the ordered shutdown.

    ``start`` initializes the gate and schedules bootstrap after
    ``startup_delay`` seconds. The gate flips to ready once bootstrap
    finishes, whatever its outcome. ``stop`` waits for (or cancels) that
    task and then releases the connection pool.
    """

    def __init__(
        self,
        gate: ReadinessGate,
        engine: AsyncEngine,
        startup_delay: float,
        bootstrap: Bootstrapper = bootstrap_schema,
    ):
        self.gate = gate
        self.engine = engine
        self.startup_delay = startup_delay
        self.bootstrap = bootstrap
        self.bootstrap_ok: bool | None = None
        self._startup_task: asyncio.Task | None = None
        self._stopped = False

    @property
    def startup_task(self) -> asyncio.Task | None:
        return self._startup_task

    def start(self) -> asyncio.Task:
        if self._startup_task is not None:
            raise RuntimeError("lifecycle already started")
        self.gate.initialize()
        logger.info("Simulating %dms startup delay...", round(self.startup_delay * 1000))
        self._startup_task = asyncio.create_task(self._run_startup(), name="startup-bootstrap")
        return self._startup_task

    async def _run_startup(self) -> None:
        await asyncio.sleep(self.startup_delay)
        try:
            self.bootstrap_ok = await self.bootstrap(self.engine)
        except Exception:
            logger.exception("Bootstrap raised unexpectedly")
            self.bootstrap_ok = False
        self.gate.mark_ready()

    async def wait_started(self) -> None:
        if self._startup_task is None:
            raise RuntimeError("lifecycle not started")
        await asyncio.shield(self._startup_task)

    async def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        logger.info("Shutting down...")

        task = self._startup_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                logger.info("Startup cancelled before completion")

        try:
            await self.engine.dispose()
        except Exception as exc:
            logger.error("Failed to release database pool: %s", exc)
        else:
            logger.info("Database pool released")
