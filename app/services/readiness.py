import datetime as dt
import logging
import math
import time
from enum import Enum

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    STARTING = "starting"
    READY = "ready"


ALLOWED_TRANSITIONS: dict[LifecycleState, set[LifecycleState]] = {
    LifecycleState.STARTING: {LifecycleState.READY},
    LifecycleState.READY: set(),
}


def can_transition(current: LifecycleState, target: LifecycleState) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


class ReadinessGate:
    """Decides whether the service may claim readiness.

    Written once by the startup task, read by every health check.
    """

    def __init__(self, clock=time.monotonic, wall_clock=None):
        self._clock = clock
        self._wall_clock = wall_clock or (lambda: dt.datetime.now(dt.timezone.utc))
        self._state: LifecycleState | None = None
        self._started_monotonic: float | None = None
        self._started_at: dt.datetime | None = None

    def initialize(self) -> None:
        if self._state is not None:
            raise RuntimeError("readiness gate already initialized")
        self._started_monotonic = self._clock()
        self._started_at = self._wall_clock()
        self._state = LifecycleState.STARTING

    def mark_ready(self) -> bool:
        current = self.state
        if not can_transition(current, LifecycleState.READY):
            return False
        self._state = LifecycleState.READY
        logger.info("Ready to serve traffic")
        return True

    def is_ready(self) -> bool:
        return self._state is LifecycleState.READY

    @property
    def state(self) -> LifecycleState:
        if self._state is None:
            raise RuntimeError("readiness gate not initialized")
        return self._state

    @property
    def started_at(self) -> dt.datetime:
        if self._started_at is None:
            raise RuntimeError("readiness gate not initialized")
        return self._started_at

    @property
    def started_at_iso(self) -> str:
        """UTC start time with millisecond precision and a ``Z`` suffix."""
        return self.started_at.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def uptime_seconds(self) -> int:
        if self._started_monotonic is None:
            raise RuntimeError("readiness gate not initialized")
        return max(0, math.floor(self._clock() - self._started_monotonic))
