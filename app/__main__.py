import signal
import sys

import uvicorn

from app.core.config import settings


class Server(uvicorn.Server):
    def handle_exit(self, sig, frame) -> None:
        super().handle_exit(sig, frame)
        # SIGTERM is an orderly stop request: do not re-deliver it after shutdown.
        captured = getattr(self, "_captured_signals", None)
        if captured and sig == signal.SIGTERM:
            captured[:] = [s for s in captured if s != signal.SIGTERM]


def main() -> None:
    config = uvicorn.Config(
        "app.main:app",
        host=settings.api_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
    )
    server = Server(config)
    # Stops accepting, drains in-flight requests and runs the lifespan shutdown.
    server.run()
    if not server.started:
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
