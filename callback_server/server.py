"""
Process entry point: configure logging and serve the app with uvicorn.

uvicorn installs its own SIGINT/SIGTERM handlers. On interrupt it stops
accepting connections, lets in-flight responses finish (bounded by
SHUTDOWN_TIMEOUT_SECONDS) and runs the lifespan shutdown. It then re-raises
the captured signal, which surfaces here as KeyboardInterrupt and is turned
into a normal exit with status 0.
"""

import sys

import uvicorn

from callback_server.config import Settings
from callback_server.infrastructure.observability.logging import get_logger, setup_logging
from callback_server.main import create_app

logger = get_logger(__name__)


def build_server(app_settings: Settings) -> uvicorn.Server:
    """Create the uvicorn server that owns the listening socket."""
    config = uvicorn.Config(
        create_app(app_settings),
        host=app_settings.HOST,
        port=app_settings.PORT,
        log_level=app_settings.LOG_LEVEL.lower(),
        timeout_graceful_shutdown=app_settings.SHUTDOWN_TIMEOUT_SECONDS,
        # Logging is configured by setup_logging; requests are logged by the app
        log_config=None,
        access_log=False,
    )
    return uvicorn.Server(config)


def main() -> int:
    """CLI entrypoint."""
    app_settings = Settings()
    setup_logging(log_level=app_settings.LOG_LEVEL, json_logs=app_settings.LOG_JSON)

    server = build_server(app_settings)
    try:
        server.run()
    except KeyboardInterrupt:
        # uvicorn re-raises the interrupt after its graceful shutdown has completed
        logger.info("Interrupt handled, exiting")

    # uvicorn leaves started=False when it could not bind the socket
    if not server.started:
        logger.error(
            "OAuth callback server failed to start",
            host=app_settings.HOST,
            port=app_settings.PORT,
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
