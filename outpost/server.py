"""Process entry point.

Loads configuration, installs logging and tracing, builds the schema, the
metrics recorder and the application, then serves until SIGINT or SIGTERM.
uvicorn owns the signal handling: it stops accepting connections, drains
in-flight requests and runs the application's lifespan shutdown, which
flushes the tracing pipeline.
"""

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from outpost.api.app import create_app
from outpost.config import get_settings
from outpost.config.settings import Settings
from outpost.graphql.schema import build_schema
from outpost.observability.logging import get_logger, setup_logging
from outpost.observability.metrics import MetricsRecorder
from outpost.observability.tracing import setup_tracing

logger = get_logger(__name__)


def build_server_config(app: FastAPI, settings: Settings) -> uvicorn.Config:
    """Build the uvicorn configuration for the application.

    uvicorn's own logging config and access log are disabled; requests are
    logged by the application's middleware.
    """
    return uvicorn.Config(
        app,
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,
        access_log=False,
        timeout_graceful_shutdown=settings.api.shutdown_timeout,
    )


def run() -> None:
    """Run the service until terminated.

    Bind and serve failures are fatal: uvicorn exits the process.
    """
    load_dotenv()

    settings = get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        include_trace_id=log_config.include_trace_id,
    )

    tracing = setup_tracing(settings.observability.tracing)
    schema = build_schema()
    metrics = MetricsRecorder(buckets=settings.observability.metrics.buckets)

    app = create_app(settings, schema=schema, metrics=metrics, tracing=tracing)
    server = uvicorn.Server(build_server_config(app, settings))

    logger.info("server_starting", host=settings.api.host, port=settings.api.port)

    try:
        server.run()
    finally:
        # No-op when the lifespan shutdown already flushed it
        if tracing is not None:
            tracing.shutdown()
