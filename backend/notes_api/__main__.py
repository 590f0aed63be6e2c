"""
Notes Service: Process Entry Point
==================================

Usage:
    python -m notes_api --config-path ./config/local.yaml
    CONFIG_PATH=./config/local.yaml notes-api

uvicorn traps SIGINT/SIGTERM, stops accepting connections and waits up to
`shutdown_timeout` seconds for in-flight requests before the lifespan closes
the storage.
"""

import logging
from typing import Optional, Sequence

import uvicorn

from notes_api.cli import apply_config_path_arg

logger = logging.getLogger(__name__)

# Idle keep-alive connections are dropped after this many seconds
KEEP_ALIVE_TIMEOUT = 10

# Upper bound on the request line plus headers; larger requests are refused
MAX_HEADER_BYTES = 1 << 20


def main(argv: Optional[Sequence[str]] = None) -> None:
    apply_config_path_arg("Run the notes HTTP service.", argv)

    from notes_api.config import settings
    from notes_api.main import setup_logging

    setup_logging()
    logger.info("Listening on %s:%d", settings.host, settings.port)
    uvicorn.run(
        "notes_api.main:app",
        host=settings.host,
        port=settings.port,
        http="h11",
        timeout_keep_alive=KEEP_ALIVE_TIMEOUT,
        h11_max_incomplete_event_size=MAX_HEADER_BYTES,
        timeout_graceful_shutdown=settings.shutdown_timeout,
        # Logging is configured by setup_logging(); keep uvicorn from replacing it
        log_config=None,
    )
    logger.info("Graceful shutdown complete")


if __name__ == "__main__":
    main()
