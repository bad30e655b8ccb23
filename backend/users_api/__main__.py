"""Server entry point: `python -m users_api`.

Invariants:
    - Missing or invalid configuration exits with status 1 before binding
    - Store connection/schema failure aborts startup (uvicorn exits non-zero)
    - SIGINT/SIGTERM stop accepting at once; in-flight connections get
      shutdown_timeout_seconds to finish before the process exits

Design Decisions:
    - uvicorn's access log disabled: RequestLoggingMiddleware already traces
      every request through the application's own formatter
"""

import logging
import sys

import uvicorn
from pydantic import ValidationError

from users_api.config import get_settings
from users_api.infrastructure.observability import setup_logging
from users_api.main import create_app

logger = logging.getLogger("users_api")


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.critical(f"Invalid configuration (is DATABASE_URL set?): {e}")
        sys.exit(1)

    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Starting server on {settings.host}:{settings.port}")
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        lifespan="on",
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
