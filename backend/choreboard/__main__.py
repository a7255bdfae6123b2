"""Run the API with uvicorn on the configured host and port.

uvicorn handles SIGINT / SIGTERM and drains in-flight requests before the
lifespan shutdown disposes the pool.
"""

import uvicorn
from uvicorn.config import LOG_LEVELS

from choreboard.config import get_settings


def main() -> None:
    settings = get_settings()
    log_level = settings.log_level.lower()
    uvicorn.run(
        "choreboard.main:app",
        host=settings.host,
        port=settings.port,
        log_level=log_level if log_level in LOG_LEVELS else "info",
    )


if __name__ == "__main__":
    main()
