#!/usr/bin/env python3
"""Run the intranet API under uvicorn."""

import sys

import logfire
import uvicorn

from intranet.config import Settings
from intranet.util.logging import setup_logging
from intranet.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Before importing the app, so admin bootstrap failures are reported
    configure_logfire(settings)
    setup_logging(settings)

    if settings.is_production and settings.uses_default_secret:
        logfire.error("Refusing to start with the default JWT secret")
        return 1

    logfire.info(
        "Starting intranet API",
        host=settings.host,
        port=settings.port,
        environment=settings.environment,
        allowed_domain=settings.identity.allowed_domain or None,
        admin_email=settings.identity.admin_email,
    )
    try:
        uvicorn.run(
            "intranet.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Intranet API crashed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
