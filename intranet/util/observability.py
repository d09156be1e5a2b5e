"""Logfire setup.

Domain services report through ``logfire`` directly:

    with logfire.span("identity_reconciler.reconcile", email=email):
        logfire.info("Identity reconciled", outcome=result.outcome.value)
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from intranet.config import Settings

SERVICE_NAME = "intranet-api"

# Span attributes with these names are redacted before export
SCRUBBED_ATTRIBUTES = ["auth_token", "jwt_secret", "logfire_token"]


def should_send(settings: Settings) -> bool:
    """Export to Logfire cloud when forced on, or when a token is configured."""
    forced = settings.observability.send_to_logfire
    if forced is not None:
        return forced
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is imported."""
    send = should_send(settings)
    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        token=settings.observability.logfire_token,
        send_to_logfire=send,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUBBED_ATTRIBUTES),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send,
        allowed_domain=settings.identity.allowed_domain or None,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace requests. Headers carry the session cookie and are left out."""
    logfire.instrument_fastapi(app, capture_headers=False, excluded_urls="/health")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
