"""Production DI container."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from intranet.util.di import resolve_providers


def create_container(*overrides: Provider) -> AsyncContainer:
    """Build the production container.

    Settings come from the environment. Providers in ``overrides`` are
    registered last, so they win over the production ones.
    """
    return make_async_container(*resolve_providers(), *overrides, FastapiProvider())
