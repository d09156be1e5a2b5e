"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intranet.application.usecase.user import BootstrapAdminUseCase
from intranet.config import Settings
from intranet.interface.api.routes import auth, health, invitations, users
from intranet.interface.error import register_error_handlers
from intranet.util.di.container import create_container
from intranet.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Guarantee the configured admin on startup, close the container on exit."""
    container: AsyncContainer = app.state.dishka_container
    async with container() as request_container:
        bootstrap = await request_container.get(BootstrapAdminUseCase)
        await bootstrap.execute()
    yield
    await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the API around ``container`` (the production one when omitted).

    Logfire must already be configured; ``scripts/start_app.py`` does it.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Intranet API",
        description="Sign-in reconciliation, invitations and user administration",
        version="0.1.0",
        lifespan=lifespan,
    )
    instrument_fastapi(app_instance)

    # Session travels as a cookie, so origins must be explicit
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
        max_age=600,
    )

    register_error_handlers(app_instance)
    setup_dishka(container or create_container(), app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    # /users/invite and /users/invitations before /users/{user_id}
    app_instance.include_router(invitations.router)
    app_instance.include_router(users.router)

    return app_instance


app = create_app()
