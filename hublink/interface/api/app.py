"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hublink.config import Settings
from hublink.interface.api.routes import auth, deauth, health, users
from hublink.interface.error import register_error_handlers
from hublink.util.di.container import create_container, setup_di
from hublink.util.observability import instrument_fastapi, instrument_httpx


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Logfire must be configured before this is called: start_app.py does
    it in production, conftest.py in tests.

    Args:
        settings: Application settings, loaded from the environment if omitted
        container: DI container, the production container if omitted
    """
    settings = settings or Settings()

    instrument_httpx()

    app_instance = FastAPI(
        title="hublink",
        description="GitHub sign-in and account linking for local user accounts",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(users.router)
    app_instance.include_router(deauth.router)

    return app_instance


# Module-level instance for uvicorn
app = create_app()
