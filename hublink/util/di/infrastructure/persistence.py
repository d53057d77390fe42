"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from hublink.config import Settings
from hublink.domain.repository import (
    AdminSettingsRepository,
    IdentityIndexRepository,
    PendingValidationRepository,
    UserRepository,
)
from hublink.persistence.database import create_engine, create_session_factory
from hublink.persistence.repository import (
    PostgresAdminSettingsRepository,
    PostgresIdentityIndexRepository,
    PostgresPendingValidationRepository,
    PostgresUserRepository,
)
from hublink.util.di.base import ProviderBase
from hublink.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is automatically committed at the end of the request
        if no exception occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_identity_index_repository(
        self, session: AsyncSession
    ) -> IdentityIndexRepository:
        """Provide identity index repository."""
        return PostgresIdentityIndexRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_pending_validation_repository(
        self, session: AsyncSession
    ) -> PendingValidationRepository:
        """Provide pending validation repository."""
        return PostgresPendingValidationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_admin_settings_repository(
        self, session: AsyncSession, settings: Settings
    ) -> AdminSettingsRepository:
        """Provide admin settings repository."""
        return PostgresAdminSettingsRepository(
            session, default_disabled=settings.auth.github.disable_registration
        )
