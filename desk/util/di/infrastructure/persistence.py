"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from desk.config import Settings
from desk.domain.repository import (
    CommentRepository,
    MaterialRepository,
    ProfileRepository,
    ReviewStateRepository,
    TagRepository,
)
from desk.persistence.database import create_engine, create_session_factory
from desk.persistence.repository import (
    PostgresCommentRepository,
    PostgresMaterialRepository,
    PostgresProfileRepository,
    PostgresReviewStateRepository,
    PostgresTagRepository,
)
from desk.util.di.base import ProviderBase
from desk.util.observability import instrument_sqlalchemy


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

        All writes of a request (an analysis submission included) commit
        together at the end of the request, or roll back if an exception
        was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        """Provide Profile repository."""
        return PostgresProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_material_repository(self, session: AsyncSession) -> MaterialRepository:
        """Provide Material repository."""
        return PostgresMaterialRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_review_state_repository(
        self, session: AsyncSession
    ) -> ReviewStateRepository:
        """Provide ReviewState repository."""
        return PostgresReviewStateRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_tag_repository(self, session: AsyncSession) -> TagRepository:
        """Provide Tag repository."""
        return PostgresTagRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)
