from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ovimanager.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    engine = create_async_engine(database_url, echo=False, future=True)
    if engine.dialect.name == "sqlite":
        # SQLite leaves foreign keys off unless asked per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.animals = None
        self.groups = None
        self.breeding_batches = None
        self.ewe_enrollments = None
        self.pregnancy_records = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from ovimanager.infrastructure.repos.animals_sqlalchemy import AnimalsSQLAlchemyRepository
        from ovimanager.infrastructure.repos.breeding_batches_sqlalchemy import (
            BreedingBatchesSQLAlchemyRepository,
        )
        from ovimanager.infrastructure.repos.ewe_enrollments_sqlalchemy import (
            EweEnrollmentsSQLAlchemyRepository,
        )
        from ovimanager.infrastructure.repos.groups_sqlalchemy import GroupsSQLAlchemyRepository
        from ovimanager.infrastructure.repos.pregnancy_records_sqlalchemy import (
            PregnancyRecordsSQLAlchemyRepository,
        )

        self.animals = AnimalsSQLAlchemyRepository(self.session)
        self.groups = GroupsSQLAlchemyRepository(self.session)
        self.breeding_batches = BreedingBatchesSQLAlchemyRepository(self.session)
        self.ewe_enrollments = EweEnrollmentsSQLAlchemyRepository(self.session)
        self.pregnancy_records = PregnancyRecordsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.animals = None
            self.groups = None
            self.breeding_batches = None
            self.ewe_enrollments = None
            self.pregnancy_records = None

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
