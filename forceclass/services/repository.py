import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from forceclass.core.db import Base, build_engine, build_sessionmaker
from forceclass.core.retry import async_retry
from forceclass.models.unit import UnitEntityRow, UnitSummaryRow
from forceclass.schemas.summary import UnitSummary
from forceclass.services.categories import UnitType
from forceclass.services.exceptions import (
    ClassificationError,
    EntityLoadError,
    RepositoryClosedError,
)
from forceclass.services.quad_resolver import EntityDefinition

logger = logging.getLogger(__name__)


class UnitRepository:
    """
    Caller-owned access to the unit catalog database.

    Nothing is opened implicitly: call open() (or use `async with`) before any
    read, and close() when done.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    async def open(self, create_schema: bool = False) -> "UnitRepository":
        if self._engine is None:
            self._engine = build_engine(self.database_url, echo=self.echo)
            self._sessionmaker = build_sessionmaker(self._engine)
            if create_schema:
                async with self._engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            logger.info("Unit repository opened")
        return self

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None
            logger.info("Unit repository closed")

    async def __aenter__(self) -> "UnitRepository":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise RepositoryClosedError("Unit repository is not open")
        async with self._sessionmaker() as session:
            yield session

    @async_retry(max_attempts=3, base_delay=0.5, max_delay=5.0)
    async def list_summaries(self) -> List[UnitSummary]:
        async with self.session() as db:
            result = await db.execute(select(UnitSummaryRow).order_by(UnitSummaryRow.name))
            return [to_summary(row) for row in result.scalars().all()]

    async def get_summary(self, name: str) -> Optional[UnitSummary]:
        async with self.session() as db:
            result = await db.execute(select(UnitSummaryRow).where(UnitSummaryRow.name == name))
            row = result.scalar_one_or_none()
            return to_summary(row) if row else None

    async def get_entity_row(self, name: str) -> Optional[UnitEntityRow]:
        async with self.session() as db:
            result = await db.execute(select(UnitEntityRow).where(UnitEntityRow.name == name))
            return result.scalar_one_or_none()

    async def add_summaries(self, summaries: Iterable[UnitSummary]) -> int:
        count = 0
        async with self.session() as db:
            for summary in summaries:
                db.add(to_row(summary))
                count += 1
            await db.commit()
        return count

    async def add_entities(self, entities: Iterable[UnitEntityRow]) -> None:
        async with self.session() as db:
            db.add_all(list(entities))
            await db.commit()


def to_summary(row: UnitSummaryRow) -> UnitSummary:
    return UnitSummary(
        chassis=row.chassis,
        model=row.model or "",
        unit_type=row.unit_type,
        unit_sub_type=row.unit_sub_type or "",
        year=row.year,
        weight_class=row.weight_class,
        tons=row.tons,
        engine_name=row.engine_name or "",
        armor_types=row.armor_types or [],
        internals_type=row.internals_type or 0,
        clan=bool(row.clan),
        walk_mp=row.walk_mp or 0,
        jump_mp=row.jump_mp or 0,
        movement_mode=row.movement_mode or "",
        equipment=row.equipment or [],
    )


def to_row(summary: UnitSummary) -> UnitSummaryRow:
    data = summary.model_dump()
    return UnitSummaryRow(name=summary.name, **data)


class SqlEntityLoader:
    """EntityLoader reading full unit definitions through a UnitRepository."""

    def __init__(self, repository: UnitRepository):
        self.repository = repository

    async def load_entity(self, unit_key: str) -> Optional[EntityDefinition]:
        try:
            row = await self.repository.get_entity_row(unit_key)
        except (SQLAlchemyError, RepositoryClosedError) as e:
            raise EntityLoadError(f"Could not load {unit_key}: {e}") from e

        if row is None:
            return None

        try:
            unit_type = UnitType.parse(row.unit_type)
        except ClassificationError as e:
            raise EntityLoadError(f"Could not load {unit_key}: {e}") from e

        return EntityDefinition(
            name=row.name,
            unit_type=unit_type,
            motive_layout=row.motive_layout or "",
            chassis_type=row.chassis_type or "",
        )
