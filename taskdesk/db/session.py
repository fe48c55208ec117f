"""Async engine, request-scoped sessions, and schema setup at startup."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from alembic import command
from alembic.config import Config
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from taskdesk import models as _models
from taskdesk.core.config import ALEMBIC_INI, MIGRATIONS_DIR, settings
from taskdesk.core.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# The Task table must be registered on SQLModel.metadata before create_all.
_MODEL_REGISTRY = _models

logger = get_logger(__name__)

async_engine: AsyncEngine = create_async_engine(settings.async_database_url, pool_pre_ping=True)
async_session_maker = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def alembic_config() -> Config:
    """Alembic config pointing at the bundled migrations, leaving app logging alone."""
    cfg = Config(str(ALEMBIC_INI))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.attributes["configure_logger"] = False
    return cfg


def has_migration_revisions() -> bool:
    return any((MIGRATIONS_DIR / "versions").glob("*.py"))


def upgrade_to_head() -> None:
    logger.info("db.migrations.upgrade target=head")
    command.upgrade(alembic_config(), "head")
    logger.info("db.migrations.upgraded")


async def create_schema(engine: AsyncEngine = async_engine) -> None:
    """Create any missing tables directly from model metadata."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def init_db() -> None:
    """Bring the schema up to date: Alembic when auto-migrating, else create_all."""
    if settings.db_auto_migrate and has_migration_revisions():
        await asyncio.to_thread(upgrade_to_head)
        return
    if settings.db_auto_migrate:
        logger.warning("db.init.no_revisions using create_all")
    await create_schema()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request; an open transaction is rolled back afterwards."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                try:
                    await session.rollback()
                except SQLAlchemyError:
                    logger.exception("db.session.rollback_failed")
