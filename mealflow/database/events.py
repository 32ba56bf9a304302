from fastapi import FastAPI
from loguru import logger
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from mealflow.core.settings.app import AppSettings
from mealflow.models import RWModel


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_pool(db_url: str, **engine_kwargs) -> tuple[AsyncEngine, async_sessionmaker]:
    engine = create_async_engine(db_url, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        # cascades on users/recipes rely on ON DELETE CASCADE
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    pool = async_sessionmaker(engine, expire_on_commit=False)
    return engine, pool


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(RWModel.metadata.create_all)


async def connect_to_db(app: FastAPI, settings: AppSettings) -> None:
    if not settings.db_url:
        raise RuntimeError("db_url is not configured")

    logger.info("Connecting to database")
    engine, pool = create_db_pool(settings.db_url, echo=False, pool_pre_ping=True)
    app.state.engine = engine
    app.state.pool = pool

    if settings.create_tables_on_startup:
        await create_tables(engine)
        logger.info("Database tables created")

    logger.info("Connection established")


async def close_db_connection(app: FastAPI) -> None:
    logger.info("Closing connection to database")

    await app.state.engine.dispose()

    logger.info("Connection closed")
