import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, NoSuchModuleError
from sqlalchemy.pool import StaticPool

from .errors import DatabaseConnectionError

logger = logging.getLogger("numerology.database")


def create_db_engine(database_url: str) -> Engine:
    """Build an engine for a name table DSN. Nothing is connected until first use."""
    engine_kwargs: dict = {}
    connect_args: dict = {}

    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if ":memory:" in database_url or database_url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_pre_ping"] = True
        engine_kwargs["pool_size"] = 10
        engine_kwargs["max_overflow"] = 20
        engine_kwargs["pool_timeout"] = 30

    try:
        engine = create_engine(
            database_url,
            future=True,
            connect_args=connect_args,
            **engine_kwargs,
        )
    except (ArgumentError, NoSuchModuleError, ValueError) as exc:
        raise DatabaseConnectionError(f"unable to parse database connection string: {database_url}") from exc
    logger.info("Database engine created | dialect=%s", engine.dialect.name)
    return engine
