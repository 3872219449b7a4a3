import logging
from decimal import Decimal
from typing import Any

from sqlalchemy import URL, text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from speechviz.config import Config
from speechviz.errors import ErrorType
from speechviz.exceptions import AppException
from speechviz.schemas.database import DatabaseConfig

logger = logging.getLogger(__name__)


def build_url(config: DatabaseConfig, driver: str | None = None) -> URL:
    """Build an async SQLAlchemy URL from caller-supplied credentials."""
    return URL.create(
        drivername=driver or Config.DATABASE_DRIVER,
        username=config.user,
        password=config.password or None,
        host=config.host,
        port=config.port,
        database=config.database,
    )


def error_detail(exc: Exception) -> str:
    """Driver message for a database error, without SQLAlchemy's boilerplate."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def _to_json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return value


class Database:
    """One database connection, scoped to a single request.

    Usage::

        async with Database.from_config(config) as db:
            rows = await db.execute_query("SELECT 1")
    """

    def __init__(self, url: str | URL):
        self.url = url
        self.engine: AsyncEngine | None = None
        self.conn: AsyncConnection | None = None

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "Database":
        return cls(build_url(config))

    @property
    def name(self) -> str:
        return self.engine.url.database if self.engine else ""

    async def connect(self):
        """Open the connection and check that the server accepts it."""
        # NullPool: connections are never shared between requests
        self.engine = create_async_engine(self.url, echo=False, poolclass=NullPool)
        try:
            self.conn = await self.engine.connect()
            await self.conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            detail = error_detail(e)
            logger.error(f"DB connection failed: {detail}")
            await self.disconnect()
            raise AppException(ErrorType.DB_CONNECTION, f"Database connection failed: {detail}")
        logger.info(f"Connected to database '{self.name}'")

    async def disconnect(self):
        """Close the connection and dispose of the engine."""
        if self.conn is not None:
            await self.conn.close()
            self.conn = None
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None

    async def __aenter__(self) -> "Database":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    async def execute_query(self, sql: str) -> list[dict[str, Any]]:
        """Execute a query and return results as list of dicts.

        The surrounding transaction is never committed.
        """
        if self.conn is None:
            await self.connect()

        # Raw driver SQL: no bind-parameter parsing of model-written text
        try:
            result = await self.conn.exec_driver_sql(
                sql, execution_options={"no_parameters": True}
            )
        except SQLAlchemyError:
            await self.conn.rollback()
            raise

        if not result.returns_rows:
            return []

        output = []
        for row in result.mappings():
            output.append({key: _to_json_value(value) for key, value in row.items()})
        return output

    async def run_sync(self, fn):
        """Run a synchronous callable (e.g. an Inspector routine) on the connection."""
        if self.conn is None:
            await self.connect()
        return await self.conn.run_sync(fn)
