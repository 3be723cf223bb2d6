from __future__ import annotations

import os
import textwrap
import threading
from contextlib import asynccontextmanager, contextmanager
from contextvars import ContextVar
from typing import Any, AsyncIterator, Iterator, Optional

import asyncpg
import structlog

from ..utils import timed

logger = structlog.get_logger()

current_connection: ContextVar[asyncpg.Connection[asyncpg.Record]] = ContextVar(
    "connection"
)

thread_local = threading.local()

SERVER_SETTINGS = {
    "timezone": "UTC",
}


def is_configured() -> bool:
    """
    Whether a database has been configured through DATABASE_URL.
    """

    return bool(os.environ.get("DATABASE_URL"))


def is_connected() -> bool:
    """
    Whether the current task has a connection or a pool to lease one from.
    """

    if getattr(thread_local, "connection_pool", None) is not None:
        return True

    try:
        current_connection.get()
    except LookupError:
        return False
    return True


@asynccontextmanager
async def setup() -> AsyncIterator[None]:
    """
    Configure database connectivity with a single connection.
    """

    dsn = os.environ.get("DATABASE_URL", None)

    con = await asyncpg.connect(dsn=dsn, server_settings=SERVER_SETTINGS)
    try:
        with set_connection(con):
            yield
    finally:
        await con.close()


async def connect() -> asyncpg.pool.Pool[asyncpg.Record]:
    assert getattr(thread_local, "connection_pool", None) is None
    dsn = os.environ.get("DATABASE_URL", None)
    pool = thread_local.connection_pool = await asyncpg.create_pool(
        dsn=dsn, server_settings=SERVER_SETTINGS
    )
    assert pool is not None
    return pool


async def disconnect() -> None:
    assert getattr(thread_local, "connection_pool", None) is not None
    await thread_local.connection_pool.close()
    thread_local.connection_pool = None


@contextmanager
def set_connection(con: asyncpg.Connection[asyncpg.Record]) -> Iterator[None]:
    """
    Set the connection for the current task
    """

    reset_token = current_connection.set(con)
    try:
        yield
    finally:
        current_connection.reset(reset_token)


@asynccontextmanager
async def connection() -> AsyncIterator[asyncpg.Connection[asyncpg.Record]]:
    """
    Get or acquire a connection for the current task.
    """

    # First try to use the connection assigned to this task
    try:
        connection = current_connection.get()
        yield connection
    except LookupError:
        pass
    else:
        return

    # Fall back to leasing a connection from the connection pool
    if pool := getattr(thread_local, "connection_pool", None):
        logger.debug("Leasing connection from pool")
        async with pool.acquire() as con:
            with set_connection(con):
                yield con
    else:
        raise RuntimeError(
            "No connection or connection pool configured for current task"
        )


async def execute(sql: str, *args: Any, timeout: Optional[float] = None) -> str:
    async with connection() as con:
        with log_query(sql, args):
            return await con.execute(sql, *args, timeout=timeout)


async def fetchrow(
    sql: str, *args: Any, timeout: Optional[float] = None
) -> asyncpg.Record | None:
    async with connection() as con:
        with log_query(sql, args):
            return await con.fetchrow(sql, *args, timeout=timeout)


async def fetchval(
    sql: str, *args: Any, column: int = 0, timeout: Optional[float] = None
) -> Any:
    async with connection() as con:
        with log_query(sql, args):
            return await con.fetchval(sql, *args, column=column, timeout=timeout)


###########
# Helpers #
###########


@contextmanager
def log_query(sql: str, args: Any) -> Iterator[None]:
    with timed("Execute query", sql=textwrap.shorten(sql, 100)):
        yield
