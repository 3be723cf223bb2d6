"""
Storage for device address consent tokens.

Some requests, like the one launching the skill, carry the consent token the
user granted, while follow-up intents in the same session may not. The token
is stored by user ID so it can be looked up for those requests.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol

import structlog

from .. import db
from .queries import get_consent_token, save_consent_token

logger = structlog.get_logger()


class ConsentTokenStore(Protocol):
    async def get(self, user_id: str) -> str | None: ...

    async def put(self, user_id: str, token: str) -> None: ...


class MemoryConsentTokenStore:
    """Keeps tokens in process memory. Used when no database is configured."""

    def __init__(self) -> None:
        self.tokens: dict[str, str] = {}

    async def get(self, user_id: str) -> str | None:
        return self.tokens.get(user_id)

    async def put(self, user_id: str, token: str) -> None:
        self.tokens[user_id] = token


class DatabaseConsentTokenStore:
    """Keeps tokens in the consent_token table."""

    async def get(self, user_id: str) -> str | None:
        return await get_consent_token(user_id=user_id)

    async def put(self, user_id: str, token: str) -> None:
        await save_consent_token(user_id=user_id, token=token)


_memory_store = MemoryConsentTokenStore()


async def get_consent_store() -> ConsentTokenStore:
    """
    The store to use for the current task: the database if a connection is
    available, process memory otherwise.
    """

    if db.is_connected():
        return DatabaseConsentTokenStore()

    logger.debug("No database connection, keeping consent tokens in memory")
    return _memory_store


@asynccontextmanager
async def open_consent_store() -> AsyncIterator[ConsentTokenStore]:
    """
    Open a store for a single request outside the server, connecting to the
    database for the duration of the request if one is configured.
    """

    if db.is_configured() and not db.is_connected():
        async with db.setup():
            yield DatabaseConsentTokenStore()
    else:
        yield await get_consent_store()
