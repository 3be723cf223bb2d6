from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any

import asyncpg
import httpx
import pytest

from weatherskill import db
from weatherskill.consent.store import MemoryConsentTokenStore
from weatherskill.db.migrations import migrate_db
from weatherskill.server import app


def pytest_configure(config: pytest.Config) -> None:
    os.environ.setdefault("MAPS_API_KEY", "maps-key")
    os.environ.setdefault("DARKSKY_API_KEY", "darksky-key")
    os.environ.setdefault("S3_BUCKET", "weather-images")
    os.environ.setdefault("IMGIX_DOMAIN", "weather.imgix.net")
    os.environ.setdefault("IMGIX_TOKEN", "imgix-token")


def pytest_sessionfinish() -> None:
    """
    Silence exceptions raised when logging during atexit callbacks
    """

    logging.raiseExceptions = False


@pytest.fixture(autouse=True)
def _environment(monkeypatch: pytest.MonkeyPatch) -> None:
    # Tests that check the application id set it themselves
    monkeypatch.delenv("ALEXA_APP_ID", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)


#######################
# Basic project setup #
#######################


async def _setup_db() -> None:
    con = await asyncpg.connect(database="postgres")
    try:
        try:
            await con.execute("CREATE DATABASE weatherskill_test")
        except asyncpg.exceptions.DuplicateDatabaseError:
            pass
        await migrate_db()
    finally:
        await con.close()


async def _drop_db() -> None:
    con = await asyncpg.connect(database="postgres")
    try:
        await con.execute("DROP DATABASE weatherskill_test")
    finally:
        await con.close()


@pytest.fixture(scope="session")
def setup_db() -> Iterator[None]:
    os.environ["PGDATABASE"] = "weatherskill_test"

    try:
        asyncio.run(_setup_db())
    except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
        pytest.skip(f"PostgreSQL is not available: {e}")

    try:
        yield
    finally:
        asyncio.run(_drop_db())


@pytest.fixture
async def _connection(
    setup_db: None,
) -> AsyncIterator[asyncpg.Connection[asyncpg.Record]]:
    connection = await asyncpg.connect()
    try:
        transaction = connection.transaction()
        await transaction.start()
        try:
            yield connection
        finally:
            await transaction.rollback()
    finally:
        await connection.close()


@pytest.fixture
def connection(
    _connection: asyncpg.Connection[asyncpg.Record],
) -> Iterator[asyncpg.Connection[asyncpg.Record]]:
    # We have to set the contextvar in a sync fixture, because async pytest
    # fixtures are executed in a separate task which means they don't share
    # context with the test function.
    with db.set_connection(_connection):
        yield _connection


############
# Requests #
############


@pytest.fixture
def user_id() -> str:
    return "amzn1.ask.account.TESTUSER"


@pytest.fixture
def device_id() -> str:
    return "amzn1.ask.device.TESTDEVICE"


@pytest.fixture
def application_id() -> str:
    return "amzn1.ask.skill.TESTSKILL"


@pytest.fixture
def build_event(
    user_id: str, device_id: str, application_id: str
) -> Callable[..., dict[str, Any]]:
    """
    Build a request envelope the way Alexa sends them.
    """

    def _build(
        name: str,
        *,
        slots: dict[str, str | None] | None = None,
        consent_token: str | None = None,
        attributes: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        permissions = {"consentToken": consent_token} if consent_token else {}
        user = {"userId": user_id, "permissions": permissions}
        application = {"applicationId": application_id}

        if name in ("LaunchRequest", "SessionEndedRequest"):
            request: dict[str, Any] = {"type": name}
        else:
            request = {
                "type": "IntentRequest",
                "intent": {
                    "name": name,
                    "slots": {
                        slot: {"name": slot, "value": value}
                        for slot, value in (slots or {}).items()
                    },
                },
            }
        request.update({"requestId": "amzn1.echo-api.request.1", "locale": "en-US"})

        return {
            "version": "1.0",
            "session": {
                "new": name == "LaunchRequest",
                "sessionId": "amzn1.echo-api.session.1",
                "application": application,
                "attributes": attributes or {},
                "user": user,
            },
            "context": {
                "System": {
                    "application": application,
                    "user": user,
                    "device": {"deviceId": device_id, "supportedInterfaces": {}},
                    "apiEndpoint": "https://api.amazonalexa.com",
                    "apiAccessToken": "access-token",
                }
            },
            "request": request,
        }

    return _build


@pytest.fixture
def store() -> MemoryConsentTokenStore:
    return MemoryConsentTokenStore()


#################
# External APIs #
#################


@pytest.fixture
def forecast_data() -> dict[str, Any]:
    return {
        "latitude": 38.8977,
        "longitude": -77.0365,
        "timezone": "America/New_York",
        "currently": {
            "time": 1509993277,
            "summary": "Drizzle",
            "icon": "rain",
            "temperature": 66.1,
            "apparentTemperature": 66.31,
            "dewPoint": 60.77,
            "humidity": 0.83,
            "nearestStormDistance": 0,
        },
        "minutely": {
            "summary": "Light rain stopping in 13 min.",
            "icon": "rain",
            "data": [],
        },
        "hourly": {
            "summary": "Rain starting later this afternoon.",
            "icon": "rain",
            "data": [
                {"time": 1509991200, "apparentTemperature": 65.76},
                {"time": 1509994800, "apparentTemperature": 66.31},
                {"time": 1509998400, "apparentTemperature": 67.3},
                {"time": 1510002000, "apparentTemperature": 58.2},
            ],
        },
        "daily": {
            "summary": "Mixed precipitation throughout the week.",
            "icon": "rain",
            "data": [],
        },
        "flags": {"units": "us"},
    }


@pytest.fixture
def geocoding_data() -> dict[str, Any]:
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": "Washington, DC, USA",
                "geometry": {"location": {"lat": 38.9071923, "lng": -77.0368707}},
            }
        ],
    }


########
# APIs #
########


@pytest.fixture
async def client() -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
