"""
Apply the SQL files in the migrations directory that have not been applied
"""

from __future__ import annotations

from pathlib import Path

import asyncpg
import structlog

from .. import db

logger = structlog.get_logger()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


@db.setup()
async def migrate_db() -> list[str]:
    applied = []
    async with db.connection() as con:
        await create_migrations_table(con=con)
        applied_migrations = await get_applied_migrations(con=con)
        for migrations_file in sorted(MIGRATIONS_DIR.glob("*.sql")):
            if migrations_file.stem not in applied_migrations:
                await apply_migration(path=migrations_file, con=con)
                applied.append(migrations_file.stem)

    return applied


async def create_migrations_table(*, con: asyncpg.Connection[asyncpg.Record]) -> None:
    await con.execute(
        """
        create table if not exists migrations (
            name varchar primary key,
            applied_at timestamp with time zone not null
        );
        """
    )


async def get_applied_migrations(
    *, con: asyncpg.Connection[asyncpg.Record]
) -> set[str]:
    return {row["name"] for row in await con.fetch("SELECT name FROM migrations")}


async def apply_migration(
    *, path: Path, con: asyncpg.Connection[asyncpg.Record]
) -> None:
    name = path.stem

    logger.info("Applying migration", name=name)

    async with con.transaction():
        await con.execute(
            "INSERT INTO migrations (name, applied_at) VALUES ($1, now())", name
        )
        await con.execute(path.read_text())
