"""Schema setup for the tasks and profiles tables."""

import logging
from pathlib import Path

import aiosqlite

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


async def run_migrations(db_path: Path) -> None:
    """Create the goal tables and indexes if they are missing.

    Every statement in schema.sql is idempotent (IF NOT EXISTS), so this is
    safe to run on each startup against an existing database.
    """
    schema_sql = SCHEMA_PATH.read_text()

    async with aiosqlite.connect(db_path) as db:
        await db.executescript(schema_sql)
        await db.commit()

    logger.info(f"Goal schema applied to {db_path}")
