"""
Database connection and initialization utilities.

This module provides:
- Database connection management (context manager for automatic cleanup)
- Database initialization (creates tables from schema.sql)
- Database version tracking (to detect schema changes)
"""

import os
import aiosqlite
from contextlib import asynccontextmanager
from config import DB_PATH, SCHEMA_PATH, RESET_DB_ON_STARTUP
from datetime import datetime, timezone


@asynccontextmanager
async def get_db():
    """
    Context manager for database connections.

    Provides a database connection that automatically:
    - Opens connection when entering context
    - Sets row factory to return dict-like rows (access columns by name)
    - Closes connection when exiting context

    Usage:
        async with get_db() as db:
            cursor = await db.execute("SELECT * FROM item")
            rows = await cursor.fetchall()
    """
    async with aiosqlite.connect(DB_PATH) as db:
        # Enable row factory to return dict-like rows (access by column name)
        db.row_factory = aiosqlite.Row
        yield db


async def init_db() -> None:
    """
    Initialize the database by creating all tables from schema.sql.

    This function:
    1. Deletes existing database if the reset flag is set
    2. Reads schema.sql and executes it to create all tables
    3. Creates db_metadata table for tracking database version
    4. Stores initialization timestamp in metadata

    An existing database is left untouched unless RESET_DB_ON_STARTUP is enabled.
    """
    # Skip re-initialization if database already exists and reset flag is not set
    if os.path.exists(DB_PATH) and not RESET_DB_ON_STARTUP:
        return

    # Delete existing database when reset flag is enabled
    if os.path.exists(DB_PATH) and RESET_DB_ON_STARTUP:
        os.remove(DB_PATH)

    # Read the schema file containing CREATE TABLE statements
    with open(SCHEMA_PATH, "r") as f:
        schema = f.read()

    async with aiosqlite.connect(DB_PATH) as db:
        await db.executescript(schema)

        # Metadata table stores the reset timestamp so clients can detect a fresh database
        await db.execute("""
            CREATE TABLE IF NOT EXISTS db_metadata (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)

        cursor = await db.execute(
            "SELECT value FROM db_metadata WHERE key = ?", ("db_init_timestamp",)
        )
        existing_metadata = await cursor.fetchone()

        if not existing_metadata:
            init_timestamp = datetime.now(timezone.utc).isoformat()
            await db.execute(
                "INSERT OR REPLACE INTO db_metadata (key, value) VALUES (?, ?)",
                ("db_init_timestamp", init_timestamp),
            )
        await db.commit()


async def get_db_version(db: aiosqlite.Connection) -> str | None:
    """Get the database version/timestamp"""
    cursor = await db.execute(
        "SELECT value FROM db_metadata WHERE key = ?", ("db_init_timestamp",)
    )
    row = await cursor.fetchone()
    return row["value"] if row else None
