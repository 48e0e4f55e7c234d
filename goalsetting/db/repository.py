"""Database repository - all SQL queries.

The repository plays two roles for the engine: it is the task store
(incomplete/completed queries and the completion update) and the contact
resolver (profile lookup by owner id).
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import List

import aiosqlite

from goalsetting.db.models import Contact, Task, parse_priority, parse_recurrence

logger = logging.getLogger(__name__)


class Repository:
    """Database access layer."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open database connection."""
        self._db = await aiosqlite.connect(self.db_path)
        self._db.row_factory = aiosqlite.Row
        logger.info(f"Connected to database at {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self._db:
            await self._db.close()
            self._db = None
            logger.info("Database connection closed")

    @property
    def db(self) -> aiosqlite.Connection:
        """Get the database connection."""
        if self._db is None:
            raise RuntimeError("Database not connected")
        return self._db

    # Task operations

    async def create_task(self, task: Task) -> Task:
        """Create a new task."""
        async with self.db.execute(
            """
            INSERT INTO tasks (
                user_id, title, description, category, priority,
                due_date, is_completed, recurrence, completion_count
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            RETURNING *
            """,
            (
                task.user_id,
                task.title,
                task.description,
                task.category,
                task.priority,
                task.due_date.isoformat() if task.due_date else None,
                1 if task.is_completed else 0,
                task.recurrence,
                task.completion_count,
            ),
        ) as cursor:
            row = await cursor.fetchone()
            await self.db.commit()
            return self._row_to_task(row)

    async def get_task(self, task_id: int) -> Task | None:
        """Get a task by ID."""
        async with self.db.execute(
            "SELECT * FROM tasks WHERE id = ?", (task_id,)
        ) as cursor:
            row = await cursor.fetchone()
            if row:
                return self._row_to_task(row)
            return None

    async def query_incomplete(self) -> List[Task]:
        """Get every task not yet completed, across all users."""
        return await self._query_by_completion(False)

    async def query_completed(self) -> List[Task]:
        """Get every completed task, across all users."""
        return await self._query_by_completion(True)

    async def update_task(self, task: Task) -> None:
        """Persist the fields the engine owns: completion flag, due date, counter."""
        if task.id is None:
            raise ValueError("Cannot update a task without an id")

        await self.db.execute(
            """
            UPDATE tasks SET
                is_completed = ?,
                due_date = ?,
                completion_count = ?
            WHERE id = ?
            """,
            (
                1 if task.is_completed else 0,
                task.due_date.isoformat() if task.due_date else None,
                task.completion_count,
                task.id,
            ),
        )
        await self.db.commit()

    # Profile operations

    async def upsert_profile(
        self, user_id: str, email: str | None, display_name: str | None
    ) -> None:
        """Create or replace a user's profile."""
        await self.db.execute(
            """
            INSERT INTO profiles (user_id, email, display_name)
            VALUES (?, ?, ?)
            ON CONFLICT (user_id) DO UPDATE SET
                email = excluded.email,
                display_name = excluded.display_name
            """,
            (user_id, email, display_name),
        )
        await self.db.commit()

    async def resolve(self, user_id: str) -> Contact | None:
        """Look up contact details for a task owner."""
        async with self.db.execute(
            "SELECT email, display_name FROM profiles WHERE user_id = ?",
            (user_id,),
        ) as cursor:
            row = await cursor.fetchone()
            if row:
                return Contact(email=row["email"], name=row["display_name"])
            return None

    # Helper methods

    async def _query_by_completion(self, completed: bool) -> List[Task]:
        async with self.db.execute(
            "SELECT * FROM tasks WHERE is_completed = ? ORDER BY user_id, id",
            (1 if completed else 0,),
        ) as cursor:
            rows = await cursor.fetchall()
            return [self._row_to_task(row) for row in rows]

    def _row_to_task(self, row: aiosqlite.Row) -> Task:
        """Convert a database row to a Task object."""
        return Task(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            description=row["description"],
            category=row["category"],
            priority=parse_priority(row["priority"]),
            due_date=date.fromisoformat(row["due_date"]) if row["due_date"] else None,
            is_completed=bool(row["is_completed"]),
            recurrence=parse_recurrence(row["recurrence"]),
            completion_count=row["completion_count"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
