"""Interfaces the engine consumes.

The loops depend on these Protocols rather than on the SQLite repository or
the SMTP notifier, so either side can be swapped (or faked in tests).
"""

from typing import List, Protocol

from goalsetting.db.models import Contact, Task


class TaskStore(Protocol):
    """Source and sink for tasks."""

    async def query_incomplete(self) -> List[Task]:
        """Fetch every task whose completion flag is false."""
        ...

    async def query_completed(self) -> List[Task]:
        """Fetch every task whose completion flag is true."""
        ...

    async def update_task(self, task: Task) -> None:
        """Persist completion flag, due date and completion counter."""
        ...


class Resolver(Protocol):
    """Looks up contact details for a task owner."""

    async def resolve(self, user_id: str) -> Contact | None: ...


class Notifier(Protocol):
    """Delivers one digest of pending tasks to one user."""

    async def send_digest(
        self, email: str, name: str, tasks: List[Task], is_morning: bool
    ) -> bool: ...
