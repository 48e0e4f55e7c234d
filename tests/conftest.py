"""Shared fixtures and in-memory fakes for the engine ports."""

from dataclasses import replace
from typing import List

import pytest
import pytest_asyncio

from goalsetting.db.migrations import run_migrations
from goalsetting.db.models import Contact, Task
from goalsetting.db.repository import Repository


class FakeTaskStore:
    """In-memory TaskStore; tasks are copied in and out like a real store."""

    def __init__(self, tasks: List[Task] | None = None):
        self.tasks = {t.id: replace(t) for t in tasks or []}
        self.updates: List[Task] = []
        self.fail_query = False
        self.fail_update_ids: set[int] = set()

    async def query_incomplete(self) -> List[Task]:
        if self.fail_query:
            raise ConnectionError("store unavailable")
        return [replace(t) for t in self.tasks.values() if not t.is_completed]

    async def query_completed(self) -> List[Task]:
        if self.fail_query:
            raise ConnectionError("store unavailable")
        return [replace(t) for t in self.tasks.values() if t.is_completed]

    async def update_task(self, task: Task) -> None:
        if task.id in self.fail_update_ids:
            raise ConnectionError(f"update failed for {task.id}")
        self.tasks[task.id] = replace(task)
        self.updates.append(replace(task))


class FakeResolver:
    """Resolver backed by a dict; unknown ids resolve to None."""

    def __init__(self, contacts: dict[str, Contact] | None = None):
        self.contacts = contacts or {}
        self.calls: List[str] = []
        self.failing: set[str] = set()

    async def resolve(self, user_id: str) -> Contact | None:
        self.calls.append(user_id)
        if user_id in self.failing:
            raise TimeoutError(f"lookup timed out for {user_id}")
        return self.contacts.get(user_id)


class FakeNotifier:
    """Records every digest; addresses in `failing` raise."""

    def __init__(self):
        self.sent: List[tuple[str, str, List[Task], bool]] = []
        self.failing: set[str] = set()

    async def send_digest(
        self, email: str, name: str, tasks: List[Task], is_morning: bool
    ) -> bool:
        if email in self.failing:
            raise ConnectionError(f"smtp refused {email}")
        self.sent.append((email, name, list(tasks), is_morning))
        return True


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest_asyncio.fixture()
async def repo(tmp_path):
    """Connected repository on a fresh SQLite file."""
    db_path = tmp_path / "goals.db"
    await run_migrations(db_path)
    repository = Repository(db_path)
    await repository.connect()
    yield repository
    await repository.close()


@pytest.fixture()
def make_store():
    return FakeTaskStore


@pytest.fixture()
def make_resolver():
    return FakeResolver
