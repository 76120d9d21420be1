"""
Pytest configuration and shared fixtures
"""
import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock, patch

import pytest

from main import app
from api.dependencies import get_item_store
from utils.item_utils import Item, ItemStatus


class InMemoryItemStore:
    """
    Dict-backed item store for tests.

    Each store method is an AsyncMock wrapping the real behaviour, so tests
    can assert on calls and inject failures with ``side_effect``.
    """

    def __init__(self, items=None):
        self.items = {}
        self._next_id = 1
        for item in items or []:
            self._put(item)
        self.find_all = AsyncMock(side_effect=self._find_all)
        self.find_by_id = AsyncMock(side_effect=self._find_by_id)
        self.save = AsyncMock(side_effect=self._save)
        self.delete_by_id = AsyncMock(side_effect=self._delete_by_id)
        self.find_all_ids = AsyncMock(side_effect=self._find_all_ids)

    def _put(self, item):
        if item.id is None:
            item = replace(item, id=self._next_id)
        self._next_id = max(self._next_id, item.id + 1)
        self.items[item.id] = item
        return item

    async def _find_all(self):
        return list(self.items.values())

    async def _find_by_id(self, item_id):
        return self.items.get(item_id)

    async def _save(self, item):
        return self._put(item)

    async def _delete_by_id(self, item_id):
        self.items.pop(item_id, None)

    async def _find_all_ids(self):
        return list(self.items.keys())


def make_item(item_id=None, name="Test Item", status=ItemStatus.NEW, email="test@example.com"):
    """Build an item with sensible defaults"""
    return Item(
        id=item_id,
        name=name,
        description="This Description",
        status=status,
        email=email,
    )



@pytest.fixture
def memory_store():
    """Store pre-loaded with items 1, 2 and 3"""
    return InMemoryItemStore([make_item(1), make_item(2), make_item(3)])


@pytest.fixture
def api_store(memory_store):
    """Route the API's item store dependency to the in-memory store"""
    app.dependency_overrides[get_item_store] = lambda: memory_store
    yield memory_store
    app.dependency_overrides.clear()


@pytest.fixture
async def temp_db(tmp_path):
    """Fresh SQLite database built from schema.sql; get_db() points at it"""
    db_path = str(tmp_path / "items_test.db")
    with patch('db.DB_PATH', db_path), patch('db.RESET_DB_ON_STARTUP', True):
        from db import init_db
        await init_db()
        yield db_path


async def wait_until(predicate, timeout=2.0, interval=0.01):
    """Poll ``predicate`` until it is true or ``timeout`` seconds pass"""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            return False
        await asyncio.sleep(interval)
    return True
