"""
SQLite-backed item store.

Every call opens its own connection through ``get_db()`` so concurrent calls
for different items never share a connection or a transaction.
"""
from dataclasses import replace
from typing import List, Optional

from db import get_db
from .models import Item


class ItemStore:
    """CRUD access to the ``item`` table plus id listing for batch runs"""

    async def find_all(self) -> List[Item]:
        """
        Get all items.

        Returns:
            List of items ordered by id
        """
        async with get_db() as db:
            cursor = await db.execute("SELECT * FROM item ORDER BY item_id")
            rows = await cursor.fetchall()
        return [Item.from_row(row) for row in rows]

    async def find_by_id(self, item_id: int) -> Optional[Item]:
        """
        Get a single item.

        Args:
            item_id: Item ID

        Returns:
            The item, or None if not found
        """
        async with get_db() as db:
            cursor = await db.execute("SELECT * FROM item WHERE item_id = ?", (item_id,))
            row = await cursor.fetchone()
        return Item.from_row(row) if row else None

    async def save(self, item: Item) -> Item:
        """
        Insert or update an item.

        Items without an id are inserted and get a fresh id. Items with an id
        are written under that id, replacing any existing row.

        Args:
            item: Item to persist (not modified)

        Returns:
            The persisted item, carrying its id
        """
        async with get_db() as db:
            if item.id is None:
                cursor = await db.execute(
                    """INSERT INTO item (name, description, status, email)
                       VALUES (?, ?, ?, ?)""",
                    (item.name, item.description, item.status.value, item.email)
                )
                item_id = cursor.lastrowid
            else:
                await db.execute(
                    """INSERT INTO item (item_id, name, description, status, email)
                       VALUES (?, ?, ?, ?, ?)
                       ON CONFLICT(item_id) DO UPDATE SET
                           name = excluded.name,
                           description = excluded.description,
                           status = excluded.status,
                           email = excluded.email""",
                    (item.id, item.name, item.description, item.status.value, item.email)
                )
                item_id = item.id
            await db.commit()
        return replace(item, id=item_id)

    async def delete_by_id(self, item_id: int) -> None:
        """Delete an item. Deleting a missing id is a no-op."""
        async with get_db() as db:
            await db.execute("DELETE FROM item WHERE item_id = ?", (item_id,))
            await db.commit()

    async def find_all_ids(self) -> List[int]:
        """Snapshot of every item id currently stored"""
        async with get_db() as db:
            cursor = await db.execute("SELECT item_id FROM item ORDER BY item_id")
            rows = await cursor.fetchall()
        return [row[0] for row in rows]
