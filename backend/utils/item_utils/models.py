"""
Item domain types shared by the store, the batch processor and the API layer.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import aiosqlite


class ItemStatus(str, Enum):
    """Lifecycle states an item can be in"""
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    PROCESSED = "PROCESSED"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass
class Item:
    """
    A single managed item.

    ``id`` is None until the store assigns one on first save.
    """
    name: str
    email: str
    status: ItemStatus = ItemStatus.NEW
    description: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: aiosqlite.Row) -> "Item":
        """Build an Item from an ``item`` table row"""
        return cls(
            id=row["item_id"],
            name=row["name"],
            description=row["description"],
            status=ItemStatus(row["status"]),
            email=row["email"],
        )
