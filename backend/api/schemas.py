"""
Pydantic models for request/response validation
"""
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.item_utils import Item, ItemStatus
from utils.validation import EMAIL_PATTERN

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_STATUS_VALUES = ", ".join(status.value for status in ItemStatus)


# ===== Request Models =====

class ItemRequest(BaseModel):
    """
    Request model for creating or updating an item.

    Fields default to None and are validated explicitly so every missing or
    invalid field reports its own message instead of pydantic's generic one.
    """
    name: Optional[str] = Field(default=None, validate_default=True)
    description: Optional[str] = None
    status: Optional[ItemStatus] = Field(default=None, validate_default=True)
    email: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def name_required(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("Name is required")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def status_allowed(cls, value):
        if value is None:
            raise ValueError("Status cannot be null")
        if isinstance(value, ItemStatus):
            return value
        if not isinstance(value, str) or value not in {status.value for status in ItemStatus}:
            raise ValueError(f"Status must be one of: {_STATUS_VALUES}")
        return ItemStatus(value)

    @field_validator("email")
    @classmethod
    def email_format(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("Email is required")
        if not _EMAIL_RE.fullmatch(value):
            raise ValueError("Email must be properly formatted")
        return value

    def to_item(self, item_id: Optional[int] = None) -> Item:
        """Build the domain item, optionally pinned to an existing id"""
        return Item(
            id=item_id,
            name=self.name,
            description=self.description,
            status=self.status,
            email=self.email,
        )


# ===== Response Models =====

class ItemResponse(BaseModel):
    """Response model for item operations"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    status: ItemStatus
    email: str


class MessageResponse(BaseModel):
    """Error body returned when batch processing fails"""
    message: str
