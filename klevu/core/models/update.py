"""
Update model representing a single JSON-Patch style change to a record.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .enums import UpdateOperations


class Update(BaseModel):
    """
    A partial update applied to an existing record.

    Attributes:
        record_id: Identifier of the record to change
        op: One of "add", "remove", "replace"
        path: JSON Pointer to the value being changed
        value: New value for "add" and "replace" operations
    """

    record_id: str = Field("", alias="recordId")
    op: str = ""
    path: str | None = None
    value: Any = None

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "recordId": "PROD001",
                "op": "replace",
                "path": "/attributes/sku",
                "value": "PROD001-A",
            }
        }

    @field_validator("op", mode="before")
    @classmethod
    def unwrap_operation(cls, v):
        if isinstance(v, Enum):
            return v.value
        return v

    def get_operation(self) -> UpdateOperations | None:
        """Return the matching operation, or None if op is not recognised."""
        try:
            return UpdateOperations(self.op)
        except ValueError:
            return None
