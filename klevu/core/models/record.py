"""
Record model representing one unit of catalogue data submitted for indexing.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Record(BaseModel):
    """
    A catalogue record (product, category, page, ...) for the batch API.

    Nested maps are validated by RecordValidator rather than here, so that
    a batch can report every defect instead of failing on construction.

    Attributes:
        id: Unique record identifier
        type: Record type, e.g. "KLEVU_PRODUCT"
        relations: Links to other records, e.g. parent products
        attributes: Attribute name to value
        groups: Group name to {"attributes": {...}}
        channels: Channel name to {"attributes": {...}, "groups": {...}}
        display: Attribute name to display value
    """

    id: str
    type: str
    relations: dict[str, Any] | None = None
    attributes: dict[Any, Any] = Field(default_factory=dict)
    groups: dict[Any, Any] | None = None
    channels: dict[Any, Any] | None = None
    display: dict[Any, Any] | None = None

    @field_validator("relations", "attributes", "groups", "channels", "display", mode="before")
    @classmethod
    def empty_list_as_map(cls, v):
        """JSON encoders write an empty map as []."""
        if isinstance(v, list) and not v:
            return {}
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "id": "PROD001",
                "type": "KLEVU_PRODUCT",
                "attributes": {
                    "name": {"default": "Product One"},
                    "sku": "PROD001",
                    "prices": [
                        {"amount": 99.99, "currency": "GBP", "type": "defaultPrice"}
                    ],
                },
                "channels": {
                    "en_GB": {"attributes": {"url": "https://www.example.com/product-one"}}
                },
            }
        }

    def to_payload(self) -> dict[str, Any]:
        """Return the record as sent to the batch API, dropping empty fields."""
        payload: dict[str, Any] = {"id": self.id, "type": self.type}
        for field_name in ("relations", "attributes", "groups", "channels", "display"):
            value = getattr(self, field_name)
            if value:
                payload[field_name] = value
        return payload
