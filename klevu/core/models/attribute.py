"""
Attribute model representing an indexing attribute definition.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from klevu.exceptions import CouldNotUpdateException


class Attribute(BaseModel):
    """
    Definition of an attribute registered against a Klevu account.

    Immutable (core) attributes reject any change to their properties once
    created; only the immutable flag itself may be changed.

    Attributes:
        attribute_name: Unique attribute code
        datatype: One of the DataType values
        label: Labels keyed by ISO 639-1 language code, or "default"
        searchable: Attribute is used in search matching
        filterable: Attribute can be used as a filter
        returnable: Attribute is returned in search results
        abbreviate: Attribute values may be abbreviated
        rangeable: Attribute supports range filtering
        immutable: Core attribute which cannot be modified
    """

    attribute_name: str = Field(..., alias="attributeName")
    datatype: str
    label: dict[str, str] = Field(default_factory=dict)
    searchable: bool = True
    filterable: bool = True
    returnable: bool = True
    abbreviate: bool = False
    rangeable: bool = False
    immutable: bool = False

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "attributeName": "my_custom_attribute",
                "datatype": "STRING",
                "label": {"default": "My Custom Attribute"},
                "searchable": True,
                "filterable": True,
                "returnable": True,
            }
        }

    @field_validator("datatype", mode="before")
    @classmethod
    def unwrap_datatype(cls, v):
        """Accept DataType members as well as raw strings."""
        if isinstance(v, Enum):
            return v.value
        return v

    def __setattr__(self, name: str, value: Any) -> None:
        if name != "immutable" and name in type(self).model_fields and self.immutable:
            raise CouldNotUpdateException(
                f"Cannot update {name} property of immutable Attribute"
            )
        super().__setattr__(name, value)

    def add_label(self, label: str, key: str = "default") -> None:
        """
        Add or replace a single label.

        Args:
            label: Label text
            key: Language code (ISO 639-1) or "default"

        Raises:
            CouldNotUpdateException: If the attribute is immutable
        """
        if self.immutable:
            raise CouldNotUpdateException(
                "Cannot update label property of immutable Attribute"
            )
        self.label[key] = label

    def to_payload(self) -> dict[str, Any]:
        """Return the attribute as sent to and received from the API."""
        return self.model_dump(by_alias=True)
