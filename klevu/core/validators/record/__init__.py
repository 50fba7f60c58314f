"""
Validators for the fields of an indexing Record.
"""

from .field_validators import (
    AttributeMapValidator,
    AttributesValidator,
    ChannelsValidator,
    DisplayValidator,
    GroupsValidator,
    IdValidator,
    NestedRowsValidator,
    RelationsValidator,
    TypeValidator,
)

__all__ = [
    "AttributeMapValidator",
    "AttributesValidator",
    "ChannelsValidator",
    "DisplayValidator",
    "GroupsValidator",
    "IdValidator",
    "NestedRowsValidator",
    "RelationsValidator",
    "TypeValidator",
]
