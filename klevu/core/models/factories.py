"""
Factories building indexing models from untyped mappings (JSON, YAML, CLI input).
"""

from typing import Any, Mapping

from .attribute import Attribute
from .record import Record
from .update import Update


class AttributeFactory:
    """Creates Attribute models from API payloads."""

    def create(self, data: Mapping[str, Any]) -> Attribute:
        """
        Create an attribute.

        A string label is treated as the default label.

        Raises:
            ValueError: If required keys are missing or values have the wrong type
        """
        data = dict(data)
        if isinstance(data.get("label"), str):
            data["label"] = {"default": data["label"]}
        return Attribute.model_validate(data)


class RecordFactory:
    """Creates Record models from mappings."""

    def create(self, data: Mapping[str, Any]) -> Record:
        if not isinstance(data, Mapping):
            raise ValueError(f"Record data must be a mapping, received {type(data).__name__}")
        return Record.model_validate(dict(data))


class UpdateFactory:
    """Creates Update models from mappings keyed recordId/record_id, op, path, value."""

    def create(self, data: Mapping[str, Any]) -> Update:
        if not isinstance(data, Mapping):
            raise ValueError(f"Update data must be a mapping, received {type(data).__name__}")
        return Update.model_validate(dict(data))
