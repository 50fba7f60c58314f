"""
Validators for attribute, group and channel names.

Each check raises on the first failure, so a bad name always produces
exactly one error.
"""

import re
from typing import Any

from .base_validator import BaseValidator, describe_type


class NameValidator(BaseValidator):
    """
    Shared rules for identifier-like names.

    Subclasses set the label used in messages, the allowed pattern and
    (optionally) a maximum length.
    """

    label: str = "Name"
    pattern: re.Pattern = re.compile(r"[a-zA-Z0-9_]+")
    pattern_message: str = ""
    max_length: int | None = None

    def execute(self, data: Any) -> None:
        self.validate_type(data)
        self.validate_not_empty(data)
        self.validate_length(data)
        self.validate_pattern(data)

    def validate_type(self, data: Any) -> None:
        # None falls through to the "required" check, which reads better
        if data is not None and not isinstance(data, str):
            raise self.invalid_type(
                f"{self.label} must be string, received {describe_type(data)}"
            )

    def validate_not_empty(self, data: str | None) -> None:
        if not (data or "").strip():
            raise self.invalid_data(f"{self.label} is required")

    def validate_length(self, data: str) -> None:
        if self.max_length is not None and len(data) > self.max_length:
            raise self.invalid_data(
                f"{self.label} must be less than or equal to {self.max_length} characters"
            )

    def validate_pattern(self, data: str) -> None:
        if not self.pattern.fullmatch(data):
            raise self.invalid_data(self.pattern_message)


class AttributeNameValidator(NameValidator):
    """Attribute names: alphanumeric and underscores, no leading/trailing underscore, max 200."""

    ATTRIBUTE_NAME_MAXLENGTH = 200

    label = "Attribute Name"
    pattern = re.compile(r"(?!_)(?!.*_$)[a-zA-Z0-9_]+")
    pattern_message = (
        "Attribute Name must be alphanumeric, can include underscores (_) "
        "but cannot start or end with an underscore"
    )
    max_length = ATTRIBUTE_NAME_MAXLENGTH


class GroupNameValidator(NameValidator):
    """Group names: same characters as attribute names, without a length limit."""

    label = "Group Name"
    pattern = AttributeNameValidator.pattern
    pattern_message = (
        "Group Name must be alphanumeric, can include underscores (_) "
        "but cannot start or end with an underscore"
    )


class ChannelNameValidator(NameValidator):
    """Channel names: alphanumeric and underscores in any position."""

    label = "Channel Name"
    pattern_message = "Channel Name must be alphanumeric, and can include underscores (_)"
