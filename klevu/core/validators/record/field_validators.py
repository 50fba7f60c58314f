"""
Validators for the individual fields of a Record.

The nested validators (groups, channels) label each finding with the key it
was found under, so an error deep in a channel reads
"[channel] [group] [attribute] message".
"""

from typing import Any, Iterable, Mapping

from klevu.exceptions import ValidationException

from ..base_validator import (
    BaseValidator,
    describe_type,
    join_labelled_errors,
    label_errors,
)
from ..name_validators import (
    AttributeNameValidator,
    ChannelNameValidator,
    GroupNameValidator,
)

FIELD_ATTRIBUTES = "attributes"
FIELD_GROUPS = "groups"


def as_map(data: Any) -> Any:
    """Read an empty JSON array as an empty map; anything else is returned unchanged."""
    if isinstance(data, list) and not data:
        return {}
    return data


class RequiredStringValidator(BaseValidator):
    """Non-empty string; None is reported as missing rather than mistyped."""

    label: str = "Value"

    def execute(self, data: Any) -> None:
        if data is not None and not isinstance(data, str):
            raise self.invalid_type(f"{self.label} must be string, received {describe_type(data)}")
        if not (data or "").strip():
            raise self.invalid_data(f"{self.label} is required")


class IdValidator(RequiredStringValidator):
    label = "Record Id"


class TypeValidator(RequiredStringValidator):
    label = "Record Type"


class RelationsValidator(BaseValidator):
    """Relations are only type checked; their contents are passed through as-is."""

    def execute(self, data: Any) -> None:
        data = as_map(data)
        if data is not None and not isinstance(data, Mapping):
            raise self.invalid_type(f"Relations must be array|null, received {describe_type(data)}")


class AttributeMapValidator(BaseValidator):
    """
    Validates the keys of an attribute name to value map.

    Args:
        attribute_name_validator: Validator applied to each key
        data_validators: Extra validators run against the whole map once
            every key is valid
    """

    label: str = "Attributes"
    allow_none: bool = False

    def __init__(
        self,
        attribute_name_validator: BaseValidator | None = None,
        data_validators: Iterable[BaseValidator | None] | None = None,
    ):
        self.attribute_name_validator = attribute_name_validator or AttributeNameValidator()
        self.data_validators = [
            validator for validator in (data_validators or []) if validator is not None
        ]

    def execute(self, data: Any) -> None:
        data = as_map(data)
        self.validate_type(data)
        if not data:
            return
        self.validate_attribute_names(data)
        self.execute_data_validators(data)

    def validate_type(self, data: Any) -> None:
        if self.allow_none and data is None:
            return
        if not isinstance(data, Mapping):
            expected = "array|null" if self.allow_none else "array"
            raise self.invalid_type(f"{self.label} must be {expected}, received {describe_type(data)}")

    def validate_attribute_names(self, data: Mapping[Any, Any]) -> None:
        invalid_names = []
        errors: list[str] = []
        for attribute_name in data:
            try:
                self.attribute_name_validator.execute(attribute_name)
            except ValidationException as e:
                invalid_names.append(str(attribute_name))
                errors.extend(label_errors(attribute_name, e.errors))

        if errors:
            names = '", "'.join(invalid_names)
            raise self.invalid_data(
                *errors,
                message=f'Invalid keys for {self.label.lower()}: "{names}"',
            )

    def execute_data_validators(self, data: Mapping[Any, Any]) -> None:
        errors: list[str] = []
        for validator in self.data_validators:
            try:
                validator.execute(data)
            except ValidationException as e:
                errors.extend(e.errors)

        if errors:
            raise self.invalid_data(*errors, message=f"{self.label} data is not valid")


class AttributesValidator(AttributeMapValidator):
    """Record attributes: a map is required, although it may be empty."""


class DisplayValidator(AttributeMapValidator):
    """Record display values: optional map keyed by attribute name."""

    label = "Display"
    allow_none = True


class NestedRowsValidator(BaseValidator):
    """
    Validates a map of named rows (groups or channels).

    Errors for one row are collapsed into a single "[name] e1; e2" entry;
    the exception message lists the positions of the failing rows.
    """

    label: str = "Rows"
    row_label: str = "Row"

    def execute(self, data: Any) -> None:
        data = as_map(data)
        if data is not None and not isinstance(data, Mapping):
            raise self.invalid_type(
                f"{self.label} must be array or null, received {describe_type(data)}"
            )
        if not data:
            return

        errors: dict[int, str] = {}
        for row_index, (row_name, row_data) in enumerate(data.items()):
            row_errors = self.row_errors(row_name, row_data)
            if row_errors:
                errors[row_index] = join_labelled_errors(row_name, row_errors)

        if errors:
            raise self.invalid_data(
                *errors.values(),
                message=(
                    f"Invalid row(s) for {self.label.lower()}: "
                    f"{', '.join(str(index) for index in errors)}"
                ),
            )

    def row_errors(self, row_name: Any, row_data: Any) -> list[str]:
        errors: list[str] = []
        errors.extend(self.collect(self.name_validator, row_name))
        row_data = as_map(row_data)
        if not isinstance(row_data, Mapping):
            errors.append(f"{self.row_label} data must be array, received {describe_type(row_data)}")
        else:
            errors.extend(self.row_data_errors(row_data))
        return errors

    def row_data_errors(self, row_data: Mapping[str, Any]) -> list[str]:
        raise NotImplementedError

    @staticmethod
    def collect(validator: BaseValidator, data: Any) -> list[str]:
        try:
            validator.execute(data)
        except ValidationException as e:
            return list(e.errors)
        return []

    @staticmethod
    def nested(row_data: Mapping[str, Any], key: str) -> Any:
        value = row_data.get(key)
        return {} if value is None else value


class GroupsValidator(NestedRowsValidator):
    """Record groups: group name to {"attributes": {...}}."""

    label = "Groups"
    row_label = "Group"

    def __init__(
        self,
        group_name_validator: BaseValidator | None = None,
        attributes_validator: BaseValidator | None = None,
    ):
        self.name_validator = group_name_validator or GroupNameValidator()
        self.attributes_validator = attributes_validator or AttributesValidator()

    def row_data_errors(self, row_data: Mapping[str, Any]) -> list[str]:
        return self.collect(self.attributes_validator, self.nested(row_data, FIELD_ATTRIBUTES))


class ChannelsValidator(NestedRowsValidator):
    """Record channels: channel name to {"attributes": {...}, "groups": {...}}."""

    label = "Channels"
    row_label = "Channel"

    def __init__(
        self,
        channel_name_validator: BaseValidator | None = None,
        attributes_validator: BaseValidator | None = None,
        groups_validator: BaseValidator | None = None,
    ):
        self.name_validator = channel_name_validator or ChannelNameValidator()
        self.attributes_validator = attributes_validator or AttributesValidator()
        self.groups_validator = groups_validator or GroupsValidator(
            attributes_validator=self.attributes_validator,
        )

    def row_data_errors(self, row_data: Mapping[str, Any]) -> list[str]:
        return [
            *self.collect(self.attributes_validator, self.nested(row_data, FIELD_ATTRIBUTES)),
            *self.collect(self.groups_validator, self.nested(row_data, FIELD_GROUPS)),
        ]
