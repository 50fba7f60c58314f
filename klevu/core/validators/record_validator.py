"""
RecordValidator - validates a whole Record, including nested groups and channels.
"""

from typing import Any, Iterable, Mapping

from klevu.core.models import Record
from klevu.exceptions import ValidationException

from .base_validator import BaseValidator, describe_type, prefix_field_errors
from .record import (
    AttributesValidator,
    ChannelsValidator,
    DisplayValidator,
    GroupsValidator,
    IdValidator,
    RelationsValidator,
    TypeValidator,
)

# Fields are always checked in this order
RECORD_FIELDS = ("id", "type", "relations", "attributes", "groups", "channels", "display")

FieldValidators = BaseValidator | Iterable[BaseValidator] | None


def default_field_validators() -> dict[str, list[BaseValidator]]:
    """Build the validators applied to each Record field when none are supplied."""
    attributes_validator = AttributesValidator()
    return {
        "id": [IdValidator()],
        "type": [TypeValidator()],
        "relations": [RelationsValidator()],
        "attributes": [attributes_validator],
        "groups": [GroupsValidator(attributes_validator=attributes_validator)],
        "channels": [ChannelsValidator(attributes_validator=attributes_validator)],
        "display": [DisplayValidator()],
    }


class RecordValidator(BaseValidator):
    """
    Runs per-field validators over a Record and accumulates every failure.

    Each error is prefixed with the field it belongs to ("attributes: ...").
    Checks never short-circuit: a record with several defects reports all
    of them.

    Args:
        field_validators: Field name to a validator or list of validators.
            Supplied entries replace the default for that field; None
            disables validation of that field. Fields that are not
            mentioned keep their defaults.
    """

    def __init__(self, field_validators: Mapping[str, FieldValidators] | None = None):
        self.field_validators = default_field_validators()
        for field_name, validators in (field_validators or {}).items():
            self.set_field_validators(field_name, validators)

    def set_field_validators(self, field_name: str, validators: FieldValidators) -> None:
        if validators is None:
            self.field_validators.pop(field_name, None)
            return
        if isinstance(validators, BaseValidator):
            validators = [validators]
        self.field_validators[field_name] = list(validators)

    def execute(self, data: Any) -> None:
        if not isinstance(data, Record):
            raise self.invalid_type(
                f"Record must be instance of {Record.__name__}, received {describe_type(data)}"
            )

        errors: list[str] = []
        for field_name in self.ordered_fields():
            value = getattr(data, field_name, None)
            try:
                for validator in self.field_validators[field_name]:
                    validator.execute(value)
            except ValidationException as e:
                errors.extend(prefix_field_errors(field_name, e.errors))

        if errors:
            raise self.invalid_data(*errors)

    def ordered_fields(self) -> list[str]:
        known = [field for field in RECORD_FIELDS if field in self.field_validators]
        extra = [field for field in self.field_validators if field not in RECORD_FIELDS]
        return known + extra
