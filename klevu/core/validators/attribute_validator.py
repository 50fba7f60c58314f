"""
AttributeValidator - validates an attribute definition before it is saved.
"""

from typing import Any

from klevu.core.models import Attribute, DataType
from klevu.exceptions import ValidationException

from .base_validator import BaseValidator, describe_type
from .name_validators import AttributeNameValidator


class AttributeValidator(BaseValidator):
    """
    Validates the name and datatype of an Attribute.

    Name and datatype errors are accumulated. Datatype restrictions apply
    only to custom attributes; immutable (core) attributes may use any
    datatype and skip the datatype checks entirely.
    """

    def __init__(self, attribute_name_validator: BaseValidator | None = None):
        self.attribute_name_validator = attribute_name_validator or AttributeNameValidator()

    def execute(self, data: Any) -> None:
        if not isinstance(data, Attribute):
            raise self.invalid_type(
                f"Attribute must be instance of {Attribute.__name__}; received {describe_type(data)}"
            )

        errors: list[str] = []
        try:
            self.attribute_name_validator.execute(data.attribute_name)
        except ValidationException as e:
            errors.extend(e.errors)

        if not data.immutable:
            errors.extend(self.datatype_errors(data.datatype))

        if errors:
            raise self.invalid_data(*errors)

    @staticmethod
    def datatype_errors(datatype: str) -> list[str]:
        if not (datatype or "").strip():
            return ["Attribute datatype must not be empty"]

        try:
            datatype_enum = DataType(datatype)
        except ValueError:
            return [f'Attribute datatype "{datatype}" is not a recognised value']

        if not datatype_enum.is_available_to_custom_attributes():
            return [f'Attribute datatype "{datatype_enum.value}" is not available to custom attributes']

        return []
