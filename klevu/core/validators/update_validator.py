"""
UpdateValidator - validates a partial (JSON Patch style) record update.
"""

import re
from typing import Any

from klevu.core.models import Update, UpdateOperations
from klevu.exceptions import ValidationException

from .base_validator import BaseValidator, describe_type
from .record.field_validators import IdValidator

_SEGMENT_CHAR = r"(?:[-._~a-zA-Z0-9]|%[a-fA-F0-9]{2}|[!$&'()*+,;=]|@)"
_SEGMENT_CHAR_OR_COLON = r"(?:[-._~a-zA-Z0-9]|%[a-fA-F0-9]{2}|[!$&'()*+,;=]|@|:)"

# Relative references and absolute JSON Pointers
JSON_POINTER_PATTERN = re.compile(
    rf"((?:{_SEGMENT_CHAR}+\/{_SEGMENT_CHAR_OR_COLON}*)"
    rf"|{_SEGMENT_CHAR}+\/?{_SEGMENT_CHAR_OR_COLON}*(\/{_SEGMENT_CHAR_OR_COLON}*)?"
    rf"|\/{_SEGMENT_CHAR}+(\/{_SEGMENT_CHAR_OR_COLON}*)*"
    rf"|(?:\/{_SEGMENT_CHAR_OR_COLON}*)*)"
)


class UpdateValidator(BaseValidator):
    """
    Validates record id, operation and path of an Update.

    All three checks run independently and their errors are accumulated.
    Operations are matched exactly: an empty or differently cased operation
    is unrecognised. The path must be set and non-empty.
    """

    def __init__(self, record_id_validator: BaseValidator | None = None):
        self.record_id_validator = record_id_validator or IdValidator()

    def execute(self, data: Any) -> None:
        if not isinstance(data, Update):
            raise self.invalid_type(
                f"Update must be instance of {Update.__name__}, received {describe_type(data)}"
            )

        errors: list[str] = []
        for check in (self.validate_record_id, self.validate_op, self.validate_path):
            try:
                check(data)
            except ValidationException as e:
                errors.extend(e.errors)

        if errors:
            raise self.invalid_data(*errors)

    def validate_record_id(self, data: Update) -> None:
        self.record_id_validator.execute(data.record_id)

    def validate_op(self, data: Update) -> None:
        op = data.op or ""
        allowed = [operation.value for operation in UpdateOperations]
        if op not in allowed:
            raise self.invalid_data(
                f'Unrecognised update operation [op] "{op}", must be one of {", ".join(allowed)}'
            )

    def validate_path(self, data: Update) -> None:
        if not data.path:
            raise self.invalid_data("Path must be set")

        if not JSON_POINTER_PATTERN.fullmatch(data.path):
            raise self.invalid_data(f'Path "{data.path}" is not a valid JSON Pointer value')
