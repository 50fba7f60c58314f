"""
Closed value sets used across the indexing models.
"""

from enum import Enum


class AuthAlgorithms(str, Enum):
    """Algorithms accepted in the X-KLEVU-AUTH-ALGO header."""

    HMAC_SHA384 = "HmacSHA384"


class DataType(str, Enum):
    """Datatypes an indexing attribute may declare."""

    STRING = "STRING"
    NUMBER = "NUMBER"
    DATETIME = "DATETIME"
    MULTIVALUE = "MULTIVALUE"
    JSON = "JSON"
    BOOLEAN = "BOOLEAN"

    def is_available_to_custom_attributes(self) -> bool:
        # NUMBER and DATETIME are planned; JSON and BOOLEAN are core-only
        return self in (DataType.STRING, DataType.MULTIVALUE)


class UpdateOperations(str, Enum):
    """Operations accepted in a partial record update."""

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"

    def requires_path(self) -> bool:
        return True

    def requires_value(self) -> bool:
        return self in (UpdateOperations.ADD, UpdateOperations.REPLACE)


class InvalidRecordMode(str, Enum):
    """How a batch send treats records that fail validation."""

    # Drop invalid records, log a warning and send the rest
    SKIP = "skip"
    # Raise without sending anything
    FAIL = "fail"
