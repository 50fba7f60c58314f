"""
Data models for the Klevu SDK.

All models use Pydantic for runtime type safety; business rules are
enforced by the validators in klevu.core.validators.
"""

from .account_credentials import AccountCredentials
from .api_response import ApiResponse
from .attribute import Attribute
from .enums import AuthAlgorithms, DataType, InvalidRecordMode, UpdateOperations
from .factories import AttributeFactory, RecordFactory, UpdateFactory
from .record import Record
from .update import Update

__all__ = [
    "AccountCredentials",
    "ApiResponse",
    "Attribute",
    "AttributeFactory",
    "AuthAlgorithms",
    "DataType",
    "InvalidRecordMode",
    "Record",
    "RecordFactory",
    "Update",
    "UpdateFactory",
    "UpdateOperations",
]
