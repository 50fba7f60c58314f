"""
Validators for credentials, request headers and indexing payloads.

Every validator implements execute(data), raising InvalidTypeValidationException
or InvalidDataValidationException with a list of human-readable errors.
"""

from .attribute_validator import AttributeValidator
from .base_validator import BaseValidator, describe_type
from .credentials_validators import (
    AccountCredentialsValidator,
    JsApiKeyValidator,
    RestAuthKeyValidator,
)
from .name_validators import (
    AttributeNameValidator,
    ChannelNameValidator,
    GroupNameValidator,
)
from .record import (
    AttributesValidator,
    ChannelsValidator,
    DisplayValidator,
    GroupsValidator,
    IdValidator,
    RelationsValidator,
    TypeValidator,
)
from .record_validator import RecordValidator
from .request_headers import (
    ApiKeyValidator,
    AuthAlgorithmValidator,
    ContentTypeValidator,
    RequestHeadersValidator,
    TimestampValidator,
)
from .update_validator import UpdateValidator

__all__ = [
    "AccountCredentialsValidator",
    "ApiKeyValidator",
    "AttributeNameValidator",
    "AttributeValidator",
    "AttributesValidator",
    "AuthAlgorithmValidator",
    "BaseValidator",
    "ChannelNameValidator",
    "ChannelsValidator",
    "ContentTypeValidator",
    "DisplayValidator",
    "GroupNameValidator",
    "GroupsValidator",
    "IdValidator",
    "JsApiKeyValidator",
    "RecordValidator",
    "RelationsValidator",
    "RequestHeadersValidator",
    "RestAuthKeyValidator",
    "TimestampValidator",
    "TypeValidator",
    "UpdateValidator",
    "describe_type",
]
