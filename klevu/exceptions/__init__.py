"""
Exception hierarchy for the Klevu SDK.

Validation exceptions never reach the network; API exceptions describe
rejected requests and unusable responses.
"""

from .api import (
    ApiException,
    BadRequestException,
    BadResponseException,
    JsonExceptionFactory,
)
from .validation import (
    InvalidDataValidationException,
    InvalidTypeValidationException,
    ValidationException,
)


class CouldNotUpdateException(Exception):
    """Raised when a property of an immutable model is modified."""


class EndpointConfigurationError(RuntimeError):
    """
    Raised when a configured base URL cannot produce an endpoint.

    This is a configuration fault, not part of the request/response flow,
    and is never wrapped into an API or validation exception.
    """


__all__ = [
    "ApiException",
    "BadRequestException",
    "BadResponseException",
    "CouldNotUpdateException",
    "EndpointConfigurationError",
    "InvalidDataValidationException",
    "InvalidTypeValidationException",
    "JsonExceptionFactory",
    "ValidationException",
]
