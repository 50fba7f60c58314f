"""
Validators for the headers of a signed request.
"""

from .header_validators import (
    ApiKeyValidator,
    AuthAlgorithmValidator,
    ContentTypeValidator,
    HeaderValueValidator,
    TimestampValidator,
)
from .request_headers_validator import RequestHeadersValidator

__all__ = [
    "ApiKeyValidator",
    "AuthAlgorithmValidator",
    "ContentTypeValidator",
    "HeaderValueValidator",
    "RequestHeadersValidator",
    "TimestampValidator",
]
