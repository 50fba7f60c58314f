"""
RequestHeadersValidator - validates every header signed into a bearer token.
"""

from typing import Any, Mapping

from klevu.core.headers import (
    API_HEADER_KEY_APIKEY,
    API_HEADER_KEY_AUTH_ALGO,
    API_HEADER_KEY_CONTENT_TYPE,
    API_HEADER_KEY_TIMESTAMP,
)
from klevu.exceptions import ValidationException

from ..base_validator import BaseValidator, describe_type
from .header_validators import (
    ApiKeyValidator,
    AuthAlgorithmValidator,
    ContentTypeValidator,
    TimestampValidator,
)


class RequestHeadersValidator(BaseValidator):
    """
    Runs one validator per header key and accumulates their errors.

    Each failing header contributes one error: "<header>: <error>; <error>".
    Missing headers are passed to their validator as None.

    Args:
        header_validators: Header name to validator; defaults cover the
            timestamp, API key, auth algorithm and content type headers
    """

    def __init__(self, header_validators: Mapping[str, BaseValidator] | None = None):
        if header_validators is None:
            header_validators = {
                API_HEADER_KEY_TIMESTAMP: TimestampValidator(),
                API_HEADER_KEY_APIKEY: ApiKeyValidator(),
                API_HEADER_KEY_AUTH_ALGO: AuthAlgorithmValidator(),
                API_HEADER_KEY_CONTENT_TYPE: ContentTypeValidator(),
            }
        self.header_validators = dict(header_validators)

    def execute(self, data: Any) -> None:
        if not isinstance(data, Mapping):
            raise self.invalid_type(
                f"Headers data must be array, received {describe_type(data)}"
            )

        errors = []
        for header_key, header_validator in self.header_validators.items():
            try:
                header_validator.execute(data.get(header_key))
            except ValidationException as e:
                errors.append(f"{header_key}: {'; '.join(e.errors)}")

        if errors:
            raise self.invalid_data(*errors)
