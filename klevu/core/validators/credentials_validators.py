"""
Validators for account keys and the AccountCredentials model.
"""

import re
from typing import Any

from klevu.core.models import AccountCredentials
from klevu.exceptions import ValidationException

from .base_validator import BaseValidator, describe_type


class KeyValidator(BaseValidator):
    """String key which must be non-empty and match a fixed format."""

    label: str = "Key"
    pattern: re.Pattern = re.compile(r".+")

    def execute(self, data: Any) -> None:
        if not isinstance(data, str):
            raise self.invalid_type(
                f'{self.label} must be of type "string"; received "{describe_type(data)}"'
            )
        if not data.strip():
            raise self.invalid_data(f"{self.label} must not be empty")
        if not self.pattern.fullmatch(data):
            raise self.invalid_data(f"{self.label} is not valid")


class JsApiKeyValidator(KeyValidator):
    """Public JS API key, e.g. klevu-1234567890."""

    label = "JS API Key"
    pattern = re.compile(r"klevu-\d{1,20}")


class RestAuthKeyValidator(KeyValidator):
    """Secret REST AUTH key (base64 alphabet, 10-127 characters)."""

    label = "REST AUTH Key"
    pattern = re.compile(r"[a-zA-Z0-9+/=]{10,127}")


class AccountCredentialsValidator(BaseValidator):
    """
    Validates both keys of an AccountCredentials instance.

    Errors from the two keys are accumulated into one exception.
    """

    def __init__(
        self,
        js_api_key_validator: BaseValidator | None = None,
        rest_auth_key_validator: BaseValidator | None = None,
    ):
        self.js_api_key_validator = js_api_key_validator or JsApiKeyValidator()
        self.rest_auth_key_validator = rest_auth_key_validator or RestAuthKeyValidator()

    def execute(self, data: Any) -> None:
        if not isinstance(data, AccountCredentials):
            raise self.invalid_type(
                f'Account credentials must be of type "{AccountCredentials.__name__}"; '
                f'received "{describe_type(data)}"'
            )

        errors: list[str] = []
        for validator, value in (
            (self.js_api_key_validator, data.js_api_key),
            (self.rest_auth_key_validator, data.rest_auth_key),
        ):
            try:
                validator.execute(value)
            except ValidationException as e:
                errors.extend(e.errors)

        if errors:
            raise self.invalid_data(*errors)
