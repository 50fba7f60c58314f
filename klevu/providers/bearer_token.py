"""
HMAC bearer tokens signing indexing API requests.

The token is an HMAC over a canonical, newline separated rendering of the
request:

    METHOD
    /path
    ?query
    X-KLEVU-TIMESTAMP=<value>
    X-KLEVU-APIKEY=<value>
    X-KLEVU-AUTH-ALGO=<value>
    Content-Type=<value>
    <body>

keyed with the account REST AUTH key and base64 encoded. The server rebuilds
the same string, so a token is only reproducible for an identical request
(including its timestamp).
"""

import base64
import hashlib
import hmac
import logging

import httpx

from klevu.core.headers import (
    API_HEADER_KEY_APIKEY,
    API_HEADER_KEY_AUTH_ALGO,
    API_HEADER_KEY_CONTENT_TYPE,
    API_HEADER_KEY_TIMESTAMP,
    SIGNED_HEADER_KEYS,
)
from klevu.core.models import AccountCredentials
from klevu.core.validators import (
    AccountCredentialsValidator,
    BaseValidator,
    RequestHeadersValidator,
)
from klevu.exceptions import InvalidDataValidationException
from klevu.observability.logger import get_logger
from klevu.utils.masking import mask_secret

AUTH_ALGORITHM_PREFIX = "Hmac"


class RequestBearerTokenProvider:
    """
    Generates the bearer token for a fully built request.

    Args:
        logger: Receives a debug entry per token, with the secret masked
        account_credentials_validator: Defaults to AccountCredentialsValidator
        request_headers_validator: Defaults to RequestHeadersValidator
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        account_credentials_validator: BaseValidator | None = None,
        request_headers_validator: BaseValidator | None = None,
    ):
        self.logger = logger or get_logger(__name__)
        self.account_credentials_validator = account_credentials_validator or AccountCredentialsValidator()
        self.request_headers_validator = request_headers_validator or RequestHeadersValidator()

    def get_for_request(self, account_credentials: AccountCredentials, request: httpx.Request) -> str:
        """
        Sign a request.

        Args:
            account_credentials: Keys of the account sending the request
            request: Request with every signed header and its final body

        Returns:
            Base64 encoded HMAC digest

        Raises:
            ValidationException: If the credentials or signed headers are
                invalid, or the API key header belongs to another account
        """
        self.account_credentials_validator.execute(account_credentials)
        self.request_headers_validator.execute(self.get_signed_headers(request))
        self.validate_credentials_match_request(account_credentials, request)

        algorithm = self.convert_auth_algorithm(request.headers.get(API_HEADER_KEY_AUTH_ALGO, ""))
        request_string = self.generate_request_string(request)
        secret_key = account_credentials.rest_auth_key

        self.logger.debug(
            "Generating bearer token for request",
            extra={
                "algorithm": algorithm,
                "requestString": request_string,
                "secretKey": mask_secret(secret_key),
            },
        )

        digest = hmac.new(
            secret_key.encode(),
            request_string.encode(),
            getattr(hashlib, algorithm),
        ).digest()
        return base64.b64encode(digest).decode()

    @staticmethod
    def get_signed_headers(request: httpx.Request) -> dict[str, list[str]]:
        return {key: request.headers.get_list(key) for key in SIGNED_HEADER_KEYS}

    @staticmethod
    def validate_credentials_match_request(
        account_credentials: AccountCredentials,
        request: httpx.Request,
    ) -> None:
        header_api_key = request.headers.get(API_HEADER_KEY_APIKEY, "")
        if account_credentials.js_api_key != header_api_key:
            raise InvalidDataValidationException(
                errors=[
                    f"Account Credentials API Key ({account_credentials.js_api_key}) "
                    f"does not match header value ({header_api_key})"
                ]
            )

    @staticmethod
    def convert_auth_algorithm(header_value: str) -> str:
        """Map an auth algorithm header value to a hashlib name: HmacSHA384 -> sha384."""
        if header_value.startswith(AUTH_ALGORITHM_PREFIX):
            header_value = header_value[len(AUTH_ALGORITHM_PREFIX):]
        return header_value.lower()

    @staticmethod
    def generate_request_string(request: httpx.Request) -> str:
        query = request.url.query.decode().strip()
        return "\n".join([
            request.method.upper(),
            request.url.path.rstrip(" /"),
            f"?{query}" if query else "",
            f"{API_HEADER_KEY_TIMESTAMP}={request.headers.get(API_HEADER_KEY_TIMESTAMP, '')}",
            f"{API_HEADER_KEY_APIKEY}={request.headers.get(API_HEADER_KEY_APIKEY, '')}",
            f"{API_HEADER_KEY_AUTH_ALGO}={request.headers.get(API_HEADER_KEY_AUTH_ALGO, '')}",
            f"{API_HEADER_KEY_CONTENT_TYPE}={request.headers.get(API_HEADER_KEY_CONTENT_TYPE, '')}",
            request.content.decode(),
        ])
