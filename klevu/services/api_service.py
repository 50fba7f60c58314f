"""
Request/response plumbing shared by the indexing services.

ApiService owns the HTTP client, builds and signs requests, maps transport
failures and error responses onto the exception taxonomy, and records
request metrics.
"""

import json
import logging
import time
from datetime import datetime
from typing import Any, Callable

import httpx

from klevu.config import SdkConfig
from klevu.core.headers import (
    API_HEADER_KEY_APIKEY,
    API_HEADER_KEY_AUTH_ALGO,
    API_HEADER_KEY_AUTHORIZATION,
    API_HEADER_KEY_CONTENT_TYPE,
    API_HEADER_KEY_TIMESTAMP,
)
from klevu.core.models import AccountCredentials, ApiResponse, AuthAlgorithms
from klevu.core.validators import (
    AccountCredentialsValidator,
    ApiKeyValidator,
    AuthAlgorithmValidator,
    BaseValidator,
    ContentTypeValidator,
    RequestHeadersValidator,
    TimestampValidator,
)
from klevu.exceptions import (
    BadRequestException,
    BadResponseException,
    JsonExceptionFactory,
    ValidationException,
)
from klevu.observability.logger import get_logger
from klevu.observability.metrics import record_api_error, record_api_request
from klevu.providers import (
    BaseUrlsProvider,
    DefaultUserAgentProvider,
    RequestBearerTokenProvider,
    UserAgentProvider,
)
from klevu.utils.masking import mask_http_headers

CONTENT_TYPE_JSON = "application/json"

# Failures raised before the request leaves the client
LOCAL_REQUEST_ERRORS = (
    httpx.InvalidURL,
    httpx.UnsupportedProtocol,
    httpx.LocalProtocolError,
)


def current_timestamp() -> datetime:
    return datetime.now().astimezone()


class ApiService:
    """
    Base class for services calling the Klevu APIs.

    Args:
        config: Defaults for every setting not passed explicitly
        base_urls_provider: Resolves service hosts
        http_client: Sends requests; owned (and closed) only when created here
        logger: Receives debug entries per request and response
        account_credentials_validator: Validates credentials before any request
        user_agent_provider: Supplies the User-Agent header
        bearer_token_provider: Signs requests
        api_exception_factory: Maps responses onto exceptions
        auth_algorithm: Algorithm named in the auth algorithm header
        clock: Returns the current time for the timestamp header
    """

    service_name = "api"

    def __init__(
        self,
        config: SdkConfig | None = None,
        base_urls_provider: BaseUrlsProvider | None = None,
        http_client: httpx.Client | None = None,
        logger: logging.Logger | None = None,
        account_credentials_validator: BaseValidator | None = None,
        user_agent_provider: UserAgentProvider | None = None,
        bearer_token_provider: RequestBearerTokenProvider | None = None,
        api_exception_factory: JsonExceptionFactory | None = None,
        auth_algorithm: AuthAlgorithms | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.config = config or SdkConfig()
        self.base_urls_provider = base_urls_provider or BaseUrlsProvider.from_config(self.config)
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.Client(timeout=self.config.http_timeout_seconds)
        self.logger = logger or get_logger(__name__)
        self.account_credentials_validator = account_credentials_validator or AccountCredentialsValidator()
        self.user_agent_provider = user_agent_provider or DefaultUserAgentProvider()
        self.clock = clock or current_timestamp
        self.bearer_token_provider = bearer_token_provider or RequestBearerTokenProvider(
            logger=self.logger,
            account_credentials_validator=self.account_credentials_validator,
            request_headers_validator=self.create_request_headers_validator(),
        )
        self.api_exception_factory = api_exception_factory or JsonExceptionFactory()
        self.auth_algorithm = AuthAlgorithms(auth_algorithm or self.config.auth_algorithm)

    def close(self) -> None:
        """Close the HTTP client when it was created by this service."""
        if self._owns_http_client:
            self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def create_request_headers_validator(self) -> BaseValidator:
        return RequestHeadersValidator({
            API_HEADER_KEY_TIMESTAMP: TimestampValidator(
                max_age_seconds=self.config.timestamp_max_age_seconds,
                future_buffer_seconds=self.config.timestamp_future_buffer_seconds,
                clock=self.clock,
            ),
            API_HEADER_KEY_APIKEY: ApiKeyValidator(),
            API_HEADER_KEY_AUTH_ALGO: AuthAlgorithmValidator(),
            API_HEADER_KEY_CONTENT_TYPE: ContentTypeValidator(),
        })

    def validate_account_credentials(self, account_credentials: AccountCredentials) -> None:
        """
        Raises:
            ValidationException: "Invalid account credentials", with the
                errors of the underlying validator
        """
        try:
            self.account_credentials_validator.execute(account_credentials)
        except ValidationException as e:
            raise ValidationException(
                errors=e.errors,
                message="Invalid account credentials",
                code=e.code,
            ) from e

    def build_request(
        self,
        account_credentials: AccountCredentials,
        method: str,
        url: str,
        content: str | None = None,
    ) -> httpx.Request:
        """
        Build a signed request.

        Raises:
            BadRequestException: If no valid bearer token can be generated
        """
        headers = {
            API_HEADER_KEY_CONTENT_TYPE: CONTENT_TYPE_JSON,
            "User-Agent": self.user_agent_provider.execute(),
            API_HEADER_KEY_APIKEY: account_credentials.js_api_key,
            API_HEADER_KEY_AUTH_ALGO: self.auth_algorithm.value,
            API_HEADER_KEY_TIMESTAMP: self.clock().replace(microsecond=0).isoformat(),
        }
        request = httpx.Request(method, url, headers=headers, content=content or "")

        try:
            bearer_token = self.bearer_token_provider.get_for_request(account_credentials, request)
        except ValidationException as e:
            raise BadRequestException(
                message="Could not generate valid bearer token",
                code=400,
                errors=e.errors,
            ) from e

        request.headers[API_HEADER_KEY_AUTHORIZATION] = f"Bearer {bearer_token}"
        return request

    def send_request(
        self,
        request: httpx.Request,
        account_credentials: AccountCredentials,
        action: str,
    ) -> httpx.Response:
        """
        Send a request, translating transport failures.

        Args:
            request: Signed request
            account_credentials: Credentials the request was signed with
            action: Short description used in the request and response logs

        Raises:
            BadRequestException: If the request could not be sent as built
            BadResponseException: For any other transport failure
        """
        start_time = time.perf_counter()
        try:
            response = self.http_client.send(request)
        except LOCAL_REQUEST_ERRORS as e:
            error = BadRequestException(message=str(e), code=0)
            record_api_error(self.service_name, error)
            raise error from e
        except httpx.RequestError as e:
            error = BadResponseException(message=str(e), code=0)
            record_api_error(self.service_name, error)
            raise error from e
        response_time = time.perf_counter() - start_time

        record_api_request(self.service_name, request.method, response.status_code, response_time)
        self.logger.debug(
            f"Response from {action}",
            extra={
                "class": type(self).__name__,
                "method": request.method,
                "js_api_key": account_credentials.js_api_key,
                "status_code": response.status_code,
                "response_time": response_time,
                "headers": mask_http_headers(self.multi_headers(response.headers)),
                "body": response.text,
            },
        )
        return response

    def check_response(self, response: httpx.Response) -> None:
        """
        Raises:
            ApiException: If the status code or body describes a failure
        """
        exception = self.api_exception_factory.create_from_response(
            response_code=response.status_code,
            response_body=response.content,
        )
        if exception is not None:
            record_api_error(self.service_name, exception)
            raise exception

    @staticmethod
    def decode_json(response: httpx.Response) -> Any:
        return json.loads(response.content)

    def log_request(
        self,
        action: str,
        request: httpx.Request,
        account_credentials: AccountCredentials,
        **extra,
    ) -> None:
        self.logger.debug(
            f"Request to {action}",
            extra={
                "class": type(self).__name__,
                "method": request.method,
                "js_api_key": account_credentials.js_api_key,
                "headers": mask_http_headers(self.multi_headers(request.headers)),
                **extra,
            },
        )

    @staticmethod
    def multi_headers(headers: httpx.Headers) -> dict[str, list[str]]:
        return {key: headers.get_list(key) for key in headers.keys()}

    def create_api_response(self, response: httpx.Response) -> ApiResponse:
        """
        Build an ApiResponse from a successful JSON response.

        A list message is joined with ", ". Errors stay None when the body
        has no "errors" key.
        """
        decoded = self.decode_json(response)
        if not isinstance(decoded, dict):
            decoded = {}

        message = decoded.get("message") or ""
        if isinstance(message, list):
            message = ", ".join(str(row) for row in message)

        errors = None
        if "errors" in decoded:
            errors = as_string_list(decoded["errors"])

        return ApiResponse(
            response_code=response.status_code,
            message=str(message),
            status=as_optional_string(decoded.get("status")),
            job_id=as_optional_string(decoded.get("jobId")),
            errors=errors,
        )


def as_optional_string(value: Any) -> str | None:
    return None if value is None else str(value)


def as_string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(row) for row in value]
    return [str(value)]
