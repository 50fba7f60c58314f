"""
BatchService - submits records and record updates to the indexing API.

Flow of a send:
1. Validate credentials
2. Enforce the batch size ceiling
3. Validate each record, then fail or skip according to InvalidRecordMode
4. Enforce the ceiling again against the records that remain
5. Build, sign and send the request
6. Map the response onto ApiResponse or an API exception
"""

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping

import httpx

from klevu.config import SdkConfig
from klevu.core.models import (
    AccountCredentials,
    ApiResponse,
    AuthAlgorithms,
    InvalidRecordMode,
    Record,
    Update,
)
from klevu.core.validators import BaseValidator, RecordValidator, UpdateValidator
from klevu.exceptions import InvalidDataValidationException, JsonExceptionFactory, ValidationException
from klevu.observability.metrics import record_validation_results
from klevu.providers import (
    BaseUrlsProvider,
    BatchPayloadProvider,
    IndexingVersions,
    RequestBearerTokenProvider,
    RequestPayloadProvider,
    UserAgentProvider,
    create_endpoint,
)

from .api_service import ApiService

SUPPORTED_METHODS = ("PUT", "PATCH")


class BatchService(ApiService):
    """
    Sends batches of Record (PUT) or Update (PATCH) models.

    Args:
        config: Defaults for every setting not passed explicitly
        max_batch_size: Most records accepted by one request
        invalid_record_mode: SKIP sends the valid subset, FAIL raises
        validators: Model class to the validator applied to its instances;
            defaults to RecordValidator for Record and UpdateValidator for Update
        payload_provider: Builds the request body
        **kwargs: Passed to ApiService
    """

    service_name = "batch"
    endpoint_path = "/batch"
    log_action = "indexing records"

    def __init__(
        self,
        config: SdkConfig | None = None,
        base_urls_provider: BaseUrlsProvider | None = None,
        http_client: httpx.Client | None = None,
        logger: logging.Logger | None = None,
        account_credentials_validator: BaseValidator | None = None,
        validators: Mapping[type, BaseValidator] | None = None,
        bearer_token_provider: RequestBearerTokenProvider | None = None,
        payload_provider: RequestPayloadProvider | None = None,
        user_agent_provider: UserAgentProvider | None = None,
        api_exception_factory: JsonExceptionFactory | None = None,
        auth_algorithm: AuthAlgorithms | None = None,
        invalid_record_mode: InvalidRecordMode | None = None,
        max_batch_size: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        super().__init__(
            config=config,
            base_urls_provider=base_urls_provider,
            http_client=http_client,
            logger=logger,
            account_credentials_validator=account_credentials_validator,
            user_agent_provider=user_agent_provider,
            bearer_token_provider=bearer_token_provider,
            api_exception_factory=api_exception_factory,
            auth_algorithm=auth_algorithm,
            clock=clock,
        )
        if validators is None:
            validators = self.default_validators()
        self.validators = dict(validators)
        self.payload_provider = payload_provider or BatchPayloadProvider()
        self.invalid_record_mode = InvalidRecordMode(invalid_record_mode or self.config.invalid_record_mode)
        self.max_batch_size = max_batch_size if max_batch_size is not None else self.config.max_batch_size

    def default_validators(self) -> dict[type, BaseValidator]:
        return {
            Record: RecordValidator(),
            Update: UpdateValidator(),
        }

    def get_endpoint(self) -> str:
        return create_endpoint(
            self.base_urls_provider.get_indexing_url(IndexingVersions.JSON),
            self.endpoint_path,
        )

    def put(self, account_credentials: AccountCredentials, records: Iterable[Record]) -> ApiResponse:
        """Add or replace records."""
        return self.send(account_credentials, records, method="PUT")

    def patch(self, account_credentials: AccountCredentials, updates: Iterable[Update]) -> ApiResponse:
        """Apply partial updates to existing records."""
        return self.send(account_credentials, updates, method="PATCH")

    def send(
        self,
        account_credentials: AccountCredentials,
        records: Iterable[Any],
        method: str = "PUT",
    ) -> ApiResponse:
        """
        Validate and send one batch.

        Args:
            account_credentials: Keys of the account to index into
            records: Record or Update models
            method: "PUT" or "PATCH"

        Returns:
            Parsed API response

        Raises:
            ValueError: If the method is not supported
            ValidationException: If credentials are invalid, the batch is
                empty or too large, or records are invalid (FAIL mode, or
                every record in SKIP mode)
            BadRequestException: If the request is malformed or rejected
            BadResponseException: If the API is unreachable or its response
                unusable
        """
        method = self.normalise_method(method)
        self.validate_account_credentials(account_credentials)

        records = list(records)
        all_records_count = len(records)
        self.validate_record_count(all_records_count, all_records_count)

        valid_records = self.filter_valid_records(records)
        self.validate_record_count(len(valid_records), all_records_count)

        request = self.build_request(
            account_credentials,
            method,
            self.get_endpoint(),
            content=self.payload_provider.get(valid_records),
        )
        action = self.describe_action(request)
        self.log_request(
            f"send {self.log_action} [{action}]",
            request,
            account_credentials,
            record_count=len(valid_records),
        )
        response = self.send_request(request, account_credentials, f"{self.log_action} request [{action}]")
        self.check_response(response)

        return self.create_api_response(response)

    @staticmethod
    def normalise_method(method: str) -> str:
        method = str(method).upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(
                f"Unsupported method {method!r}; expected one of {', '.join(SUPPORTED_METHODS)}"
            )
        return method

    def validate_record_count(self, record_count: int, all_records_count: int) -> None:
        """
        Check a record count against the batch size ceiling.

        Args:
            record_count: Records that would be sent
            all_records_count: Records supplied before validation

        Raises:
            InvalidDataValidationException: If the count exceeds the ceiling
                or is zero
        """
        if record_count > self.max_batch_size:
            raise InvalidDataValidationException(
                errors=[
                    f"Record count of {record_count} exceeds max batch size of {self.max_batch_size}"
                ],
                message="Max batch size exceeded",
            )
        if not record_count and all_records_count:
            raise InvalidDataValidationException(
                errors=["All records failed validation"],
                message="No valid records found to send",
            )
        if not record_count:
            raise InvalidDataValidationException(
                errors=["No records provided for send"],
                message="No valid records found to send",
            )

    def filter_valid_records(self, records: list[Any]) -> list[Any]:
        """
        Split records into valid and invalid, applying the invalid record mode.

        Errors of each invalid record are prefixed "Record #<index>: ".

        Raises:
            InvalidDataValidationException: In FAIL mode, if any record is invalid
        """
        valid_records = []
        invalid_record_messages: dict[int, list[str]] = {}
        counts: dict[str, list[int]] = {}

        for record_index, record in enumerate(records):
            record_type = type(record).__name__.lower()
            counts.setdefault(record_type, [0, 0])
            try:
                for record_class, validator in self.validators.items():
                    if isinstance(record, record_class):
                        validator.execute(record)
            except ValidationException as e:
                invalid_record_messages[record_index] = [
                    f"Record #{record_index}: {error}" for error in e.errors
                ]
                counts[record_type][1] += 1
                continue
            valid_records.append(record)
            counts[record_type][0] += 1

        for record_type, (valid_count, invalid_count) in counts.items():
            record_validation_results(record_type, valid_count, invalid_count)

        if not invalid_record_messages:
            return valid_records

        invalid_record_count = len(invalid_record_messages)
        errors = [error for messages in invalid_record_messages.values() for error in messages]
        if self.invalid_record_mode is InvalidRecordMode.FAIL:
            raise InvalidDataValidationException(
                errors=errors,
                message=f"{invalid_record_count} records were found invalid",
            )

        self.logger.warning(
            f"{invalid_record_count} records were found invalid and excluded from sync",
            extra={
                "class": type(self).__name__,
                "errors": sorted(errors),
                "valid_record_count": len(records) - invalid_record_count,
                "invalid_record_count": invalid_record_count,
            },
        )
        return valid_records

    def describe_action(self, request: httpx.Request) -> str:
        # The unversioned host is removed so the version stays in the log
        return (
            str(request.url)
            .replace(self.base_urls_provider.get_indexing_url(), "")
            .replace("https://", "")
        )
