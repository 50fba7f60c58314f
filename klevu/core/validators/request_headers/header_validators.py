"""
Validators for the individual headers signed into a bearer token.

Every header validator accepts either a single string or the list of values
sent for that header. A list must contain at least one non-empty value and
no conflicting values; each value is then validated on its own.
"""

import re
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from klevu.core.models import AuthAlgorithms

from ..base_validator import BaseValidator, describe_type
from ..credentials_validators import JsApiKeyValidator

ISO_8601_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})"
)


class HeaderValueValidator(BaseValidator):
    """
    Base class handling single and multi-valued headers.

    Subclasses implement validate_value() for one header value.
    """

    label: str = "Header"

    def execute(self, data: Any) -> None:
        if isinstance(data, (list, tuple)):
            self.validate_values(list(data))
            for value in data:
                self.validate_value(value)
            return

        self.validate_value(data)

    def validate_values(self, values: list[Any]) -> None:
        if not any(values):
            raise self.invalid_data(f"{self.label} header value is required")

        unique_values: list[Any] = []
        for value in values:
            if value not in unique_values:
                unique_values.append(value)
        if len(unique_values) > 1:
            raise self.invalid_data(
                f"Conflicting {self.label} header values found: "
                f"{', '.join(str(value) for value in unique_values)}"
            )

    def validate_value(self, value: Any) -> None:
        self.validate_type(value)
        self.validate_not_empty(value)

    def validate_type(self, value: Any) -> None:
        # None is reported by the "required" check instead
        if value is not None and not isinstance(value, str):
            raise self.invalid_type(
                f"{self.label} header value must be string|string[], received {describe_type(value)}"
            )

    def validate_not_empty(self, value: str | None) -> None:
        if not (value or "").strip():
            raise self.invalid_data(f"{self.label} header value is required")

    def validate_supported(self, value: str, supported: Iterable[str]) -> None:
        supported = list(supported)
        if value not in supported:
            raise self.invalid_data(
                f"{self.label} header value is not supported. "
                f"Received {value}; expected one of {', '.join(supported)}"
            )


class TimestampValidator(HeaderValueValidator):
    """
    Timestamp header: ISO-8601 date time inside the accepted window.

    Args:
        max_age_seconds: How far in the past a timestamp may be
        future_buffer_seconds: Allowed clock drift into the future
        clock: Returns the current time (timezone aware)
    """

    label = "Timestamp"

    def __init__(
        self,
        max_age_seconds: int = 600,
        future_buffer_seconds: int = 60,
        clock: Callable[[], datetime] | None = None,
    ):
        self.max_age_seconds = max_age_seconds
        self.future_buffer_seconds = future_buffer_seconds
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def validate_value(self, value: Any) -> None:
        super().validate_value(value)
        timestamp = self.parse(value)
        self.validate_time_window(value, timestamp)

    def parse(self, value: str) -> datetime:
        error = f"Timestamp header value must be valid ISO-8601 date time string; received {value}"
        if not ISO_8601_PATTERN.fullmatch(value):
            raise self.invalid_data(error)
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            # Well formed but not a real date, e.g. 2024-02-30
            raise self.invalid_data(error)

    def validate_time_window(self, value: str, timestamp: datetime) -> None:
        delta = (timestamp - self.clock()).total_seconds()
        if delta > self.future_buffer_seconds:
            raise self.invalid_data(
                f"Timestamp header value must not be in the future; received {value}"
            )
        if delta < -self.max_age_seconds:
            raise self.invalid_data(
                f"Timestamp header value must not be more than {self._describe_max_age()} "
                f"in the past; received {value}"
            )

    def _describe_max_age(self) -> str:
        if self.max_age_seconds % 60 == 0:
            return f"{self.max_age_seconds // 60} minutes"
        return f"{self.max_age_seconds} seconds"


class ApiKeyValidator(HeaderValueValidator):
    """API key header: single values are checked as JS API keys."""

    label = "API Key"

    def __init__(self, js_api_key_validator: BaseValidator | None = None):
        self.js_api_key_validator = js_api_key_validator or JsApiKeyValidator()

    def validate_value(self, value: Any) -> None:
        self.js_api_key_validator.execute(value)


class AuthAlgorithmValidator(HeaderValueValidator):
    """Auth algorithm header: must name a supported algorithm."""

    label = "Auth Algorithm"

    def __init__(self, supported_algorithms: Iterable[AuthAlgorithms] | None = None):
        algorithms = list(AuthAlgorithms) if supported_algorithms is None else supported_algorithms
        self.supported_algorithms: list[AuthAlgorithms] = []
        for algorithm in algorithms:
            if algorithm not in self.supported_algorithms:
                self.supported_algorithms.append(algorithm)

    def validate_value(self, value: Any) -> None:
        super().validate_value(value)
        self.validate_supported(value, (algorithm.value for algorithm in self.supported_algorithms))


class ContentTypeValidator(HeaderValueValidator):
    """Content type header: must be a supported media type."""

    label = "Content Type"

    def __init__(self, supported_content_types: Iterable[str] | None = None):
        if supported_content_types is None:
            supported_content_types = ["application/json"]
        self.supported_content_types = [str(content_type) for content_type in supported_content_types]

    def validate_value(self, value: Any) -> None:
        super().validate_value(value)
        self.validate_supported(value, self.supported_content_types)
