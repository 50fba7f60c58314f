"""
API exceptions raised for rejected requests and unusable responses.

JsonExceptionFactory maps an HTTP status code and raw JSON body onto the
appropriate exception (or None when the response can be used).
"""

import json
from typing import Any, Iterable

from klevu.utils.sorting import natural_sorted


class ApiException(Exception):
    """
    Base class for request/response failures.

    Attributes:
        message: Summary message
        code: HTTP status code where one is known, else 0
        errors: Error strings returned by the API or transport; leading_errors
            (the API message) are kept in front of them, in the order given
        api_code: Machine-readable code from the response body
        path: Request path reported by the API
        debug: Debug messages reported by the API
    """

    def __init__(
        self,
        message: str,
        code: int = 0,
        errors: Iterable[Any] | None = None,
        api_code: str | None = None,
        path: str | None = None,
        debug: Iterable[Any] | None = None,
        leading_errors: Iterable[Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.errors = [str(error) for error in (leading_errors or [])] + self._prepare_errors(
            [str(error) for error in (errors or [])]
        )
        self.api_code = api_code
        self.path = path
        self.debug = None if debug is None else [str(row) for row in debug]
        super().__init__(message)

    def _prepare_errors(self, errors: list[str]) -> list[str]:
        return errors

    def get_errors(self) -> list[str]:
        return list(self.errors)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, code={self.code}, "
            f"errors={self.errors!r}, api_code={self.api_code!r})"
        )


class BadRequestException(ApiException):
    """
    The request was rejected, either locally before sending or by the API (4xx).

    The API message comes first; the remaining errors are kept in natural,
    case-insensitive order so that batch errors for the same item sit together.
    """

    def _prepare_errors(self, errors: list[str]) -> list[str]:
        return natural_sorted(errors)


class BadResponseException(ApiException):
    """The API could not be reached or returned an unusable response."""


class JsonExceptionFactory:
    """
    Creates API exceptions from JSON responses.

    Args:
        require_valid_json_body: Treat an unparsable body as a bad response
    """

    def __init__(self, require_valid_json_body: bool = True):
        self.require_valid_json_body = require_valid_json_body

    def create_from_response(
        self,
        response_code: int,
        response_body: str | bytes | None,
    ) -> ApiException | None:
        """
        Build the exception matching a response, if any.

        Args:
            response_code: HTTP status code
            response_body: Raw response body

        Returns:
            BadRequestException for codes 400-498, BadResponseException for
            unparsable bodies, codes of 499 and above and any other code outside
            2xx, None otherwise
        """
        decoded: Any = {}
        if response_body is not None:
            try:
                decoded = json.loads(response_body)
            except ValueError:
                if self.require_valid_json_body:
                    return BadResponseException(
                        message="Received invalid JSON response",
                        code=response_code,
                        errors=["Syntax error"],
                    )
                decoded = {}
        if not isinstance(decoded, dict):
            decoded = {}

        message = self._get_message(decoded)
        details = {
            "code": response_code,
            "leading_errors": self._get_message_errors(decoded),
            "errors": self._get_errors(decoded),
            "api_code": self._join_if_list(decoded.get("code")),
            "path": self._join_if_list(decoded.get("path")),
            "debug": self._get_debug(decoded),
        }

        if 400 <= response_code < 499:
            return BadRequestException(
                message=self._with_api_message(
                    f"API request rejected by Klevu API [{response_code}]", message
                ),
                **details,
            )
        if response_code >= 499 or not 200 <= response_code < 300:
            return BadResponseException(
                message=self._with_api_message(
                    f"Unexpected Response Code [{response_code}]", message
                ),
                **details,
            )
        return None

    @staticmethod
    def _with_api_message(summary: str, api_message: str | None) -> str:
        return f"{summary} {api_message}" if api_message else summary

    @staticmethod
    def _join_if_list(value: Any) -> str | None:
        if isinstance(value, list):
            return ", ".join(str(item) for item in value)
        if value is None:
            return None
        return str(value)

    def _get_message(self, decoded: dict[str, Any]) -> str | None:
        return self._join_if_list(decoded.get("message"))

    @staticmethod
    def _get_message_errors(decoded: dict[str, Any]) -> list[str]:
        message = decoded.get("message")
        if isinstance(message, list):
            messages = message
        elif message is None or isinstance(message, dict):
            messages = []
        else:
            messages = [message]
        return [str(row) for row in messages if row]

    @staticmethod
    def _get_errors(decoded: dict[str, Any]) -> list[str]:
        response_errors = decoded.get("errors")
        if not isinstance(response_errors, list):
            return []
        return [str(error) for error in response_errors if error]

    @staticmethod
    def _get_debug(decoded: dict[str, Any]) -> list[str] | None:
        debug = decoded.get("debug")
        if debug is None:
            return None
        if isinstance(debug, (str, int, float, bool)):
            return [message for message in [str(debug).strip()] if message]
        if not isinstance(debug, list):
            return None

        messages: list[str] = []
        for row in debug:
            if isinstance(row, (str, int, float, bool)):
                messages.append(str(row).strip())
                continue
            if not isinstance(row, dict) or not row.get("message"):
                continue
            row_message = row["message"]
            if isinstance(row_message, list):
                messages.extend(str(item) for item in row_message)
            else:
                messages.append(str(row_message))

        return [message for message in messages if message]
