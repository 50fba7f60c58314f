"""
Validation exceptions raised before any request reaches the network.
"""

from typing import Iterable


class ValidationException(Exception):
    """
    Raised when data supplied to the SDK fails validation.

    Attributes:
        errors: Ordered list of human-readable error strings
        message: Summary message
        code: Numeric code (0 unless a caller supplies one)
    """

    default_message = "Validation failed"

    def __init__(
        self,
        errors: Iterable[str] | None = None,
        message: str | None = None,
        code: int = 0,
    ):
        self.errors = [str(error) for error in (errors or [])]
        self.message = message if message is not None else self.default_message
        self.code = code
        super().__init__(self.message)

    def get_errors(self) -> list[str]:
        return list(self.errors)

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return f"{self.message}: {'; '.join(self.errors)}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, "
            f"errors={self.errors!r}, code={self.code})"
        )


class InvalidTypeValidationException(ValidationException):
    """Raised when a validator receives a value of the wrong type."""

    default_message = "Invalid type"


class InvalidDataValidationException(ValidationException):
    """Raised when a value has the right type but fails one or more rules."""

    default_message = "Data is not valid"
