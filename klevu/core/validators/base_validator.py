"""
Base validator interface for all SDK validators.

All validators must inherit from BaseValidator and implement the execute() method.
Errors are raised as ValidationException subclasses carrying a list of messages.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable

from klevu.exceptions import (
    InvalidDataValidationException,
    InvalidTypeValidationException,
    ValidationException,
)


def describe_type(value: Any) -> str:
    """
    Name the type of a value for error messages.

    Args:
        value: Any value

    Returns:
        "null" for None, otherwise the type name (e.g. "int", "list")
    """
    if value is None:
        return "null"
    return type(value).__name__


def label_errors(label: Any, errors: Iterable[str]) -> list[str]:
    """Prefix each error with a bracketed label: "[label] error"."""
    return [f"[{label}] {error}" for error in errors]


def join_labelled_errors(label: Any, errors: Iterable[str]) -> str:
    """Collapse sibling errors under one bracketed label: "[label] e1; e2"."""
    return f"[{label}] {'; '.join(errors)}"


def prefix_field_errors(field_name: str, errors: Iterable[str]) -> list[str]:
    """Prefix each error with a field name: "field: error"."""
    return [f"{field_name}: {error}" for error in errors]


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Validators are stateless and safe to share between services and threads.
    """

    @abstractmethod
    def execute(self, data: Any) -> None:
        """
        Validate data.

        Args:
            data: The value to validate

        Raises:
            InvalidTypeValidationException: If data is of the wrong type
            InvalidDataValidationException: If data fails one or more rules
        """
        pass

    def is_valid(self, data: Any) -> bool:
        """Return True if execute() passes for data."""
        try:
            self.execute(data)
        except ValidationException:
            return False
        return True

    def invalid_type(self, message: str) -> InvalidTypeValidationException:
        return InvalidTypeValidationException(errors=[message])

    def invalid_data(self, *errors: str, message: str | None = None) -> InvalidDataValidationException:
        return InvalidDataValidationException(errors=list(errors), message=message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
