"""Exceptions raised while validating or transforming sheet data."""

from typing import Any

from pydantic import ValidationError


class DataValidationError(Exception):
    """Base exception for invalid cafe or rating data."""

    def __init__(self, message: str, field: str | None = None):
        """Initialize data validation error.

        Args:
            message: Error message
            field: Name of the entity or field that failed
        """
        self.field = field
        super().__init__(message)


class SchemaValidationError(DataValidationError):
    """Data violates one or more schema constraints."""

    def __init__(self, field: str, errors: list[dict[str, Any]]):
        """Initialize schema validation error.

        Args:
            field: Name of the entity that failed (cafe, cafeRating, ...)
            errors: Violated constraints in pydantic ``errors()`` format
        """
        self.errors = errors
        super().__init__(
            f"{field} validation failed: {format_errors(errors)}", field=field
        )

    @classmethod
    def from_pydantic(cls, field: str, exc: ValidationError) -> "SchemaValidationError":
        """Build from a pydantic ValidationError."""
        return cls(
            field=field,
            errors=exc.errors(include_url=False, include_context=False),
        )


class RowTransformError(DataValidationError):
    """A spreadsheet row could not be mapped to an entity."""


class RowTooShortError(RowTransformError):
    """Row has fewer cells than the sheet layout requires."""

    def __init__(self, entity: str, expected: int, actual: int):
        """Initialize row too short error.

        Args:
            entity: Entity the row was meant to hold
            expected: Minimum column count
            actual: Column count found
        """
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid {entity} row: expected at least {expected} columns, "
            f"got {actual}",
            field=entity,
        )


class MalformedCellError(RowTransformError):
    """A JSON-encoded cell could not be decoded."""

    def __init__(self, column: str, reason: str):
        """Initialize malformed cell error.

        Args:
            column: Column name of the offending cell
            reason: Decoder error message
        """
        self.column = column
        super().__init__(f"Malformed JSON in column {column}: {reason}", field=column)


def format_errors(errors: list[dict[str, Any]]) -> str:
    """Render pydantic errors as ``path: message`` pairs."""
    return ", ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in errors
    )
