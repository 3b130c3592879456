"""Custom exceptions for record generation."""

from __future__ import annotations


class SchemaError(Exception):
    """Base exception for schema-related errors."""

    def __init__(self, message: str, schema_path: str | None = None) -> None:
        self.schema_path = schema_path
        full_message = f"{message}" if not schema_path else f"[{schema_path}] {message}"
        super().__init__(full_message)


class SnapshotError(SchemaError):
    """Raised when a schema snapshot cannot be read or is malformed."""

    def __init__(
        self,
        message: str,
        schema_path: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, schema_path)


class OutputError(SchemaError):
    """Raised when generated output cannot be written."""

    def __init__(self, message: str, output_path: str) -> None:
        self.output_path = output_path
        super().__init__(message, output_path)
