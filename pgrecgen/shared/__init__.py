"""Shared utilities for the record generator."""

from .schema_loader import (
    is_snapshot_path,
    load_snapshot,
)
from .naming import (
    record_name,
    sanitize_module_name,
    sanitize_field_name,
    PYTHON_KEYWORDS,
)
from .errors import (
    SchemaError,
    SnapshotError,
    OutputError,
)

__all__ = [
    # Snapshot loading
    "is_snapshot_path",
    "load_snapshot",
    # Naming utilities
    "record_name",
    "sanitize_module_name",
    "sanitize_field_name",
    "PYTHON_KEYWORDS",
    # Errors
    "SchemaError",
    "SnapshotError",
    "OutputError",
]
