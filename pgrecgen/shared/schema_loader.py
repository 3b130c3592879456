"""Schema snapshot loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Final

import yaml

from .errors import SnapshotError

SNAPSHOT_SUFFIXES: Final[tuple[str, ...]] = (".yaml", ".yml")

DEFAULT_SNAPSHOT_SCHEMA: Final[str] = "public"
DEFAULT_TABLE_TYPE: Final[str] = "BASE TABLE"


def is_snapshot_path(value: str) -> bool:
    """Return True if ``value`` names an existing YAML snapshot file."""
    path = Path(value)
    return path.suffix.lower() in SNAPSHOT_SUFFIXES and path.is_file()


def _validate_table(table: Any, index: int, schema_path: str) -> None:
    if not isinstance(table, dict):
        raise SnapshotError(f"table #{index} must be a mapping", schema_path)
    name = table.get("name")
    if not isinstance(name, str):
        raise SnapshotError(
            f"table #{index} is missing a string 'name'",
            schema_path,
            field="name",
        )
    columns = table.get("columns", [])
    if not isinstance(columns, list):
        raise SnapshotError(
            f"table '{name}' must provide a 'columns' list",
            schema_path,
            field="columns",
        )
    for column in columns:
        if not isinstance(column, dict):
            raise SnapshotError(
                f"table '{name}' has a column that is not a mapping",
                schema_path,
            )
        for key in ("name", "ordinal", "udt_name"):
            if key not in column:
                raise SnapshotError(
                    f"column in table '{name}' is missing required '{key}'",
                    schema_path,
                    field=key,
                )
        if not isinstance(column["ordinal"], int) or isinstance(column["ordinal"], bool):
            raise SnapshotError(
                f"column '{column['name']}' in table '{name}' needs an integer ordinal",
                schema_path,
                field="ordinal",
            )
        length = column.get("length")
        if length is not None and (not isinstance(length, int) or isinstance(length, bool)):
            raise SnapshotError(
                f"column '{column['name']}' in table '{name}' needs an integer length",
                schema_path,
                field="length",
            )


def load_snapshot(snapshot_path: Path) -> dict[str, Any]:
    """Load and validate a schema snapshot from a YAML file.

    Args:
        snapshot_path: Path to the snapshot file.

    Returns:
        The parsed snapshot dictionary, with ``tables`` always present.

    Raises:
        SnapshotError: If the file cannot be read, parsed or validated.
    """
    try:
        content = snapshot_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Failed to read snapshot file: {e}", str(snapshot_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SnapshotError(f"Invalid YAML: {e}", str(snapshot_path)) from e

    if not isinstance(data, dict):
        raise SnapshotError("Snapshot root must be a mapping", str(snapshot_path))

    tables = data.setdefault("tables", [])
    if not isinstance(tables, list):
        raise SnapshotError(
            "snapshot must provide a 'tables' list",
            str(snapshot_path),
            field="tables",
        )
    for index, table in enumerate(tables):
        _validate_table(table, index, str(snapshot_path))

    return data
