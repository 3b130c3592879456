"""Mapping of PostgreSQL column metadata onto generated Python types."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any, Final, Mapping

# information_schema reports nullability as the text 'YES' or 'NO'
NULLABLE_SENTINEL: Final[str] = "YES"

# udt_name prefix PostgreSQL uses for array types (e.g. _int4)
ARRAY_MARKER: Final[str] = "_"


class TypeKind(enum.Enum):
    """Logical column types understood by the generator."""

    INT4 = "Int4"
    INT8 = "Int8"
    CHAR = "Char"
    VARCHAR = "VarChar"
    TEXT = "Text"
    TIMESTAMP = "Timestamp"
    JSON = "Json"
    UUID = "Uuid"
    UNSUPPORTED = "Unsupported"

    @property
    def alias(self) -> str:
        """Name of the alias defined for this kind in ``db_types``."""
        return f"Db{self.value}"


UDT_KINDS: Final[dict[str, TypeKind]] = {
    "int4": TypeKind.INT4,
    "int8": TypeKind.INT8,
    "bpchar": TypeKind.CHAR,
    "varchar": TypeKind.VARCHAR,
    "text": TypeKind.TEXT,
    "timestamp": TypeKind.TIMESTAMP,
    "jsonb": TypeKind.JSON,
    "uuid": TypeKind.UUID,
}


def normalize_nullable(value: Any) -> bool:
    """Turn an ``is_nullable`` catalog value into a real boolean.

    Only the exact text ``'YES'`` (or an actual ``True``) means nullable.
    """
    return value is True or value == NULLABLE_SENTINEL


@dataclass(frozen=True, slots=True)
class ColumnInfo:
    """Raw metadata for one table column."""

    name: str
    ordinal: int
    nullable: bool
    udt_name: str
    length: int | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> ColumnInfo:
        """Build from an ``information_schema.columns`` row."""
        length = row.get("character_maximum_length")
        return cls(
            name=str(row["column_name"]),
            ordinal=int(row["ordinal_position"]),
            nullable=normalize_nullable(row.get("is_nullable")),
            udt_name=str(row["udt_name"]),
            length=int(length) if length is not None else None,
        )


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Resolved logical type of a column."""

    kind: TypeKind
    is_array: bool = False
    is_nullable: bool = False
    length: int | None = None
    raw_tag: str | None = None


def map_column(column: ColumnInfo) -> TypeDescriptor:
    """Resolve a column's vendor type tag to a :class:`TypeDescriptor`.

    Never fails: tags outside :data:`UDT_KINDS` resolve to
    ``TypeKind.UNSUPPORTED`` carrying the original tag text.
    """
    tag = column.udt_name
    is_array = tag.startswith(ARRAY_MARKER)
    base_tag = tag[len(ARRAY_MARKER):] if is_array else tag

    kind = UDT_KINDS.get(base_tag, TypeKind.UNSUPPORTED)
    return TypeDescriptor(
        kind=kind,
        is_array=is_array,
        is_nullable=column.nullable,
        length=column.length if kind is TypeKind.CHAR else None,
        raw_tag=tag if kind is TypeKind.UNSUPPORTED else None,
    )


def _render_base(descriptor: TypeDescriptor, char_length: bool) -> str:
    if descriptor.kind is TypeKind.UNSUPPORTED:
        note = json.dumps(f"unsupported udt_name: {descriptor.raw_tag}")
        return f"Annotated[{descriptor.kind.alias}, {note}]"
    if descriptor.kind is TypeKind.CHAR and char_length and descriptor.length is not None:
        return f"Annotated[{descriptor.kind.alias}, FixedLength({descriptor.length})]"
    return descriptor.kind.alias


def render_type(descriptor: TypeDescriptor, *, char_length: bool = True) -> str:
    """Render a descriptor as a Python annotation.

    Array wrapping is applied first and nullable wrapping outermost, so a
    nullable array renders as ``Optional[list[T]]``.

    Examples:
        >>> render_type(TypeDescriptor(TypeKind.TEXT, is_array=True, is_nullable=True))
        'Optional[list[DbText]]'
    """
    rendered = _render_base(descriptor, char_length)
    if descriptor.is_array:
        rendered = f"list[{rendered}]"
    if descriptor.is_nullable:
        rendered = f"Optional[{rendered}]"
    return rendered


def uses_annotated(descriptor: TypeDescriptor, *, char_length: bool = True) -> bool:
    """Return True if the rendering of ``descriptor`` needs ``typing.Annotated``."""
    return _render_base(descriptor, char_length).startswith("Annotated[")
