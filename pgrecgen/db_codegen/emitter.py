"""Rendering of generated record modules through jinja2 templates."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path
from typing import Final, Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from ..shared.errors import SchemaError
from ..shared.naming import (
    DEFAULT_RECORD_PREFIX,
    DEFAULT_RECORD_SUFFIX,
    is_valid_identifier,
    record_name,
    sanitize_field_name,
    sanitize_module_name,
    unique_name,
)
from .sinks import OutputSink
from .type_mapper import TypeDescriptor, TypeKind, render_type, uses_annotated

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"

AGGREGATOR_ARTIFACT: Final[str] = "__init__.py"
TYPES_ARTIFACT: Final[str] = "db_types.py"

# Concrete Python types behind each logical kind
PRIMITIVE_TARGETS: Final[dict[TypeKind, str]] = {
    TypeKind.INT4: "int",
    TypeKind.INT8: "int",
    TypeKind.TEXT: "str",
    TypeKind.VARCHAR: "str",
    TypeKind.CHAR: "str",
    TypeKind.TIMESTAMP: "datetime.datetime",
    TypeKind.UUID: "uuid.UUID",
    TypeKind.JSON: "Any",
    TypeKind.UNSUPPORTED: "Any",
}


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Settings for one generation run."""

    record_prefix: str = DEFAULT_RECORD_PREFIX
    record_suffix: str = DEFAULT_RECORD_SUFFIX
    char_length: bool = True


@dataclass(frozen=True, slots=True)
class ColumnDef:
    """A column with its resolved type."""

    name: str
    descriptor: TypeDescriptor


@dataclass(frozen=True, slots=True)
class TableSchema:
    """A table and its columns in ordinal order."""

    name: str
    columns: tuple[ColumnDef, ...] = ()


@dataclass(frozen=True, slots=True)
class RecordField:
    """A dataclass field as it appears in a generated module."""

    name: str
    field_name: str
    field_type: str

    @property
    def comment(self) -> str:
        """Trailing comment naming the column when the field had to be renamed."""
        if self.field_name == self.name:
            return ""
        return f"  # column {_quote(self.name)}"


@dataclass(frozen=True, slots=True)
class TypeAlias:
    """A primitive alias written to the shared types module."""

    name: str
    target: str


@dataclass(frozen=True, slots=True)
class ModuleSpec:
    """Specification for a generated table module."""

    module_name: str
    struct_name: str
    table_name: str = ""


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
            enable_async=False,
        )
        # Pre-compile templates
        self._table_template = self.template_env.get_template("table.py.j2")
        self._aggregator_template = self.template_env.get_template("__init__.py.j2")
        self._types_template = self.template_env.get_template("db_types.py.j2")

    @property
    def table_template(self) -> Template:
        return self._table_template

    @property
    def aggregator_template(self) -> Template:
        return self._aggregator_template

    @property
    def types_template(self) -> Template:
        return self._types_template


@lru_cache(maxsize=256)
def _quote(value: str) -> str:
    """Quote a string for embedding as a Python literal. Cached for performance."""
    return json.dumps(value)


def primitive_aliases() -> list[TypeAlias]:
    """The full, fixed set of aliases written to ``db_types.py``."""
    return [TypeAlias(name=kind.alias, target=target) for kind, target in PRIMITIVE_TARGETS.items()]


def _build_fields(table: TableSchema, config: GeneratorConfig) -> list[RecordField]:
    fields: list[RecordField] = []
    used: set[str] = set()
    for column in table.columns:
        field_name = unique_name(sanitize_field_name(column.name), used)
        fields.append(
            RecordField(
                name=column.name,
                field_name=field_name,
                field_type=render_type(column.descriptor, char_length=config.char_length),
            )
        )
    return fields


def _typing_imports(table: TableSchema, config: GeneratorConfig) -> list[str]:
    names: set[str] = set()
    for column in table.columns:
        if uses_annotated(column.descriptor, char_length=config.char_length):
            names.add("Annotated")
        if column.descriptor.is_nullable:
            names.add("Optional")
    return sorted(names)


class CodeEmitter:
    """Renders table, aggregator and alias modules into an output sink."""

    def __init__(
        self,
        sink: OutputSink,
        config: GeneratorConfig | None = None,
        ctx: GeneratorContext | None = None,
    ) -> None:
        self.sink = sink
        self.config = config or GeneratorConfig()
        self.ctx = ctx or GeneratorContext()
        self._module_names: set[str] = set()

    def module_spec(self, table_name: str) -> ModuleSpec:
        """Derive module and record names for a table.

        Raises:
            SchemaError: If the record name is not a usable class name.
        """
        struct_name = record_name(
            table_name,
            self.config.record_prefix,
            self.config.record_suffix,
        )
        if not is_valid_identifier(struct_name):
            raise SchemaError(
                f"table {_quote(table_name)} yields invalid record name {_quote(struct_name)}"
            )
        return ModuleSpec(
            module_name=sanitize_module_name(table_name),
            struct_name=struct_name,
            table_name=table_name,
        )

    def render_table(self, table: TableSchema) -> tuple[ModuleSpec, str]:
        spec = self.module_spec(table.name)
        rendered = self.ctx.table_template.render(
            table_name_literal=_quote(table.name),
            struct_name=spec.struct_name,
            columns=_build_fields(table, self.config),
            typing_imports=_typing_imports(table, self.config),
        )
        return spec, rendered

    def emit_table(self, table: TableSchema) -> ModuleSpec:
        """Write the record module for one table.

        A module name already written in this run gets a numeric suffix.
        """
        spec, rendered = self.render_table(table)
        module_name = unique_name(spec.module_name, self._module_names)
        if module_name != spec.module_name:
            spec = replace(spec, module_name=module_name)
        self.sink.write(f"{spec.module_name}.py", rendered)
        return spec

    def emit_aggregator(self, modules: Iterable[ModuleSpec]) -> None:
        """Write ``__init__.py`` re-exporting every record, sorted by module name."""
        # Deduplicate and sort
        dedup: dict[str, ModuleSpec] = {}
        for spec in modules:
            dedup[spec.module_name] = spec

        ordered = sorted(dedup.values(), key=lambda item: item.module_name)
        rendered = self.ctx.aggregator_template.render(modules=ordered)
        self.sink.write(AGGREGATOR_ARTIFACT, rendered)

    def emit_types(self) -> None:
        """Write ``db_types.py`` with the primitive aliases."""
        rendered = self.ctx.types_template.render(aliases=primitive_aliases())
        self.sink.write(TYPES_ARTIFACT, rendered)
