"""
DB Record Generator - Generates Python record modules from a live PostgreSQL schema.

For every base table in a schema this writes a module holding a typed
``@dataclass`` record, followed by an aggregator ``__init__.py`` that
re-exports all records and a ``db_types.py`` module with the primitive
aliases the records refer to.

Tables are processed one at a time over a single connection. A failure
partway through leaves the modules already written in place.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import psycopg

from ..shared import SchemaError, is_snapshot_path, load_snapshot
from ..shared.naming import DEFAULT_RECORD_PREFIX, DEFAULT_RECORD_SUFFIX
from .emitter import CodeEmitter, ColumnDef, GeneratorConfig, ModuleSpec, TableSchema
from .inspector import PgSchemaInspector, SchemaInspector, SnapshotInspector
from .sinks import ConsoleSink, FileSystemSink, OutputSink
from .type_mapper import map_column


def build_table(inspector: SchemaInspector, table_name: str, schema_name: str) -> TableSchema:
    """Fetch a table's columns and resolve their types."""
    columns = inspector.list_columns(table_name, schema_name)
    return TableSchema(
        name=table_name,
        columns=tuple(ColumnDef(name=column.name, descriptor=map_column(column)) for column in columns),
    )


def _warn_on_name_clashes(modules: list[ModuleSpec]) -> None:
    seen: dict[str, str] = {}
    for spec in modules:
        other = seen.setdefault(spec.struct_name, spec.table_name)
        if other != spec.table_name:
            print(
                f"Warning: tables '{other}' and '{spec.table_name}' both map to "
                f"record '{spec.struct_name}'",
                file=sys.stderr,
            )


def generate(
    inspector: SchemaInspector,
    schema_name: str,
    sink: OutputSink,
    config: GeneratorConfig | None = None,
) -> int:
    """Generate record modules for every base table in a schema.

    Args:
        inspector: Source of table and column metadata.
        schema_name: Schema whose base tables are generated.
        sink: Destination for generated modules.
        config: Naming and rendering settings.

    Returns:
        Number of table modules generated.
    """
    emitter = CodeEmitter(sink, config)
    sink.prepare()

    module_specs: list[ModuleSpec] = []
    for table_name in inspector.list_tables(schema_name):
        table = build_table(inspector, table_name, schema_name)
        module_specs.append(emitter.emit_table(table))

    _warn_on_name_clashes(module_specs)
    emitter.emit_aggregator(module_specs)
    emitter.emit_types()

    return len({spec.module_name for spec in module_specs})


def _record_prefix(value: str) -> str:
    if value and not value.isidentifier():
        raise argparse.ArgumentTypeError(f"'{value}' cannot start a Python identifier")
    return value


def _record_suffix(value: str) -> str:
    if not f"X{value}".isidentifier():
        raise argparse.ArgumentTypeError(f"'{value}' is not usable in a Python identifier")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Python record modules from a PostgreSQL schema",
    )
    parser.add_argument(
        "database_url",
        help="PostgreSQL connection string, or a .yaml/.yml schema snapshot file",
    )
    parser.add_argument(
        "schema",
        help="Schema whose base tables are generated",
    )
    parser.add_argument(
        "output_dir",
        type=Path,
        nargs="?",
        default=None,
        help="Directory for generated modules (default: print to stdout)",
    )
    parser.add_argument(
        "--prefix",
        type=_record_prefix,
        default=DEFAULT_RECORD_PREFIX,
        help=f"Record class name prefix (default: {DEFAULT_RECORD_PREFIX})",
    )
    parser.add_argument(
        "--suffix",
        type=_record_suffix,
        default=DEFAULT_RECORD_SUFFIX,
        help=f"Record class name suffix (default: {DEFAULT_RECORD_SUFFIX})",
    )
    parser.add_argument(
        "--no-char-length",
        action="store_true",
        help="Do not annotate char(n) fields with their fixed length",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    config = GeneratorConfig(
        record_prefix=args.prefix,
        record_suffix=args.suffix,
        char_length=not args.no_char_length,
    )
    sink: OutputSink = (
        FileSystemSink(args.output_dir) if args.output_dir is not None else ConsoleSink()
    )

    try:
        if is_snapshot_path(args.database_url):
            snapshot = load_snapshot(Path(args.database_url))
            module_count = generate(SnapshotInspector(snapshot), args.schema, sink, config)
        else:
            with psycopg.connect(args.database_url) as conn:
                module_count = generate(PgSchemaInspector(conn), args.schema, sink, config)
    except (SchemaError, psycopg.Error, OSError) as e:
        raise SystemExit(f"Error: {e}") from e

    print(
        f"Generated {module_count} table module(s) from schema "
        f"'{args.schema}' into {sink.description}",
        file=sys.stdout if args.output_dir is not None else sys.stderr,
    )


if __name__ == "__main__":
    main()
