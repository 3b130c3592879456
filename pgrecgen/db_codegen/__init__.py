"""DB Record Generator - Generates Python record modules from PostgreSQL schemas."""

from .type_mapper import (
    ColumnInfo,
    TypeDescriptor,
    TypeKind,
    map_column,
    render_type,
)
from .inspector import (
    PgSchemaInspector,
    SchemaInspector,
    SnapshotInspector,
)
from .emitter import (
    CodeEmitter,
    ColumnDef,
    GeneratorConfig,
    GeneratorContext,
    ModuleSpec,
    TableSchema,
)
from .sinks import (
    ConsoleSink,
    FileSystemSink,
    OutputSink,
    create_module_path,
)
from .main import (
    generate,
    main,
)

__all__ = [
    "ColumnInfo",
    "TypeDescriptor",
    "TypeKind",
    "map_column",
    "render_type",
    "PgSchemaInspector",
    "SchemaInspector",
    "SnapshotInspector",
    "CodeEmitter",
    "ColumnDef",
    "GeneratorConfig",
    "GeneratorContext",
    "ModuleSpec",
    "TableSchema",
    "ConsoleSink",
    "FileSystemSink",
    "OutputSink",
    "create_module_path",
    "generate",
    "main",
]
