"""ddlgen: dialect-specific DDL generation and schema introspection.

This package provides:

- types: canonical column types and the type literal mapping (both directions)
- models: column, constraint, index and schema row dataclasses
- operations: the closed set of ALTER TABLE operations
- generator: DDL builders and the ALTER TABLE compiler
- introspection: INFORMATION_SCHEMA parser and its cache
- database: a database context tying a generator to a cached parser
"""
from ddlgen.database import Database
from ddlgen.exceptions import (
    DDLError,
    InvalidSpec,
    UnsupportedFeature,
    UnsupportedOperation,
)
from ddlgen.generator import (
    PostgresSchemaGenerator,
    SchemaGenerator,
    generator_for_dialect,
)
from ddlgen.introspection import (
    DbApiExecutor,
    SchemaCache,
    SchemaParser,
    SqlAlchemyExecutor,
)
from ddlgen.models import (
    NO_DEFAULT,
    ColumnSpec,
    ConstraintSpec,
    ConstraintType,
    IndexSpec,
    SchemaRow,
)
from ddlgen.operations import (
    AddColumn,
    AddConstraint,
    AddIndex,
    AlterOperation,
    DropColumn,
    DropConstraint,
    DropIndex,
    RenameColumn,
    SetColumnDefault,
    SetColumnType,
    operation_from_dict,
)
from ddlgen.renderers import SQLRenderer, SqlglotRenderer
from ddlgen.types import ColumnType, schema_column_type, type_literal

__all__ = [
    # Context
    "Database",
    # Errors
    "DDLError",
    "InvalidSpec",
    "UnsupportedFeature",
    "UnsupportedOperation",
    # Generation
    "SchemaGenerator",
    "PostgresSchemaGenerator",
    "generator_for_dialect",
    # Introspection
    "SchemaParser",
    "SchemaCache",
    "SqlAlchemyExecutor",
    "DbApiExecutor",
    # Specs
    "NO_DEFAULT",
    "ColumnSpec",
    "ConstraintSpec",
    "ConstraintType",
    "IndexSpec",
    "SchemaRow",
    # Operations
    "AlterOperation",
    "AddColumn",
    "DropColumn",
    "RenameColumn",
    "SetColumnType",
    "SetColumnDefault",
    "AddIndex",
    "DropIndex",
    "AddConstraint",
    "DropConstraint",
    "operation_from_dict",
    # Rendering
    "SQLRenderer",
    "SqlglotRenderer",
    # Types
    "ColumnType",
    "schema_column_type",
    "type_literal",
]
