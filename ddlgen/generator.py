"""DDL generation: column, constraint, index and table builders plus the
ALTER TABLE operation compiler.

All functions here are pure: they take specs and return SQL text, using the
injected SQLRenderer for quoting, literals and CHECK expressions.

Usage:
    gen = generator_for_dialect("postgres")
    gen.create_table_sql_list("items", [ColumnSpec("id", "integer", primary_key=True)])
    gen.alter_table_sql("items", DropColumn("price"))
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Union

from ddlgen.exceptions import InvalidSpec, UnsupportedFeature, UnsupportedOperation
from ddlgen.models import ColumnSpec, ConstraintSpec, ConstraintType, IndexSpec
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
)
from ddlgen.renderers import SQLRenderer, SqlglotRenderer
from ddlgen.types import type_literal

COMMA_SEPARATOR = ", "
UNDERSCORE = "_"

NOT_NULL = " NOT NULL"
NULL = " NULL"
PRIMARY_KEY = " PRIMARY KEY"
UNIQUE = " UNIQUE"

RESTRICT = "RESTRICT"
CASCADE = "CASCADE"
SET_NULL = "SET NULL"
SET_DEFAULT = "SET DEFAULT"
NO_ACTION = "NO ACTION"

_REFERENTIAL_ACTIONS = {
    "restrict": RESTRICT,
    "cascade": CASCADE,
    "set_null": SET_NULL,
    "set_default": SET_DEFAULT,
}

# Entries of a CREATE TABLE column list: columns or table constraints.
ColumnEntry = Union[ColumnSpec, ConstraintSpec]


class SchemaGenerator:
    """Builds DDL statements for a dialect.

    Subclasses override the class attributes below (and ``index_definition_sql``)
    to add dialect features.
    """

    dialect: Optional[str] = None
    auto_increment_sql = "AUTOINCREMENT"
    supports_index_types = False
    supports_partial_indexes = False

    def __init__(self, renderer: Optional[SQLRenderer] = None) -> None:
        """Initialize the generator.

        Args:
            renderer: Quoting/literal/expression collaborator. Defaults to a
                SqlglotRenderer for this generator's dialect.
        """
        self.renderer = renderer if renderer is not None else SqlglotRenderer(self.dialect)

    # -------------------------------------------------------------------------
    # Collaborator proxies
    # -------------------------------------------------------------------------

    def quote_identifier(self, name: Any) -> str:
        return self.renderer.quote_identifier(name)

    def literal(self, value: Any) -> str:
        return self.renderer.literal(value)

    def filter_expr(self, expr: Any) -> str:
        return self.renderer.render_filter_expression(expr)

    def _quoted_list(self, names: Union[str, Iterable[Any]]) -> str:
        if isinstance(names, str):
            names = [names]
        return "(" + COMMA_SEPARATOR.join(self.quote_identifier(n) for n in names) + ")"

    # =========================================================================
    # Column and constraint builders
    # =========================================================================

    def type_literal(self, column: ColumnSpec) -> str:
        """SQL fragment for the type of a column."""
        return type_literal(column, self.literal)

    def column_definition_sql(self, column: ColumnEntry) -> str:
        """SQL fragment defining one column inside CREATE TABLE or ADD COLUMN.

        A ConstraintSpec in a column list (e.g. an inline CHECK) is rendered
        as a constraint instead.
        """
        if isinstance(column, ConstraintSpec):
            return self.constraint_definition_sql(column)
        if str(column.type).lower() == ConstraintType.CHECK.value:
            raise InvalidSpec(
                f"Column '{column.name}' has type check; give CHECK constraints as a ConstraintSpec"
            )

        sql = f"{self.quote_identifier(column.name)} {self.type_literal(column)}"
        if column.unique:
            sql += UNIQUE
        if column.null is False:
            sql += NOT_NULL
        elif column.null is True:
            sql += NULL
        if column.has_default:
            sql += f" DEFAULT {self.literal(column.default)}"
        if column.primary_key:
            sql += PRIMARY_KEY
        if column.auto_increment:
            sql += f" {self.auto_increment_sql}"
        if column.table:
            sql += self.column_references_sql(column)
        return sql

    def column_list_sql(self, columns: Sequence[ColumnEntry]) -> str:
        """Comma-joined column definitions for a CREATE TABLE body."""
        return COMMA_SEPARATOR.join(self.column_definition_sql(c) for c in columns)

    def column_references_sql(self, spec: Union[ColumnSpec, ConstraintSpec]) -> str:
        """REFERENCES clause for a foreign key column or constraint."""
        sql = f" REFERENCES {self.quote_identifier(spec.table)}"
        if spec.key:
            sql += self._quoted_list(spec.key)
        if spec.on_delete:
            sql += f" ON DELETE {self.on_delete_clause(spec.on_delete)}"
        if spec.on_update:
            sql += f" ON UPDATE {self.on_delete_clause(spec.on_update)}"
        return sql

    def on_delete_clause(self, action: Any) -> str:
        """Referential action keyword for ON DELETE / ON UPDATE.

        Recognized actions:
        - restrict: raise an error if other rows reference this row
        - cascade: delete/update rows referencing this row
        - set_null: set referencing columns to NULL
        - set_default: set referencing columns to their default value

        Anything else, including unknown spellings, is NO ACTION.
        """
        key = getattr(action, "value", action)
        return _REFERENTIAL_ACTIONS.get(str(key).lower(), NO_ACTION)

    def constraint_definition_sql(self, constraint: ConstraintSpec) -> str:
        """SQL fragment for a table constraint."""
        sql = ""
        if constraint.name:
            sql = f"CONSTRAINT {self.quote_identifier(constraint.name)} "

        kind = constraint.constraint_type
        if kind == ConstraintType.PRIMARY_KEY:
            sql += f"PRIMARY KEY {self._quoted_list(constraint.columns)}"
        elif kind == ConstraintType.FOREIGN_KEY:
            sql += f"FOREIGN KEY {self._quoted_list(constraint.columns)}"
            sql += self.column_references_sql(constraint)
        elif kind == ConstraintType.UNIQUE:
            sql += f"UNIQUE {self._quoted_list(constraint.columns)}"
        else:
            sql += f"CHECK ({self.filter_expr(constraint.check)})"
        return sql

    # =========================================================================
    # Index builders
    # =========================================================================

    def default_index_name(self, table_name: str, columns: Sequence[Any]) -> str:
        """Index name derived from the table and columns.

        May be too long for some databases.
        """
        return f"{table_name}{UNDERSCORE}{UNDERSCORE.join(str(c) for c in columns)}_index"

    def index_definition_sql(self, table_name: str, index: IndexSpec) -> str:
        """CREATE INDEX statement for an index on the given table.

        Raises:
            UnsupportedFeature: If an index type or partial predicate is
                requested and this dialect supports neither
        """
        if index.type and not self.supports_index_types:
            raise UnsupportedFeature("Index types are not supported for this database")
        if index.where is not None and not self.supports_partial_indexes:
            raise UnsupportedFeature("Partial indexes are not supported for this database")

        index_name = index.name or self.default_index_name(table_name, index.columns)
        unique = "UNIQUE " if index.unique else ""
        sql = (
            f"CREATE {unique}INDEX {self.quote_identifier(index_name)} "
            f"ON {self.quote_identifier(table_name)}"
        )
        if index.type:
            sql += f" USING {index.type}"
        sql += f" {self._quoted_list(index.columns)}"
        if index.where is not None:
            sql += f" WHERE {self.filter_expr(index.where)}"
        return sql

    def index_list_sql_list(self, table_name: str, indexes: Iterable[IndexSpec]) -> list[str]:
        """One CREATE INDEX statement per index, in input order."""
        return [self.index_definition_sql(table_name, index) for index in indexes]

    def drop_index_sql(self, table_name: str, op: DropIndex) -> str:
        """DROP INDEX statement; the name is inferred from the columns if omitted."""
        name = op.name or self.default_index_name(table_name, op.columns)
        return f"DROP INDEX {self.quote_identifier(name)}"

    # =========================================================================
    # Table builders
    # =========================================================================

    def create_table_sql_list(
        self,
        name: str,
        columns: Sequence[ColumnEntry],
        indexes: Optional[Sequence[IndexSpec]] = None,
    ) -> list[str]:
        """Statements creating a table and its indexes.

        Returns:
            The CREATE TABLE statement followed by one CREATE INDEX per index,
            in input order
        """
        sql = [f"CREATE TABLE {self.quote_identifier(name)} ({self.column_list_sql(columns)})"]
        if indexes:
            sql.extend(self.index_list_sql_list(name, indexes))
        return sql

    def drop_table_sql(self, name: str) -> str:
        return f"DROP TABLE {self.quote_identifier(name)}"

    def rename_table_sql(self, name: str, new_name: str) -> str:
        return f"ALTER TABLE {self.quote_identifier(name)} RENAME TO {self.quote_identifier(new_name)}"

    # =========================================================================
    # ALTER TABLE compiler
    # =========================================================================

    def alter_table_sql(self, table: str, op: AlterOperation) -> str:
        """The single statement performing one ALTER TABLE operation.

        Index operations are emitted as standalone CREATE/DROP INDEX statements.

        Raises:
            UnsupportedOperation: If ``op`` is not a known operation
        """
        if isinstance(op, AddIndex):
            return self.index_definition_sql(table, op.index)
        if isinstance(op, DropIndex):
            return self.drop_index_sql(table, op)

        if isinstance(op, AddColumn):
            fragment = f"ADD COLUMN {self.column_definition_sql(op.column)}"
        elif isinstance(op, DropColumn):
            fragment = f"DROP COLUMN {self.quote_identifier(op.name)}"
        elif isinstance(op, RenameColumn):
            fragment = (
                f"RENAME COLUMN {self.quote_identifier(op.name)} "
                f"TO {self.quote_identifier(op.new_name)}"
            )
        elif isinstance(op, SetColumnType):
            column_type = self.type_literal(ColumnSpec(op.name, op.type, size=op.size))
            fragment = f"ALTER COLUMN {self.quote_identifier(op.name)} TYPE {column_type}"
        elif isinstance(op, SetColumnDefault):
            fragment = (
                f"ALTER COLUMN {self.quote_identifier(op.name)} "
                f"SET DEFAULT {self.literal(op.default)}"
            )
        elif isinstance(op, AddConstraint):
            fragment = f"ADD {self.constraint_definition_sql(op.constraint)}"
        elif isinstance(op, DropConstraint):
            fragment = f"DROP CONSTRAINT {self.quote_identifier(op.name)}"
        else:
            raise UnsupportedOperation(f"Unsupported ALTER TABLE operation: {op!r}")

        return f"ALTER TABLE {self.quote_identifier(table)} {fragment}"

    def alter_table_sql_list(self, table: str, operations: Iterable[AlterOperation]) -> list[str]:
        """ALTER statements for each operation, in order.

        Not atomic: executing the list transactionally is up to the caller.
        """
        return [self.alter_table_sql(table, op) for op in operations]


class PostgresSchemaGenerator(SchemaGenerator):
    """PostgreSQL: index methods (USING) and partial indexes are supported."""

    dialect = "postgres"
    auto_increment_sql = "GENERATED BY DEFAULT AS IDENTITY"
    supports_index_types = True
    supports_partial_indexes = True


def generator_for_dialect(
    dialect: Optional[str] = None,
    renderer: Optional[SQLRenderer] = None,
) -> SchemaGenerator:
    """Create a SchemaGenerator for a dialect name.

    Args:
        dialect: Dialect name (postgres, postgresql, mysql, duckdb, ...).
            None uses the configured DIALECT.
        renderer: Optional SQLRenderer; defaults to sqlglot for the dialect

    Returns:
        A PostgresSchemaGenerator for PostgreSQL, otherwise a generic
        SchemaGenerator rendering through the named dialect
    """
    if dialect is None:
        from ddlgen.config import DIALECT
        dialect = DIALECT

    dialect_lower = (dialect or "").lower()
    if dialect_lower in ("postgres", "postgresql"):
        return PostgresSchemaGenerator(renderer)

    generator = SchemaGenerator(renderer if renderer is not None else SqlglotRenderer(dialect_lower or None))
    generator.dialect = dialect_lower or None
    return generator
