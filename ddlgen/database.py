"""Database context: one dialect's DDL generator plus a cached schema parser.

The Database owns the SchemaCache; nothing about the cache is global. It
does not execute the DDL it generates.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from ddlgen.generator import ColumnEntry, SchemaGenerator, generator_for_dialect
from ddlgen.introspection import QueryExecutor, SchemaParser, SqlAlchemyExecutor
from ddlgen.models import IndexSpec
from ddlgen.operations import AlterOperation
from ddlgen.renderers import SQLRenderer

# SQLAlchemy dialect names -> sqlglot dialect names, where they differ.
_SQLALCHEMY_TO_SQLGLOT = {
    "postgresql": "postgres",
    "mssql": "tsql",
}


class Database:
    """Generates DDL for a dialect and introspects one database's schema."""

    def __init__(
        self,
        executor: QueryExecutor,
        dialect: Optional[str] = None,
        renderer: Optional[SQLRenderer] = None,
        table_schema: Optional[str] = None,
        convert_tinyint_to_bool: Optional[bool] = None,
    ) -> None:
        """Initialize the database context.

        Args:
            executor: Runs introspection queries
            dialect: Dialect name; None uses the configured DIALECT
            renderer: Optional SQLRenderer for the generator
            table_schema: Catalog schema filter for introspection; None uses
                the configured SCHEMA
            convert_tinyint_to_bool: tinyint convention for introspection
        """
        if table_schema is None:
            from ddlgen.config import SCHEMA
            table_schema = SCHEMA

        self.generator: SchemaGenerator = generator_for_dialect(dialect, renderer)
        self.parser = SchemaParser(
            executor,
            dialect=self.generator.dialect,
            table_schema=table_schema,
            convert_tinyint_to_bool=convert_tinyint_to_bool,
        )

    @classmethod
    def from_engine(cls, engine: Engine, **kwargs: Any) -> "Database":
        """Database for a SQLAlchemy engine; the dialect follows the engine's."""
        kwargs.setdefault("dialect", _SQLALCHEMY_TO_SQLGLOT.get(engine.dialect.name, engine.dialect.name))
        return cls(SqlAlchemyExecutor(engine), **kwargs)

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "Database":
        return cls.from_engine(create_engine(url), **kwargs)

    @property
    def cache(self):
        return self.parser.cache

    # -------------------------------------------------------------------------
    # DDL generation
    # -------------------------------------------------------------------------

    def alter_table_sql(self, table: str, op: AlterOperation) -> str:
        return self.generator.alter_table_sql(table, op)

    def alter_table_sql_list(self, table: str, operations: Iterable[AlterOperation]) -> list[str]:
        return self.generator.alter_table_sql_list(table, operations)

    def create_table_sql_list(
        self,
        name: str,
        columns: Sequence[ColumnEntry],
        indexes: Optional[Sequence[IndexSpec]] = None,
    ) -> list[str]:
        return self.generator.create_table_sql_list(name, columns, indexes)

    def drop_table_sql(self, name: str) -> str:
        return self.generator.drop_table_sql(name)

    def rename_table_sql(self, name: str, new_name: str) -> str:
        return self.generator.rename_table_sql(name, new_name)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def schema(self, table_name: Optional[str] = None, reload: bool = False):
        """Cached schema of one table or every base table; see SchemaParser.schema."""
        return self.parser.schema(table_name, reload=reload)
