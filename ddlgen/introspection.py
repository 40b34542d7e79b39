"""Parse a live database's schema from the SQL standard INFORMATION_SCHEMA.

The parser issues one query per cache miss through an injected executor (any
callable taking SQL text and returning rows as mappings), normalizes the rows
and keeps the result in a SchemaCache until it is explicitly invalidated.

The cache is not synchronized. Sharing one parser between threads needs
locking by the owner.

Usage:
    parser = SchemaParser(SqlAlchemyExecutor(engine), dialect="postgres")
    parser.schema("items")               # [("id", SchemaRow(...)), ...]
    parser.schema()                      # {"items": [...], "orders": [...]}
    parser.schema("items", reload=True)  # re-query one table
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, Union

import sqlglot
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlglot import exp

from ddlgen.models import SchemaRow, TableSchema
from ddlgen.types import schema_column_type

# Runs one SQL query and returns its rows as column-name -> value mappings.
QueryExecutor = Callable[[str], Iterable[Mapping[str, Any]]]

DatabaseSchema = dict[str, TableSchema]


# =============================================================================
# Executors
# =============================================================================


class SqlAlchemyExecutor:
    """Executes introspection queries on a SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def __call__(self, sql: str) -> list[dict[str, Any]]:
        with self.engine.connect() as conn:
            return [dict(row) for row in conn.execute(text(sql)).mappings()]


class DbApiExecutor:
    """Executes introspection queries on a DB-API 2.0 connection (psycopg2, duckdb, ...)."""

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def __call__(self, sql: str) -> list[dict[str, Any]]:
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql)
            names = [d[0] for d in cursor.description]
            return [dict(zip(names, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()


# =============================================================================
# Cache
# =============================================================================


class SchemaCache:
    """Parsed table schemas keyed by table name.

    Entries never expire; they are replaced only after ``invalidate``.
    The cache also remembers whether it holds every table of the database
    (after a whole-database load), so that a partial cache is never returned
    as the whole schema.
    """

    def __init__(self) -> None:
        self._tables: DatabaseSchema = {}
        self._complete = False

    def __contains__(self, table_name: str) -> bool:
        return table_name in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    @property
    def complete(self) -> bool:
        """True if the cache holds the result of a whole-database load."""
        return self._complete

    def get(self, table_name: str) -> Optional[TableSchema]:
        return self._tables.get(table_name)

    def all(self) -> Optional[DatabaseSchema]:
        """All tables, or None if no whole-database load is cached."""
        if not self._complete:
            return None
        return dict(self._tables)

    def store(self, table_name: str, schema: TableSchema) -> None:
        """Cache one table; a table new to the cache ends any whole-database view."""
        if table_name not in self._tables:
            self._complete = False
        self._tables[table_name] = schema

    def store_all(self, schemas: DatabaseSchema) -> None:
        """Replace the cache with a whole-database load."""
        self._tables = dict(schemas)
        self._complete = True

    def invalidate(self, table_name: Optional[str] = None) -> None:
        """Drop one table's entry, or everything when no table is given."""
        if table_name is None:
            self._tables = {}
        else:
            self._tables.pop(table_name, None)
        self._complete = False

    def get_or_populate(
        self,
        table_name: Optional[str],
        loader: Callable[[Optional[str]], Any],
    ) -> Union[TableSchema, DatabaseSchema]:
        """Return the cached schema, calling ``loader`` once on a miss.

        Args:
            table_name: Table to look up, or None for the whole database
            loader: Called with ``table_name`` on a miss; returns a TableSchema
                for a table, or a DatabaseSchema for None

        Returns:
            The cached or freshly loaded schema
        """
        if table_name is None:
            cached = self.all()
            if cached is None:
                self.store_all(loader(None))
                cached = self.all()
            return cached

        cached = self.get(table_name)
        if cached is None:
            cached = loader(table_name)
            self.store(table_name, cached)
        return cached


# =============================================================================
# Parser
# =============================================================================

_JOIN_CONDITION = (
    "t.table_catalog = c.table_catalog"
    " AND t.table_schema = c.table_schema"
    " AND t.table_name = c.table_name"
)

_SELECT_COLUMNS = [
    "c.column_name AS column_name",
    "c.data_type AS db_type",
    "c.character_maximum_length AS max_chars",
    "c.numeric_precision AS numeric_precision",
    "c.column_default AS column_default",
    "c.is_nullable AS allow_null",
]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class SchemaParser:
    """Reads column metadata from information_schema.tables/columns."""

    def __init__(
        self,
        executor: QueryExecutor,
        dialect: Optional[str] = None,
        table_schema: Optional[str] = None,
        convert_tinyint_to_bool: Optional[bool] = None,
        cache: Optional[SchemaCache] = None,
    ) -> None:
        """Initialize the parser.

        Args:
            executor: Runs SQL text and returns rows as mappings
            dialect: sqlglot dialect the query is rendered in
            table_schema: Only consider tables in this catalog schema
                (e.g. "public"); None considers every schema
            convert_tinyint_to_bool: tinyint convention; None uses the
                configured CONVERT_TINYINT_TO_BOOL
            cache: Cache to populate; a new one by default
        """
        self.executor = executor
        self.dialect = dialect
        self.table_schema = table_schema
        self.convert_tinyint_to_bool = convert_tinyint_to_bool
        self.cache = cache if cache is not None else SchemaCache()

    # -------------------------------------------------------------------------
    # Query
    # -------------------------------------------------------------------------

    def schema_ds(self, table_name: Optional[str] = None) -> exp.Select:
        """The introspection query for one table, or all base tables."""
        columns = list(_SELECT_COLUMNS)
        if table_name is None:
            columns.append("c.table_name AS table_name")
            condition = exp.column("table_type", table="t").eq(exp.Literal.string("BASE TABLE"))
        else:
            condition = exp.column("table_name", table="c").eq(exp.Literal.string(str(table_name)))

        query = (
            sqlglot.select(*columns)
            .from_(exp.table_("tables", db="information_schema", alias="t"))
            .join(exp.table_("columns", db="information_schema", alias="c"), on=_JOIN_CONDITION)
            .where(condition)
        )
        if self.table_schema:
            query = query.where(
                exp.column("table_schema", table="t").eq(exp.Literal.string(self.table_schema))
            )
        return query.order_by("c.table_name", "c.ordinal_position")

    def schema_sql(self, table_name: Optional[str] = None) -> str:
        return self.schema_ds(table_name).sql(dialect=self.dialect)

    # -------------------------------------------------------------------------
    # Row normalization
    # -------------------------------------------------------------------------

    def parse_row(self, row: Mapping[str, Any]) -> tuple[str, SchemaRow]:
        """Normalize one information_schema row into (column name, SchemaRow)."""
        row = {str(k).lower(): v for k, v in row.items()}
        db_type = row.get("db_type")
        default = row.get("column_default")
        return row["column_name"], SchemaRow(
            db_type=db_type,
            type=schema_column_type(db_type, self.convert_tinyint_to_bool),
            allow_null=row.get("allow_null") == "YES",
            default=None if _is_blank(default) else default,
            max_chars=row.get("max_chars"),
            numeric_precision=row.get("numeric_precision"),
            table_name=row.get("table_name"),
        )

    def parse_rows(self, rows: Iterable[Mapping[str, Any]]) -> TableSchema:
        return [self.parse_row(row) for row in rows]

    def parse_table(self, table_name: str) -> TableSchema:
        """Query and parse the columns of one table, in physical order."""
        return self.parse_rows(self.executor(self.schema_sql(table_name)))

    def parse_tables(self) -> DatabaseSchema:
        """Query and parse every base table, grouped in first-seen order."""
        schemas: DatabaseSchema = {}
        for name, row in self.parse_rows(self.executor(self.schema_sql())):
            schemas.setdefault(row.table_name, []).append((name, row))
        return schemas

    def _load(self, table_name: Optional[str]) -> Union[TableSchema, DatabaseSchema]:
        if table_name is None:
            return self.parse_tables()
        return self.parse_table(table_name)

    # -------------------------------------------------------------------------
    # Cached access
    # -------------------------------------------------------------------------

    def schema(
        self,
        table_name: Optional[str] = None,
        reload: bool = False,
    ) -> Union[TableSchema, DatabaseSchema]:
        """Schema of one table, or of all base tables, from the cache.

        Args:
            table_name: Table to describe; None describes every base table
            reload: Invalidate the cached entry (or the whole cache when
                ``table_name`` is None) before looking it up

        Returns:
            For a table, an ordered list of (column name, SchemaRow); for the
            whole database, a dict mapping table names to such lists
        """
        if reload:
            self.cache.invalidate(table_name)
        return self.cache.get_or_populate(table_name, self._load)
