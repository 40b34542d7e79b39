"""Identifier quoting, literal rendering and expression rendering.

The DDL builders never format identifiers or values themselves; they go
through an object implementing SQLRenderer. SqlglotRenderer is the default
and delegates to sqlglot's generator for the requested dialect.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

import sqlglot
from sqlglot import exp


@runtime_checkable
class SQLRenderer(Protocol):
    """Protocol for the quoting/literal/expression collaborator."""

    def quote_identifier(self, name: Any) -> str:
        """Quote a table, column, index or constraint name."""
        ...

    def literal(self, value: Any) -> str:
        """Render a value as a SQL literal.

        Lists and tuples render as a parenthesized, comma-separated list.
        """
        ...

    def render_filter_expression(self, expr: Any) -> str:
        """Render a boolean expression (CHECK constraints, partial indexes)."""
        ...


class SqlglotRenderer:
    """SQLRenderer backed by sqlglot expressions."""

    def __init__(self, dialect: Optional[str] = None) -> None:
        """Initialize the renderer.

        Args:
            dialect: sqlglot dialect name (e.g. "postgres", "mysql"); None uses
                sqlglot's ANSI-style default
        """
        self.dialect = dialect

    def quote_identifier(self, name: Any) -> str:
        if isinstance(name, exp.Expression):
            return name.sql(dialect=self.dialect)
        return exp.to_identifier(str(name), quoted=True).sql(dialect=self.dialect)

    def literal(self, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            return "(" + ", ".join(self.literal(v) for v in value) + ")"
        if isinstance(value, exp.Expression):
            return value.sql(dialect=self.dialect)
        return exp.convert(value).sql(dialect=self.dialect)

    def render_filter_expression(self, expr: Any) -> str:
        if isinstance(expr, str):
            expr = sqlglot.condition(expr, dialect=self.dialect)
        return expr.sql(dialect=self.dialect)
