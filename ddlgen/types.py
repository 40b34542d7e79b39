"""Canonical column types and their mapping to and from dialect SQL.

Outbound, a ColumnSpec's canonical type becomes the literal used in DDL
(``type_literal``). Inbound, the type string a database reports in its
information schema becomes a canonical type (``schema_column_type``).
"""
from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Union

if TYPE_CHECKING:
    from ddlgen.models import ColumnSpec


class ColumnType(str, Enum):
    """Dialect-independent column types."""

    INTEGER = "integer"
    BIGINT = "bigint"
    SMALLINT = "smallint"
    STRING = "string"
    VARCHAR = "varchar"
    CHAR = "char"
    TEXT = "text"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    TIME = "time"
    BOOLEAN = "boolean"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    NUMERIC = "numeric"
    BLOB = "blob"
    ENUM = "enum"

    def __str__(self) -> str:
        return self.value


# A column type is either canonical or a raw dialect literal (extension types
# such as "jsonb" or "uuid") that is emitted as-is.
TypeLike = Union[ColumnType, str]

DEFAULT_VARCHAR_SIZE = 255
UNSIGNED = " UNSIGNED"

# Canonical types whose DDL literal differs from their own name.
TYPES: dict[ColumnType, str] = {
    ColumnType.DOUBLE: "double precision",
}


# =============================================================================
# Outbound: canonical type -> DDL literal
# =============================================================================


def type_literal_base(column_type: TypeLike) -> str:
    """Base DDL literal for a type, without size or elements."""
    if isinstance(column_type, ColumnType):
        return TYPES.get(column_type, column_type.value)
    return str(column_type)


def type_literal(column: "ColumnSpec", literal: Callable[[object], str]) -> str:
    """Full DDL type literal for a column.

    Args:
        column: Column whose type, size, elements and unsigned flag are used
        literal: Literal renderer; sizes and elements are rendered as a
            parenthesized list through it

    Returns:
        Type literal such as ``varchar(255)`` or ``decimal(10, 2) UNSIGNED``
    """
    size = column.size
    if size is None and column.type == ColumnType.VARCHAR:
        size = DEFAULT_VARCHAR_SIZE
    elements = size if size is not None else column.elements

    sql = type_literal_base(column.type)
    if elements is not None:
        if not isinstance(elements, (list, tuple)):
            elements = [elements]
        sql += literal(list(elements))
    if column.unsigned:
        sql += UNSIGNED
    return sql


# =============================================================================
# Inbound: reported db type -> canonical type
# =============================================================================

# Ordered specific-before-general; the first full match wins.
_SCHEMA_TYPE_RULES: list[tuple[re.Pattern[str], ColumnType]] = [
    (re.compile(r"int(eger)?|bigint|smallint", re.IGNORECASE), ColumnType.INTEGER),
    (re.compile(r"character( varying)?|varchar|text", re.IGNORECASE), ColumnType.STRING),
    (re.compile(r"date", re.IGNORECASE), ColumnType.DATE),
    (re.compile(r"datetime|timestamp( with(out)? time zone)?", re.IGNORECASE), ColumnType.DATETIME),
    (re.compile(r"time( with(out)? time zone)?", re.IGNORECASE), ColumnType.TIME),
    (re.compile(r"boolean", re.IGNORECASE), ColumnType.BOOLEAN),
    (re.compile(r"real|float|double( precision)?", re.IGNORECASE), ColumnType.FLOAT),
    (re.compile(r"numeric|decimal|money", re.IGNORECASE), ColumnType.DECIMAL),
    (re.compile(r"bytea", re.IGNORECASE), ColumnType.BLOB),
]


def schema_column_type(
    db_type: Optional[str],
    convert_tinyint_to_bool: Optional[bool] = None,
) -> Optional[ColumnType]:
    """Map a database-reported type string to a canonical type.

    Args:
        db_type: Type as reported by the information schema
            (e.g. ``character varying``, ``timestamp without time zone``)
        convert_tinyint_to_bool: Whether ``tinyint`` means boolean. Defaults
            to the configured ``CONVERT_TINYINT_TO_BOOL``.

    Returns:
        The canonical ColumnType, or None if the type is not recognized
    """
    if not db_type:
        return None
    db_type = db_type.strip()

    if db_type.lower() == "tinyint":
        if convert_tinyint_to_bool is None:
            from ddlgen.config import CONVERT_TINYINT_TO_BOOL
            convert_tinyint_to_bool = CONVERT_TINYINT_TO_BOOL
        return ColumnType.BOOLEAN if convert_tinyint_to_bool else ColumnType.INTEGER

    for pattern, column_type in _SCHEMA_TYPE_RULES:
        if pattern.fullmatch(db_type):
            return column_type
    return None
