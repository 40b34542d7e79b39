"""Dataclasses describing columns, constraints, indexes and introspected rows.

These are the inputs of the DDL builders (ColumnSpec, ConstraintSpec,
IndexSpec) and the output of the schema parser (SchemaRow).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Union

from ddlgen.types import ColumnType, TypeLike


class _NoDefault:
    """Marker for a column that has no DEFAULT clause."""

    _instance: Optional["_NoDefault"] = None

    def __new__(cls) -> "_NoDefault":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


# Distinguishes "no default" from an explicit NULL default (None).
NO_DEFAULT: Any = _NoDefault()


def coerce_column_type(value: TypeLike) -> TypeLike:
    """Return the canonical ColumnType for a name, or the raw string unchanged."""
    if isinstance(value, ColumnType):
        return value
    try:
        return ColumnType(str(value).lower())
    except ValueError:
        return value


class ConstraintType(str, Enum):
    """Table constraint kinds."""

    PRIMARY_KEY = "primary_key"
    FOREIGN_KEY = "foreign_key"
    UNIQUE = "unique"
    CHECK = "check"


@dataclass
class ColumnSpec:
    """A column to create or add.

    ``null`` is tri-state: None emits no nullability clause at all.
    ``default`` is NO_DEFAULT when the column has no DEFAULT clause; None
    means an explicit ``DEFAULT NULL``.
    ``table`` turns the column into a foreign key referencing that table.
    """

    name: str
    type: TypeLike
    size: Optional[Union[int, Sequence[int]]] = None
    elements: Optional[Sequence[Any]] = None
    null: Optional[bool] = None
    unique: bool = False
    default: Any = NO_DEFAULT
    primary_key: bool = False
    auto_increment: bool = False
    unsigned: bool = False
    # Foreign key target
    table: Optional[str] = None
    key: Optional[Union[str, Sequence[str]]] = None
    on_delete: Optional[str] = None
    on_update: Optional[str] = None

    def __post_init__(self):
        self.type = coerce_column_type(self.type)

    @property
    def has_default(self) -> bool:
        """True if a DEFAULT clause should be emitted, even for a None value."""
        return self.default is not NO_DEFAULT


@dataclass
class ConstraintSpec:
    """A table constraint (PRIMARY KEY, FOREIGN KEY, UNIQUE or CHECK)."""

    constraint_type: ConstraintType
    columns: list[str] = field(default_factory=list)
    name: Optional[str] = None
    check: Any = None  # Opaque; rendered by SQLRenderer.render_filter_expression
    # Foreign key target
    table: Optional[str] = None
    key: Optional[Union[str, Sequence[str]]] = None
    on_delete: Optional[str] = None
    on_update: Optional[str] = None

    def __post_init__(self):
        self.constraint_type = ConstraintType(self.constraint_type)
        if isinstance(self.columns, str):
            self.columns = [self.columns]
        else:
            self.columns = list(self.columns)


@dataclass
class IndexSpec:
    """An index on a table; the name is derived from the columns when omitted."""

    columns: list[str]
    name: Optional[str] = None
    unique: bool = False
    type: Optional[str] = None  # e.g. "gin", "btree"
    where: Any = None  # Partial index predicate

    def __post_init__(self):
        if isinstance(self.columns, str):
            self.columns = [self.columns]
        else:
            self.columns = list(self.columns)


@dataclass
class SchemaRow:
    """One column as reported by the information schema, normalized."""

    db_type: Optional[str]
    type: Optional[ColumnType]
    allow_null: bool
    default: Optional[str] = None
    max_chars: Optional[int] = None
    numeric_precision: Optional[int] = None
    table_name: Optional[str] = None


# Ordered (column name, row) pairs in physical column order.
TableSchema = list[tuple[str, SchemaRow]]
