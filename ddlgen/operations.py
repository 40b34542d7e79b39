"""ALTER TABLE operations and loaders for dict/YAML descriptors.

Each operation kind is its own frozen dataclass holding only the fields it
needs. ``AlterOperation`` is the union of all of them; ``operation_from_dict``
turns a loosely typed mapping (as read from YAML) into one of them.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Mapping, Optional, Union

from ddlgen.exceptions import InvalidSpec, UnsupportedOperation
from ddlgen.models import NO_DEFAULT, ColumnSpec, ConstraintSpec, ConstraintType, IndexSpec
from ddlgen.types import TypeLike


@dataclass(frozen=True)
class AddColumn:
    op: ClassVar[str] = "add_column"
    column: ColumnSpec


@dataclass(frozen=True)
class DropColumn:
    op: ClassVar[str] = "drop_column"
    name: str


@dataclass(frozen=True)
class RenameColumn:
    op: ClassVar[str] = "rename_column"
    name: str
    new_name: str


@dataclass(frozen=True)
class SetColumnType:
    op: ClassVar[str] = "set_column_type"
    name: str
    type: TypeLike
    size: Optional[Any] = None


@dataclass(frozen=True)
class SetColumnDefault:
    """Set a column default; ``default=None`` sets DEFAULT NULL."""

    op: ClassVar[str] = "set_column_default"
    name: str
    default: Any


@dataclass(frozen=True)
class AddIndex:
    op: ClassVar[str] = "add_index"
    index: IndexSpec


@dataclass(frozen=True)
class DropIndex:
    """Drop an index by name, or by the name derived from its columns."""

    op: ClassVar[str] = "drop_index"
    columns: tuple[str, ...] = field(default_factory=tuple)
    name: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.columns, str):
            object.__setattr__(self, "columns", (self.columns,))
        else:
            object.__setattr__(self, "columns", tuple(self.columns))
        if not self.name and not self.columns:
            raise InvalidSpec("drop_index needs a name or the indexed columns")


@dataclass(frozen=True)
class AddConstraint:
    op: ClassVar[str] = "add_constraint"
    constraint: ConstraintSpec


@dataclass(frozen=True)
class DropConstraint:
    op: ClassVar[str] = "drop_constraint"
    name: str


AlterOperation = Union[
    AddColumn,
    DropColumn,
    RenameColumn,
    SetColumnType,
    SetColumnDefault,
    AddIndex,
    DropIndex,
    AddConstraint,
    DropConstraint,
]

OPERATION_TYPES: dict[str, type] = {
    cls.op: cls
    for cls in (
        AddColumn,
        DropColumn,
        RenameColumn,
        SetColumnType,
        SetColumnDefault,
        AddIndex,
        DropIndex,
        AddConstraint,
        DropConstraint,
    )
}


# =============================================================================
# Loaders for loosely typed descriptors
# =============================================================================


def _build(cls: type, data: Mapping[str, Any], what: str) -> Any:
    """Instantiate a dataclass from the subset of ``data`` it knows about."""
    names = {f.name for f in fields(cls) if f.init}
    kwargs = {k: v for k, v in data.items() if k in names}
    try:
        return cls(**kwargs)
    except (TypeError, ValueError) as e:
        raise InvalidSpec(f"Invalid {what} {dict(data)!r}: {e}") from e


def column_from_dict(data: Mapping[str, Any]) -> ColumnSpec:
    """Build a ColumnSpec; a missing ``default`` key means no DEFAULT clause.

    ``nullable`` is accepted as a synonym for ``null``.
    """
    data = dict(data)
    if "nullable" in data and "null" not in data:
        data["null"] = data.pop("nullable")
    if "default" not in data:
        data["default"] = NO_DEFAULT
    return _build(ColumnSpec, data, "column")


def constraint_from_dict(data: Mapping[str, Any]) -> ConstraintSpec:
    data = dict(data)
    if "type" in data and "constraint_type" not in data:
        data["constraint_type"] = data.pop("type")
    return _build(ConstraintSpec, data, "constraint")


def index_from_dict(data: Mapping[str, Any]) -> IndexSpec:
    return _build(IndexSpec, data, "index")


def column_entry_from_dict(data: Mapping[str, Any]) -> Union[ColumnSpec, ConstraintSpec]:
    """Column list entry: a constraint if it has ``constraint_type`` or
    ``type: check``, else a column."""
    if "constraint_type" in data or str(data.get("type", "")).lower() == ConstraintType.CHECK.value:
        return constraint_from_dict(data)
    return column_from_dict(data)


def operation_from_dict(data: Mapping[str, Any]) -> AlterOperation:
    """Build an AlterOperation from a mapping with an ``op`` key.

    Column, index and constraint fields may be given inline next to ``op``
    or nested under ``column`` / ``index`` / ``constraint``.

    Raises:
        UnsupportedOperation: If ``op`` names no known operation
        InvalidSpec: If ``op`` is missing or required fields are absent
    """
    if "op" not in data:
        raise InvalidSpec(f"Operation has no 'op' key: {dict(data)!r}")

    kind = str(data["op"])
    cls = OPERATION_TYPES.get(kind)
    if cls is None:
        raise UnsupportedOperation(f"Unsupported ALTER TABLE operation: {kind}")

    rest = {k: v for k, v in data.items() if k != "op"}
    if cls is AddColumn:
        return AddColumn(column_from_dict(rest.get("column", rest)))
    if cls is AddIndex:
        return AddIndex(index_from_dict(rest.get("index", rest)))
    if cls is AddConstraint:
        return AddConstraint(constraint_from_dict(rest.get("constraint", rest)))
    if cls is SetColumnDefault and "default" not in rest:
        raise InvalidSpec("set_column_default needs a 'default' key (use null for NULL)")
    return _build(cls, rest, kind)
