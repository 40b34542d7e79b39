"""Tests for ALTER TABLE operation variants and the dict loaders."""
from __future__ import annotations

import dataclasses

import pytest

from ddlgen.exceptions import InvalidSpec, UnsupportedOperation
from ddlgen.models import NO_DEFAULT, ConstraintSpec, ConstraintType
from ddlgen.operations import (
    OPERATION_TYPES,
    AddColumn,
    AddConstraint,
    AddIndex,
    DropColumn,
    DropConstraint,
    DropIndex,
    RenameColumn,
    SetColumnDefault,
    SetColumnType,
    column_entry_from_dict,
    column_from_dict,
    constraint_from_dict,
    index_from_dict,
    operation_from_dict,
)
from ddlgen.types import ColumnType


class TestOperationVariants:
    """Tests for the operation dataclasses themselves."""
    
    def test_closed_set_of_kinds(self):
        assert set(OPERATION_TYPES) == {
            "add_column",
            "drop_column",
            "rename_column",
            "set_column_type",
            "set_column_default",
            "add_index",
            "drop_index",
            "add_constraint",
            "drop_constraint",
        }
    
    def test_operations_are_frozen(self):
        op = DropColumn("price")
        with pytest.raises(dataclasses.FrozenInstanceError):
            op.name = "other"
    
    def test_drop_index_needs_name_or_columns(self):
        with pytest.raises(InvalidSpec):
            DropIndex()
    
    def test_drop_index_columns_become_tuple(self):
        assert DropIndex(columns=["a", "b"]).columns == ("a", "b")
        assert DropIndex(columns="a").columns == ("a",)


class TestOperationFromDict:
    """Tests for operation_from_dict."""
    
    def test_add_column_inline(self):
        op = operation_from_dict({"op": "add_column", "name": "price", "type": "integer", "nullable": False})
        assert isinstance(op, AddColumn)
        assert op.column.name == "price"
        assert op.column.type is ColumnType.INTEGER
        assert op.column.null is False
        assert op.column.default is NO_DEFAULT
    
    def test_add_column_nested(self):
        op = operation_from_dict({"op": "add_column", "column": {"name": "a", "type": "text", "default": None}})
        assert op.column.has_default
        assert op.column.default is None
    
    def test_drop_and_rename(self):
        assert operation_from_dict({"op": "drop_column", "name": "a"}) == DropColumn("a")
        assert operation_from_dict({"op": "rename_column", "name": "a", "new_name": "b"}) == RenameColumn("a", "b")
    
    def test_set_column_type(self):
        op = operation_from_dict({"op": "set_column_type", "name": "a", "type": "varchar", "size": 20})
        assert op == SetColumnType("a", "varchar", 20)
    
    def test_set_column_default_null(self):
        assert operation_from_dict({"op": "set_column_default", "name": "a", "default": None}) == (
            SetColumnDefault("a", None)
        )
    
    def test_set_column_default_requires_default_key(self):
        with pytest.raises(InvalidSpec):
            operation_from_dict({"op": "set_column_default", "name": "a"})
    
    def test_index_operations(self):
        add = operation_from_dict({"op": "add_index", "columns": ["a"], "unique": True})
        assert isinstance(add, AddIndex)
        assert add.index.unique is True
        drop = operation_from_dict({"op": "drop_index", "columns": ["a"]})
        assert drop == DropIndex(columns=("a",))
    
    def test_constraint_operations(self):
        add = operation_from_dict({"op": "add_constraint", "type": "unique", "columns": ["a"], "name": "u"})
        assert isinstance(add, AddConstraint)
        assert add.constraint.constraint_type is ConstraintType.UNIQUE
        assert operation_from_dict({"op": "drop_constraint", "name": "u"}) == DropConstraint("u")
    
    def test_unknown_kind(self):
        with pytest.raises(UnsupportedOperation, match="truncate"):
            operation_from_dict({"op": "truncate"})
    
    def test_missing_op(self):
        with pytest.raises(InvalidSpec):
            operation_from_dict({"name": "a"})
    
    def test_missing_required_field(self):
        with pytest.raises(InvalidSpec, match="rename_column"):
            operation_from_dict({"op": "rename_column", "name": "a"})
    
    def test_unrelated_fields_are_ignored(self):
        """Only the fields a kind needs are kept."""
        op = operation_from_dict({"op": "drop_column", "name": "a", "new_name": "ignored"})
        assert op == DropColumn("a")


class TestSpecLoaders:
    """Tests for the column/constraint/index loaders."""
    
    def test_column_without_default(self):
        assert column_from_dict({"name": "a", "type": "text"}).has_default is False
    
    def test_column_with_foreign_key(self):
        column = column_from_dict({"name": "user_id", "type": "integer", "table": "users", "on_delete": "cascade"})
        assert column.table == "users"
        assert column.on_delete == "cascade"
    
    def test_invalid_constraint_type(self):
        with pytest.raises(InvalidSpec):
            constraint_from_dict({"constraint_type": "exclusion", "columns": ["a"]})
    
    def test_index_single_column_string(self):
        assert index_from_dict({"columns": "a"}).columns == ["a"]
    
    def test_column_entry_dispatch(self):
        assert column_entry_from_dict({"constraint_type": "check", "check": "a > 0"}).check == "a > 0"
        assert column_entry_from_dict({"name": "a", "type": "integer"}).name == "a"

    def test_check_typed_entry_is_a_constraint(self):
        """A column list entry with type check becomes a CHECK constraint."""
        entry = column_entry_from_dict({"type": "check", "check": "price > 0"})
        assert isinstance(entry, ConstraintSpec)
        assert entry.check == "price > 0"
        assert entry.name is None

    def test_named_check_typed_entry(self):
        entry = column_entry_from_dict({"type": "CHECK", "name": "positive_price", "check": "price > 0"})
        assert isinstance(entry, ConstraintSpec)
        assert entry.name == "positive_price"
