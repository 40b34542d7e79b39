"""Tests for the Database context object."""
from __future__ import annotations

import pytest
from sqlalchemy import create_engine

from ddlgen.database import Database
from ddlgen.exceptions import UnsupportedOperation
from ddlgen.generator import PostgresSchemaGenerator, SchemaGenerator
from ddlgen.introspection import SchemaCache
from ddlgen.models import ColumnSpec, IndexSpec
from ddlgen.operations import DropColumn
from ddlgen.tests.conftest import fake_executor, make_row


class TestDatabase:
    """Tests for Database."""
    
    def test_postgres_context(self):
        db = Database(fake_executor(), dialect="postgres", table_schema="public")
        assert isinstance(db.generator, PostgresSchemaGenerator)
        assert db.parser.dialect == "postgres"
        assert db.parser.table_schema == "public"
    
    def test_generation_delegates(self):
        db = Database(fake_executor(), dialect="postgres")
        
        assert db.alter_table_sql("items", DropColumn("a")) == 'ALTER TABLE "items" DROP COLUMN "a"'
        assert db.alter_table_sql_list("items", [DropColumn("a"), DropColumn("b")]) == [
            'ALTER TABLE "items" DROP COLUMN "a"',
            'ALTER TABLE "items" DROP COLUMN "b"',
        ]
        assert db.create_table_sql_list("t", [ColumnSpec("a", "integer")], [IndexSpec(["a"])]) == [
            'CREATE TABLE "t" ("a" integer)',
            'CREATE INDEX "t_a_index" ON "t" ("a")',
        ]
        assert db.drop_table_sql("t") == 'DROP TABLE "t"'
        assert db.rename_table_sql("t", "u") == 'ALTER TABLE "t" RENAME TO "u"'
    
    def test_unsupported_operation(self):
        db = Database(fake_executor(), dialect="postgres")
        with pytest.raises(UnsupportedOperation):
            db.alter_table_sql("items", "drop everything")
    
    def test_each_context_owns_its_cache(self):
        executor = fake_executor([make_row("id", "integer")])
        first = Database(executor, dialect="postgres")
        second = Database(executor, dialect="postgres")
        
        first.schema("items")
        second.schema("items")
        first.schema("items")
        
        assert isinstance(first.cache, SchemaCache)
        assert first.cache is not second.cache
        assert executor.call_count == 2
    
    def test_schema_reload(self):
        executor = fake_executor([make_row("id", "integer")])
        db = Database(executor, dialect="postgres")
        db.schema("items")
        db.schema("items", reload=True)
        assert executor.call_count == 2
    
    def test_from_engine_uses_engine_dialect(self):
        db = Database.from_engine(create_engine("sqlite://"))
        assert type(db.generator) is SchemaGenerator
        assert db.generator.dialect == "sqlite"
    
    def test_from_url_with_explicit_dialect(self):
        db = Database.from_url("sqlite://", dialect="postgres")
        assert isinstance(db.generator, PostgresSchemaGenerator)
