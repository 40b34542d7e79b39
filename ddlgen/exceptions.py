"""Exceptions raised by the DDL generator and schema loaders."""
from __future__ import annotations


class DDLError(Exception):
    """Base class for all ddlgen errors."""


class UnsupportedOperation(DDLError):
    """Raised for an ALTER TABLE operation kind the compiler does not know."""


class UnsupportedFeature(DDLError):
    """Raised when a feature is requested that the target dialect lacks.

    Index types and partial indexes are the current cases.
    """


class InvalidSpec(DDLError):
    """Raised when a dict/YAML descriptor cannot be turned into a spec."""
