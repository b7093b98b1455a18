"""
Column Type Domains and SQL Type-Name Classification.

Every column belongs to one of four ordered domains. SQL type names coming
from DDL or from a driver are folded onto these domains.
"""

import enum
import sys
from typing import Set

__all__ = [
    "ColumnType",
    "INTEGER_MIN",
    "INTEGER_MAX",
    "FLOAT_MAX",
    "INTEGER_TYPES",
    "FLOAT_TYPES",
    "TEXT_TYPES",
    "BLOB_TYPES",
    "is_integer",
    "is_float",
    "is_text",
    "is_blob",
    "column_type_from_sql",
]


class ColumnType(enum.Enum):
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    TEXT = "TEXT"
    BLOB = "BLOB"

    def __str__(self) -> str:
        return self.value


# Representable range of each ordered domain
INTEGER_MIN = -(2 ** 63)
INTEGER_MAX = 2 ** 63 - 1
FLOAT_MAX = sys.float_info.max

# Base Categories
INTEGER_TYPES: Set[str] = {
    'integer', 'int', 'smallint', 'bigint', 'tinyint', 'mediumint',
    'int2', 'int4', 'int8', 'serial', 'bigserial', 'boolean', 'bool'
}

FLOAT_TYPES: Set[str] = {
    'real', 'float', 'double', 'double precision', 'decimal', 'numeric', 'money'
}

TEXT_TYPES: Set[str] = {
    'character varying', 'varchar', 'character', 'char', 'text', 'name',
    'bpchar', 'clob', 'string'
}

BLOB_TYPES: Set[str] = {'blob', 'bytea', 'binary', 'varbinary'}


def _base_name(dtype: str) -> str:
    return dtype.lower().split('(')[0].strip()


# Helper to check types loosely (handles parameterized types like "varchar(50)")
def is_integer(dtype: str) -> bool:
    return _base_name(dtype) in INTEGER_TYPES

def is_float(dtype: str) -> bool:
    return _base_name(dtype) in FLOAT_TYPES

def is_text(dtype: str) -> bool:
    return _base_name(dtype) in TEXT_TYPES

def is_blob(dtype: str) -> bool:
    return _base_name(dtype) in BLOB_TYPES


def column_type_from_sql(dtype: str) -> ColumnType:
    """Fold a SQL type name onto its column domain.

    Names that match none of the known tables follow SQLite's affinity
    rules: anything containing INT is an integer, CHAR/CLOB/TEXT is text,
    REAL/FLOA/DOUB is a float and an empty name or BLOB is a blob.
    """
    if is_integer(dtype):
        return ColumnType.INTEGER
    if is_float(dtype):
        return ColumnType.FLOAT
    if is_text(dtype):
        return ColumnType.TEXT
    if is_blob(dtype):
        return ColumnType.BLOB

    d = dtype.upper()
    if 'INT' in d:
        return ColumnType.INTEGER
    if 'CHAR' in d or 'CLOB' in d or 'TEXT' in d:
        return ColumnType.TEXT
    if not d.strip() or 'BLOB' in d:
        return ColumnType.BLOB
    if 'REAL' in d or 'FLOA' in d or 'DOUB' in d:
        return ColumnType.FLOAT
    raise ValueError(f"Unknown column type: {dtype!r}")
