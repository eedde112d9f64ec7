"""
SQLite-specific SQL dialect rules.

SQLite declares foreign keys inside CREATE TABLE and cannot add or drop them
afterwards. ALTER TABLE is limited to adding, dropping and renaming columns,
so changed columns and named constraints are not alterable.
"""

from schema_ddl.infrastructure.schema.core import ColumnType
from schema_ddl.infrastructure.sql.core.identifier import KeywordList
from schema_ddl.infrastructure.sql.keywords import SQLITE_KEYWORDS

from .base import Dialect

SQLITE = Dialect(
    name="sqlite",
    quote_char='"',
    keywords=KeywordList("sqlite", SQLITE_KEYWORDS),
    type_keywords={
        ColumnType.SMALLINT: "SMALLINT",
        ColumnType.INTEGER: "INTEGER",
        ColumnType.BIGINT: "BIGINT",
        ColumnType.FLOAT: "DOUBLE PRECISION",
        ColumnType.TEXT: "CLOB",
        ColumnType.BLOB: "BLOB",
        ColumnType.BOOLEAN: "BOOLEAN",
        ColumnType.DATE: "DATE",
        ColumnType.DATETIME: "DATETIME",
        ColumnType.DATETIMETZ: "DATETIME",
        ColumnType.TIME: "TIME",
    },
    supports_partial_indexes=True,
    supports_foreign_key_constraints=False,
    inline_foreign_keys=True,
    column_alteration=None,
    binary_keywords=("BLOB", "BLOB"),
    binary_has_length=False,
    inline_autoincrement_primary_key="INTEGER PRIMARY KEY AUTOINCREMENT",
    boolean_literals=("1", "0"),
    unbounded_limit="-1",
    truncate_table_sql="DELETE FROM {table}",
    add_column_clause="ADD COLUMN {declaration}",
    drop_column_clause="DROP COLUMN {column}",
    drop_foreign_key_sql=None,
    add_unique_constraint_sql=None,
    drop_unique_constraint_sql=None,
    add_primary_key_sql=None,
    type_aliases={
        "boolean": ColumnType.BOOLEAN,
        "tinyint": ColumnType.BOOLEAN,
        "smallint": ColumnType.SMALLINT,
        "mediumint": ColumnType.INTEGER,
        "int": ColumnType.INTEGER,
        "integer": ColumnType.INTEGER,
        "serial": ColumnType.INTEGER,
        "bigint": ColumnType.BIGINT,
        "bigserial": ColumnType.BIGINT,
        "numeric": ColumnType.DECIMAL,
        "decimal": ColumnType.DECIMAL,
        "float": ColumnType.FLOAT,
        "double": ColumnType.FLOAT,
        "double precision": ColumnType.FLOAT,
        "real": ColumnType.FLOAT,
        "char": ColumnType.STRING,
        "varchar": ColumnType.STRING,
        "nvarchar": ColumnType.STRING,
        "text": ColumnType.TEXT,
        "clob": ColumnType.TEXT,
        "longtext": ColumnType.TEXT,
        "blob": ColumnType.BLOB,
        "date": ColumnType.DATE,
        "datetime": ColumnType.DATETIME,
        "timestamp": ColumnType.DATETIME,
        "time": ColumnType.TIME,
    },
)

__all__ = ["SQLITE"]
