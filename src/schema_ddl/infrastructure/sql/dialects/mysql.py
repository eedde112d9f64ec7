"""
MySQL-specific SQL dialect rules.

MySQL quotes with backticks, declares indexes inline in CREATE TABLE, merges
column clauses into a single ALTER TABLE and redefines changed columns with
CHANGE. Backslashes are escape characters inside string literals.
"""

from schema_ddl.infrastructure.schema.core import ColumnType
from schema_ddl.infrastructure.sql.core.identifier import KeywordList
from schema_ddl.infrastructure.sql.keywords import MYSQL_KEYWORDS

from .base import REDEFINE, Dialect

# MySQL length limits for the TEXT and BLOB families
LENGTH_LIMIT_TINY = 255
LENGTH_LIMIT_SMALL = 65535
LENGTH_LIMIT_MEDIUM = 16777215

MYSQL = Dialect(
    name="mysql",
    quote_char="`",
    keywords=KeywordList("mysql", MYSQL_KEYWORDS),
    type_keywords={
        ColumnType.SMALLINT: "SMALLINT",
        ColumnType.INTEGER: "INT",
        ColumnType.BIGINT: "BIGINT",
        ColumnType.FLOAT: "DOUBLE PRECISION",
        ColumnType.TEXT: "LONGTEXT",
        ColumnType.BLOB: "LONGBLOB",
        ColumnType.JSON: "JSON",
        ColumnType.BOOLEAN: "TINYINT(1)",
        ColumnType.DATE: "DATE",
        ColumnType.DATETIME: "DATETIME",
        ColumnType.DATETIMETZ: "DATETIME",
        ColumnType.TIME: "TIME",
    },
    supports_inline_index_declaration=True,
    supports_inline_column_comments=True,
    supports_column_charset=True,
    supports_unsigned=True,
    supports_table_options=True,
    index_flags=frozenset({"fulltext", "spatial"}),
    combined_alter_table=True,
    escape_backslash_in_literals=True,
    column_alteration=REDEFINE,
    default_string_length=255,
    text_keywords_by_length=(
        (LENGTH_LIMIT_TINY, "TINYTEXT"),
        (LENGTH_LIMIT_SMALL, "TEXT"),
        (LENGTH_LIMIT_MEDIUM, "MEDIUMTEXT"),
    ),
    blob_keywords_by_length=(
        (LENGTH_LIMIT_TINY, "TINYBLOB"),
        (LENGTH_LIMIT_SMALL, "BLOB"),
        (LENGTH_LIMIT_MEDIUM, "MEDIUMBLOB"),
    ),
    autoincrement_suffix="AUTO_INCREMENT",
    boolean_literals=("1", "0"),
    unbounded_limit="18446744073709551615",
    rename_column_clause="CHANGE {old} {declaration}",
    change_column_clause="CHANGE {old} {declaration}",
    drop_index_sql="DROP INDEX {index} ON {table}",
    schema_qualified_index_names=False,
    rename_index_sql="ALTER TABLE {table} RENAME INDEX {old} TO {new}",
    drop_foreign_key_sql="ALTER TABLE {table} DROP FOREIGN KEY {name}",
    drop_unique_constraint_sql="DROP INDEX {name} ON {table}",
    drop_primary_key_sql="ALTER TABLE {table} DROP PRIMARY KEY",
    table_comment_option="COMMENT = {comment}",
    type_aliases={
        "tinyint": ColumnType.BOOLEAN,
        "smallint": ColumnType.SMALLINT,
        "mediumint": ColumnType.INTEGER,
        "int": ColumnType.INTEGER,
        "integer": ColumnType.INTEGER,
        "bigint": ColumnType.BIGINT,
        "decimal": ColumnType.DECIMAL,
        "numeric": ColumnType.DECIMAL,
        "real": ColumnType.FLOAT,
        "float": ColumnType.FLOAT,
        "double": ColumnType.FLOAT,
        "double precision": ColumnType.FLOAT,
        "char": ColumnType.STRING,
        "varchar": ColumnType.STRING,
        "string": ColumnType.STRING,
        "tinytext": ColumnType.TEXT,
        "text": ColumnType.TEXT,
        "mediumtext": ColumnType.TEXT,
        "longtext": ColumnType.TEXT,
        "binary": ColumnType.BINARY,
        "varbinary": ColumnType.BINARY,
        "tinyblob": ColumnType.BLOB,
        "blob": ColumnType.BLOB,
        "mediumblob": ColumnType.BLOB,
        "longblob": ColumnType.BLOB,
        "date": ColumnType.DATE,
        "datetime": ColumnType.DATETIME,
        "timestamp": ColumnType.DATETIME,
        "time": ColumnType.TIME,
        "year": ColumnType.DATE,
        "json": ColumnType.JSON,
    },
)

__all__ = ["MYSQL"]
