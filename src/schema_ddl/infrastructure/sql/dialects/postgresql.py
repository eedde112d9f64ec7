"""
PostgreSQL-specific SQL dialect rules.

PostgreSQL alters columns one attribute at a time, supports partial indexes,
COMMENT ON statements, deferrable constraints and a native index rename.
"""

from schema_ddl.infrastructure.schema.core import ColumnType
from schema_ddl.infrastructure.sql.core.identifier import KeywordList
from schema_ddl.infrastructure.sql.keywords import POSTGRESQL_KEYWORDS

from .base import GRANULAR, Dialect

POSTGRESQL = Dialect(
    name="postgresql",
    quote_char='"',
    keywords=KeywordList("postgresql", POSTGRESQL_KEYWORDS),
    type_keywords={
        ColumnType.SMALLINT: "SMALLINT",
        ColumnType.INTEGER: "INT",
        ColumnType.BIGINT: "BIGINT",
        ColumnType.FLOAT: "DOUBLE PRECISION",
        ColumnType.TEXT: "TEXT",
        ColumnType.BLOB: "BYTEA",
        ColumnType.GUID: "UUID",
        ColumnType.JSON: "JSON",
        ColumnType.BOOLEAN: "BOOLEAN",
        ColumnType.DATE: "DATE",
        ColumnType.DATETIME: "TIMESTAMP(0) WITHOUT TIME ZONE",
        ColumnType.DATETIMETZ: "TIMESTAMP(0) WITH TIME ZONE",
        ColumnType.TIME: "TIME(0) WITHOUT TIME ZONE",
    },
    supports_partial_indexes=True,
    supports_comment_on_statement=True,
    supports_deferrable_constraints=True,
    column_alteration=GRANULAR,
    binary_keywords=("BYTEA", "BYTEA"),
    binary_has_length=False,
    autoincrement_keywords={
        ColumnType.SMALLINT: "SMALLSERIAL",
        ColumnType.INTEGER: "SERIAL",
        ColumnType.BIGINT: "BIGSERIAL",
    },
    boolean_literals=("true", "false"),
    current_time_sql="CURRENT_TIME",
    create_schema_sql="CREATE SCHEMA {name}",
    rename_index_sql="ALTER INDEX {old} RENAME TO {new}",
    drop_primary_key_sql="ALTER TABLE {table} DROP CONSTRAINT {constraint}",
    autoincrement_enable_statements=(
        "CREATE SEQUENCE {sequence}",
        "SELECT setval('{sequence}', (SELECT MAX({column}) FROM {table}))",
    ),
    autoincrement_enable_clause="ALTER {column} SET DEFAULT nextval('{sequence}')",
    autoincrement_disable_clause="ALTER {column} DROP DEFAULT",
    table_comment_sql="COMMENT ON TABLE {table} IS {comment}",
    type_aliases={
        "smallint": ColumnType.SMALLINT,
        "int2": ColumnType.SMALLINT,
        "smallserial": ColumnType.SMALLINT,
        "integer": ColumnType.INTEGER,
        "int": ColumnType.INTEGER,
        "int4": ColumnType.INTEGER,
        "serial": ColumnType.INTEGER,
        "serial4": ColumnType.INTEGER,
        "bigint": ColumnType.BIGINT,
        "int8": ColumnType.BIGINT,
        "bigserial": ColumnType.BIGINT,
        "serial8": ColumnType.BIGINT,
        "numeric": ColumnType.DECIMAL,
        "decimal": ColumnType.DECIMAL,
        "money": ColumnType.DECIMAL,
        "real": ColumnType.FLOAT,
        "float": ColumnType.FLOAT,
        "float4": ColumnType.FLOAT,
        "float8": ColumnType.FLOAT,
        "double precision": ColumnType.FLOAT,
        "varchar": ColumnType.STRING,
        "character varying": ColumnType.STRING,
        "char": ColumnType.STRING,
        "bpchar": ColumnType.STRING,
        "interval": ColumnType.STRING,
        "text": ColumnType.TEXT,
        "tsvector": ColumnType.TEXT,
        "uuid": ColumnType.GUID,
        "bytea": ColumnType.BLOB,
        "bool": ColumnType.BOOLEAN,
        "boolean": ColumnType.BOOLEAN,
        "date": ColumnType.DATE,
        "timestamp": ColumnType.DATETIME,
        "datetime": ColumnType.DATETIME,
        "timestamptz": ColumnType.DATETIMETZ,
        "time": ColumnType.TIME,
        "timetz": ColumnType.TIME,
        "json": ColumnType.JSON,
        "jsonb": ColumnType.JSON,
    },
)

__all__ = ["POSTGRESQL"]
