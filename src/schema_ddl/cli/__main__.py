"""
Unified CLI entry point for SchemaDDL.

Usage:
    python -m schema_ddl.cli <command> [options]

Available commands:
    create    - Print CREATE statements for a YAML table definition
    alter     - Print ALTER statements for a YAML table diff
    drop      - Print a DROP TABLE statement
    truncate  - Print a TRUNCATE statement
    keyword   - Tell whether a word is reserved by a dialect
    dialects  - List supported dialects

Examples:
    python -m schema_ddl.cli create schema/users.yml --dialect mysql
    python -m schema_ddl.cli alter schema/users_v2.yml
    python -m schema_ddl.cli keyword select --dialect sqlite
"""

import argparse
import sys
from typing import List, Optional

from schema_ddl.infrastructure.schema import load_table, load_table_diff
from schema_ddl.infrastructure.sql.dialects import list_dialects
from schema_ddl.infrastructure.sql.exceptions import SchemaDDLError
from schema_ddl.infrastructure.sql.platform import get_platform
from schema_ddl.utils.logging import bind_context


def _print_statements(statements: List[str]) -> None:
    for statement in statements:
        print(f"{statement};")


def _add_dialect_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dialect",
        "-d",
        default=None,
        help="Target SQL dialect (default: SCHEMA_DDL_DEFAULT_DIALECT or postgresql)",
    )


def _run(args: argparse.Namespace) -> int:
    if args.command == "dialects":
        for name in list_dialects():
            print(name)
        return 0

    platform = get_platform(args.dialect)
    logger = bind_context(command=args.command, platform=platform.name)

    if args.command == "create":
        statements = platform.get_create_table_sql(load_table(args.path))
    elif args.command == "alter":
        statements = platform.get_alter_table_sql(load_table_diff(args.path))
    elif args.command == "drop":
        statements = [platform.get_drop_table_sql(args.table)]
    elif args.command == "truncate":
        statements = [platform.get_truncate_table_sql(args.table)]
    elif args.command == "keyword":
        reserved = platform.is_reserved_keyword(args.word)
        print(
            f"{args.word} is {'a reserved' if reserved else 'not a reserved'} "
            f"keyword in {platform.name}"
        )
        return 0
    else:
        return 1

    _print_statements(statements)
    logger.info("statements_written", count=len(statements))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="schema_ddl.cli",
        description="SchemaDDL CLI - generate dialect-specific DDL from YAML schemas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m schema_ddl.cli create schema/users.yml --dialect mysql
  python -m schema_ddl.cli alter schema/users_v2.yml
  python -m schema_ddl.cli drop '"order"' --dialect sqlite
        """,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    create_parser = subparsers.add_parser(
        "create",
        help="Print CREATE statements for a table definition",
        description="Generate CREATE TABLE, index and foreign key statements",
    )
    create_parser.add_argument("path", help="YAML table definition")
    _add_dialect_argument(create_parser)

    alter_parser = subparsers.add_parser(
        "alter",
        help="Print ALTER statements for a table diff",
        description="Generate the ordered statements applying a table diff",
    )
    alter_parser.add_argument("path", help="YAML table diff")
    _add_dialect_argument(alter_parser)

    for command, verb in (("drop", "DROP TABLE"), ("truncate", "TRUNCATE")):
        table_parser = subparsers.add_parser(command, help=f"Print a {verb} statement")
        table_parser.add_argument("table", help="Table name, optionally schema-qualified")
        _add_dialect_argument(table_parser)

    keyword_parser = subparsers.add_parser(
        "keyword", help="Tell whether a word is a reserved keyword"
    )
    keyword_parser.add_argument("word", help="Word to look up")
    _add_dialect_argument(keyword_parser)

    subparsers.add_parser("dialects", help="List supported dialects")

    args = parser.parse_args(argv)

    try:
        return _run(args)
    except SchemaDDLError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
