"""Statement builders used by the Platform engine."""

from .alter_table import AlterTableBuilder
from .create_table import CreateTableBuilder

__all__ = ["AlterTableBuilder", "CreateTableBuilder"]
