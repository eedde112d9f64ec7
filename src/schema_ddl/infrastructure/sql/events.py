"""Schema generation listeners.

Listeners observe CREATE TABLE and ALTER TABLE generation and may append extra
SQL after the statements of the operation that triggered them. They cannot
veto or rewrite generated SQL, except for DROP TABLE: a DROP_TABLE listener
may replace the statement with set_sql().

Hook Pattern:
  - Callbacks are registered per event on a ListenerRegistry
  - Callbacks run synchronously, in registration order
  - Exceptions raised by a callback propagate to the caller

Example Usage:
    registry = ListenerRegistry()
    registry.add_listener(
        SchemaEvent.CREATE_TABLE,
        lambda args: args.add_sql(f"GRANT SELECT ON {args.table_name} TO reporting"),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional, Union

from schema_ddl.infrastructure.sql.exceptions import InvalidArgumentError

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from schema_ddl.infrastructure.schema.core import Column
    from schema_ddl.infrastructure.schema.diff import ColumnDiff, TableDiff
    from schema_ddl.infrastructure.schema.table import Table


class SchemaEvent(str, Enum):
    """Subscription points offered by the platform engine."""

    CREATE_TABLE = "create_table"
    CREATE_TABLE_COLUMN = "create_table_column"
    ALTER_TABLE = "alter_table"
    ALTER_TABLE_ADD_COLUMN = "alter_table_add_column"
    ALTER_TABLE_REMOVE_COLUMN = "alter_table_remove_column"
    ALTER_TABLE_CHANGE_COLUMN = "alter_table_change_column"
    ALTER_TABLE_RENAME_COLUMN = "alter_table_rename_column"
    DROP_TABLE = "drop_table"


@dataclass
class SchemaEventArgs:
    """
    Payload handed to every listener.

    Attributes:
        event: The event being dispatched
        platform_name: Name of the dialect generating SQL
        table_name: Quoted name of the affected table
        table: Table being created (CREATE events)
        table_diff: Diff being applied (ALTER events)
        column: Affected column, if any
        column_diff: Column change (ALTER_TABLE_CHANGE_COLUMN)
        old_column_name: Previous column name (ALTER_TABLE_RENAME_COLUMN)
        replacement_sql: Statement replacing the default one (DROP_TABLE)
    """

    event: SchemaEvent
    platform_name: str
    table_name: str
    table: Optional["Table"] = None
    table_diff: Optional["TableDiff"] = None
    column: Optional["Column"] = None
    column_diff: Optional["ColumnDiff"] = None
    old_column_name: Optional[str] = None
    sql: List[str] = field(default_factory=list)
    replacement_sql: Optional[str] = None

    def add_sql(self, *statements: str) -> "SchemaEventArgs":
        if self.event is SchemaEvent.DROP_TABLE:
            raise InvalidArgumentError("DROP_TABLE listeners replace the statement with set_sql()")
        self.sql.extend(statements)
        return self

    def set_sql(self, statement: str) -> "SchemaEventArgs":
        """Replace the generated DROP TABLE statement."""
        if self.event is not SchemaEvent.DROP_TABLE:
            raise InvalidArgumentError(f"set_sql is only available for {SchemaEvent.DROP_TABLE.value}")
        self.replacement_sql = statement
        return self


Listener = Callable[[SchemaEventArgs], None]


class ListenerRegistry:
    """Ordered listener lists keyed by event."""

    def __init__(self) -> None:
        self._listeners: Dict[SchemaEvent, List[Listener]] = {}

    def add_listener(
        self, events: Union[SchemaEvent, Iterable[SchemaEvent]], listener: Listener
    ) -> None:
        for event in _as_events(events):
            self._listeners.setdefault(event, []).append(listener)

    def remove_listener(
        self, events: Union[SchemaEvent, Iterable[SchemaEvent]], listener: Listener
    ) -> None:
        for event in _as_events(events):
            callbacks = self._listeners.get(event, [])
            if listener in callbacks:
                callbacks.remove(listener)

    def has_listeners(self, event: SchemaEvent) -> bool:
        return bool(self._listeners.get(event))

    def dispatch(self, args: SchemaEventArgs) -> List[str]:
        """Run every listener of ``args.event`` and return the SQL they added."""
        for listener in list(self._listeners.get(args.event, [])):
            listener(args)
        return list(args.sql)


def _as_events(events: Union[SchemaEvent, Iterable[SchemaEvent]]) -> List[SchemaEvent]:
    if isinstance(events, SchemaEvent):
        return [events]
    return list(events)


__all__ = ["SchemaEvent", "SchemaEventArgs", "ListenerRegistry", "Listener"]
