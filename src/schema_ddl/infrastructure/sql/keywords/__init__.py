"""Reserved keyword lists, one module per dialect.

Each module exposes a single ``KEYWORDS`` frozenset of upper-case words. The
lists are loaded once at import time and wrapped in a KeywordList by the
dialect definitions.
"""

from .mysql import KEYWORDS as MYSQL_KEYWORDS
from .postgresql import KEYWORDS as POSTGRESQL_KEYWORDS
from .sqlite import KEYWORDS as SQLITE_KEYWORDS

__all__ = [
    "MYSQL_KEYWORDS",
    "POSTGRESQL_KEYWORDS",
    "SQLITE_KEYWORDS",
]
