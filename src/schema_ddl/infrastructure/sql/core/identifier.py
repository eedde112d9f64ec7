"""
SQL identifier handling utilities.

Provides functions for quoting identifiers and string literals, plus the
case-insensitive reserved keyword lookup every dialect carries.
"""

import re
from typing import Iterable, Pattern

IDENTIFIER_SEPARATOR = "."

# Bare identifiers every supported dialect accepts without quoting
DEFAULT_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def quote_single_identifier(name: str, quote_char: str = '"') -> str:
    """
    Quote a single identifier part.

    Args:
        name: The identifier part to quote (must not be schema-qualified)
        quote_char: The dialect's identifier quote character

    Returns:
        Identifier wrapped in quote characters, embedded quotes doubled

    Examples:
        >>> quote_single_identifier("user")
        '"user"'
        >>> quote_single_identifier('column"name')
        '"column""name"'
        >>> quote_single_identifier("table", quote_char="`")
        '`table`'
    """
    escaped = name.replace(quote_char, quote_char * 2)
    return f"{quote_char}{escaped}{quote_char}"


def quote_identifier(name: str, quote_char: str = '"') -> str:
    """
    Quote a possibly schema-qualified identifier.

    Each dot-separated part is quoted independently; the separator itself is
    never escaped.

    Examples:
        >>> quote_identifier("test.test")
        '"test"."test"'
        >>> quote_identifier("年金计划号")
        '"年金计划号"'
    """
    return IDENTIFIER_SEPARATOR.join(
        quote_single_identifier(part, quote_char)
        for part in name.split(IDENTIFIER_SEPARATOR)
    )


def unquote_identifier(quoted: str, quote_char: str = '"') -> str:
    """
    Reverse quote_single_identifier.

    Identifiers that are not wrapped in the quote character are returned
    unchanged.

    Examples:
        >>> unquote_identifier('"column""name"')
        'column"name'
    """
    if len(quoted) >= 2 and quoted[0] == quote_char and quoted[-1] == quote_char:
        return quoted[1:-1].replace(quote_char * 2, quote_char)
    return quoted


def quote_string_literal(value: str, escape_backslash: bool = False) -> str:
    """
    Quote a string literal for inclusion in SQL text.

    MySQL treats backslash as an escape character inside literals, so its
    dialect passes escape_backslash=True.

    Examples:
        >>> quote_string_literal("It's a quote")
        "'It''s a quote'"
    """
    if escape_backslash:
        value = value.replace("\\", "\\\\")
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def requires_quoting(part: str, pattern: Pattern[str] = DEFAULT_IDENTIFIER_PATTERN) -> bool:
    """Return True when an identifier part contains characters that need quoting."""
    return pattern.fullmatch(part) is None


class KeywordList:
    """
    Case-insensitive reserved keyword lookup for a dialect.

    Example:
        >>> keywords = KeywordList("postgresql", ["SELECT", "TABLE"])
        >>> keywords.is_keyword("table")
        True
    """

    def __init__(self, name: str, words: Iterable[str]):
        self.name = name
        self._keywords = frozenset(word.upper() for word in words)

    def is_keyword(self, word: str) -> bool:
        """Check whether the given word is reserved."""
        return word.upper() in self._keywords

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_keyword(word)

    def __len__(self) -> int:
        return len(self._keywords)

    def __repr__(self) -> str:
        return f"KeywordList(name={self.name!r}, size={len(self._keywords)})"
