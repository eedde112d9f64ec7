"""Name handling shared by every schema object.

A raw name such as ``"schema"."table"`` or ``select`` is parsed once into an
Identifier that remembers whether the user delimited it explicitly. Quoting is
decided at SQL generation time against a concrete platform, because whether a
bare word needs quoting depends on that platform's reserved keywords.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:  # pragma: no cover - imported only for typing
    from schema_ddl.infrastructure.sql.platform import Platform

_OPENING_DELIMITERS = ("`", '"', "[")
_DELIMITER_CHARS = ("`", '"', "[", "]")
SEPARATOR = "."

DEFAULT_MAX_IDENTIFIER_LENGTH = 63


def _trim_quotes(name: str) -> str:
    for char in _DELIMITER_CHARS:
        name = name.replace(char, "")
    return name


@dataclass(frozen=True)
class Identifier:
    """A parsed, possibly schema-qualified object name."""

    name: str
    quoted: bool = False

    @classmethod
    def parse(cls, raw: str) -> "Identifier":
        """
        Parse a raw user-supplied name.

        Examples:
            >>> Identifier.parse('`quoted`')
            Identifier(name='quoted', quoted=True)
            >>> Identifier.parse("myschema.mytable").namespace
            'myschema'
        """
        if raw[:1] in _OPENING_DELIMITERS:
            return cls(_trim_quotes(raw), quoted=True)
        return cls(raw, quoted=False)

    @property
    def namespace(self) -> Optional[str]:
        if SEPARATOR in self.name:
            return self.name.split(SEPARATOR, 1)[0]
        return None

    @property
    def short_name(self) -> str:
        if SEPARATOR in self.name:
            return self.name.split(SEPARATOR, 1)[1]
        return self.name

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.name.lower()

    def get_quoted_name(self, platform: "Platform") -> str:
        """
        Render the name for the given platform.

        Each part is quoted when the identifier was explicitly delimited, when
        it is a reserved keyword, or when it contains characters the dialect
        does not accept in bare identifiers.
        """
        parts = []
        for part in self.name.split(SEPARATOR):
            if self.quoted or platform.should_quote(part):
                parts.append(platform.quote_single_identifier(part))
            else:
                parts.append(part)
        return SEPARATOR.join(parts)


class NamedAsset:
    """Mixin giving schema dataclasses a parsed ``name`` attribute."""

    name: Optional[str]

    @property
    def identifier(self) -> Identifier:
        if not self.name:
            raise ValueError(f"{type(self).__name__} has no name")
        return Identifier.parse(self.name)

    def get_name(self) -> str:
        """Unquoted name, including the namespace if any."""
        return self.identifier.name

    def get_short_name(self) -> str:
        return self.identifier.short_name

    def get_namespace(self) -> Optional[str]:
        return self.identifier.namespace

    def is_quoted(self) -> bool:
        return self.identifier.quoted

    def get_quoted_name(self, platform: "Platform") -> str:
        return self.identifier.get_quoted_name(platform)


def quote_names(names: Iterable[str], platform: "Platform") -> list:
    """Quote a list of raw names (e.g. index columns) for the platform."""
    return [Identifier.parse(name).get_quoted_name(platform) for name in names]


def generate_identifier_name(
    names: Iterable[str],
    prefix: str = "",
    max_size: int = DEFAULT_MAX_IDENTIFIER_LENGTH,
) -> str:
    """
    Generate a deterministic identifier from a list of names.

    The name is the prefix followed by the hex CRC32 of every input name,
    upper-cased and cut to max_size.

    Examples:
        >>> generate_identifier_name(["test", "foo", "bar"], "uniq")
        'UNIQ_D87F7E0C8C73652176FF8CAA'
    """
    hashed = "".join(format(zlib.crc32(name.encode("utf-8")), "x") for name in names)
    return f"{prefix}_{hashed}".upper()[:max_size]


__all__ = [
    "Identifier",
    "NamedAsset",
    "quote_names",
    "generate_identifier_name",
    "DEFAULT_MAX_IDENTIFIER_LENGTH",
]
