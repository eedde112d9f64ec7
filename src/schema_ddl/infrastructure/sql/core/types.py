"""
Type declaration service.

Maps a semantic ColumnType plus declaration options (length, precision, scale,
fixed, unsigned, autoincrement) to the SQL type syntax of one dialect. The
service is stateless; every call re-derives the declaration from its inputs.
"""

from typing import Any, Mapping, Optional, Union

from schema_ddl.infrastructure.schema.core import INTEGER_TYPES, STRING_TYPES, ColumnType
from schema_ddl.infrastructure.sql.dialects.base import Dialect
from schema_ddl.infrastructure.sql.exceptions import UnsupportedOperationError

DEFAULT_DECIMAL_PRECISION = 10
DEFAULT_DECIMAL_SCALE = 0


class TypeDeclarations:
    """
    Render column type declarations for a dialect.

    Example:
        >>> from schema_ddl.infrastructure.sql.dialects import POSTGRESQL
        >>> TypeDeclarations(POSTGRESQL).declare("decimal", {"precision": 8, "scale": 2})
        'NUMERIC(8, 2)'
    """

    def __init__(self, dialect: Dialect):
        self.dialect = dialect

    def declare(
        self, kind: Union[ColumnType, str], options: Optional[Mapping[str, Any]] = None
    ) -> str:
        """
        Declare a column type.

        Args:
            kind: Semantic column type (enum member or its string value)
            options: Declaration options; missing keys take their defaults

        Returns:
            The dialect's type declaration, e.g. ``VARCHAR(255)``

        Raises:
            UnknownTypeError: If kind is not a known column type
            UnsupportedOperationError: If the dialect cannot declare the type
        """
        kind = ColumnType.coerce(kind)
        options = options or {}
        length = options.get("length")
        fixed = bool(options.get("fixed"))
        unsigned = bool(options.get("unsigned"))

        if kind in INTEGER_TYPES:
            return self.get_integer_declaration(
                kind, bool(options.get("autoincrement")), unsigned
            )
        if kind is ColumnType.DECIMAL:
            return self.get_decimal_declaration(
                options.get("precision"), options.get("scale"), unsigned
            )
        if kind is ColumnType.FLOAT:
            return self.get_float_declaration()
        if kind in STRING_TYPES:
            return self.get_string_declaration(length, fixed)
        if kind is ColumnType.BINARY:
            return self.get_binary_declaration(length, fixed)
        if kind is ColumnType.TEXT:
            return self.get_clob_declaration(length)
        if kind is ColumnType.BLOB:
            return self.get_blob_declaration(length)
        if kind is ColumnType.JSON:
            return self.get_json_declaration(length)
        if kind is ColumnType.GUID:
            return self.get_guid_declaration()
        return self.dialect.type_keywords[kind]

    def get_integer_declaration(
        self, kind: ColumnType, autoincrement: bool = False, unsigned: bool = False
    ) -> str:
        dialect = self.dialect
        if autoincrement:
            if kind in dialect.autoincrement_keywords:
                return dialect.autoincrement_keywords[kind]
            if dialect.inline_autoincrement_primary_key:
                return dialect.inline_autoincrement_primary_key

        declaration = dialect.type_keywords[kind]
        if unsigned and dialect.supports_unsigned:
            declaration += " UNSIGNED"
        if autoincrement and dialect.autoincrement_suffix:
            declaration += f" {dialect.autoincrement_suffix}"
        return declaration

    def get_decimal_declaration(
        self,
        precision: Optional[int] = None,
        scale: Optional[int] = None,
        unsigned: bool = False,
    ) -> str:
        """Decimals always carry an explicit precision and scale."""
        if precision is None:
            precision = DEFAULT_DECIMAL_PRECISION
        if scale is None:
            scale = DEFAULT_DECIMAL_SCALE
        declaration = f"NUMERIC({precision}, {scale})"
        if unsigned and self.dialect.supports_unsigned:
            declaration += " UNSIGNED"
        return declaration

    def get_float_declaration(self) -> str:
        # Precision and scale are deliberately not rendered
        return self.dialect.type_keywords[ColumnType.FLOAT]

    def get_string_declaration(self, length: Optional[int] = None, fixed: bool = False) -> str:
        fixed_keyword, variable_keyword = self.dialect.string_keywords
        keyword = fixed_keyword if fixed else variable_keyword
        length = length or self.dialect.default_string_length
        return f"{keyword}({length})" if length else keyword

    def get_binary_declaration(self, length: Optional[int] = None, fixed: bool = False) -> str:
        fixed_keyword, variable_keyword = self.dialect.binary_keywords
        keyword = fixed_keyword if fixed else variable_keyword
        if not self.dialect.binary_has_length:
            return keyword
        length = length or self.dialect.default_string_length
        return f"{keyword}({length})" if length else keyword

    def get_clob_declaration(self, length: Optional[int] = None) -> str:
        return self._tiered(ColumnType.TEXT, self.dialect.text_keywords_by_length, length)

    def get_blob_declaration(self, length: Optional[int] = None) -> str:
        return self._tiered(ColumnType.BLOB, self.dialect.blob_keywords_by_length, length)

    def get_json_declaration(self, length: Optional[int] = None) -> str:
        """JSON degrades to the large text declaration without a native type."""
        keyword = self.dialect.type_keywords.get(ColumnType.JSON)
        if keyword:
            return keyword
        return self.get_clob_declaration(length)

    def get_guid_declaration(self) -> str:
        keyword = self.dialect.type_keywords.get(ColumnType.GUID)
        if not keyword:
            raise UnsupportedOperationError(
                "guid type declaration",
                self.dialect.name,
                "The dialect has no native UUID type.",
            )
        return keyword

    def _tiered(self, kind: ColumnType, tiers, length: Optional[int]) -> str:
        if length:
            for limit, keyword in tiers:
                if length <= limit:
                    return keyword
        return self.dialect.type_keywords[kind]


__all__ = ["TypeDeclarations", "DEFAULT_DECIMAL_PRECISION", "DEFAULT_DECIMAL_SCALE"]
