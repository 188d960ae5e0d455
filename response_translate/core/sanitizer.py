"""SQL identifier validation.

Table lookups interpolate table and column names into SQL text, so those
names must never come from anything but a strict allow-pattern. Values are
always bound as parameters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from response_translate.core.exceptions import IdentifierValidationError

# Plain identifier: letters, digits, underscore; may not start with a digit
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Table name: identifier with optional dotted qualifiers (schema.table)
_TABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def is_safe_identifier(name: object) -> bool:
    return isinstance(name, str) and _IDENTIFIER.fullmatch(name) is not None


def is_safe_table_name(name: object) -> bool:
    return isinstance(name, str) and _TABLE_NAME.fullmatch(name) is not None


@dataclass(frozen=True)
class TableLookup:
    """A validated ``(table, key_column, value_column)`` triple.

    Raises:
        IdentifierValidationError: If any part is empty or fails its pattern.
    """

    table: str
    key_column: str
    value_column: str

    def __post_init__(self) -> None:
        if not is_safe_table_name(self.table):
            raise IdentifierValidationError("table", self.table)
        if not is_safe_identifier(self.key_column):
            raise IdentifierValidationError("key column", self.key_column)
        if not is_safe_identifier(self.value_column):
            raise IdentifierValidationError("value column", self.value_column)

    @classmethod
    def checked(
        cls, table: object, key_column: object, value_column: object
    ) -> TableLookup | None:
        """Build a TableLookup, or return None if any identifier is unsafe."""
        try:
            return cls(table, key_column, value_column)  # type: ignore[arg-type]
        except IdentifierValidationError:
            return None
