"""Numeric value type."""

from __future__ import annotations

from typing import Any, Optional

from ..core import ValueType
from ..serializers import format_number, parse_number


class NumberType(ValueType):
    """``NumberInput``: a bare numeric literal.

    Serialization never fails: anything without a numeric reading becomes
    ``0``.  Only ``validate`` reports such values.

    Non-finite readings (``"Infinity"``, ``"1e999"``) are not numbers here and
    fail validation.
    """

    type_name = "NumberInput"
    display_name = "Number Input"
    expects = "a number"

    def default_value(self) -> int:
        return 0

    def serialize(self, value: Any) -> str:
        number = parse_number(value)
        return "0" if number is None else format_number(number)

    def validate(self, value: Any) -> Optional[str]:
        if parse_number(value) is None:
            return "Value must be a number"
        return None
