"""Free-text and single-choice value types."""

from __future__ import annotations

from typing import Any, Sequence, Tuple

from ..core import ValueType
from ..serializers import quote_text

# Common SEC filing form codes offered by the form-type picker.
FORM_TYPE_CODES: Tuple[str, ...] = (
    "10-K", "10-Q", "8-K", "4", "13F-HR", "S-1", "DEF 14A",
    "10-K/A", "10-Q/A", "8-K/A", "13D", "13G", "SC 13G", "SC 13D",
    "3", "5", "6-K", "20-F", "EFFECT", "NT 10-K", "NT 10-Q",
)


class TextType(ValueType):
    """``StringInput``: quoted free text, the fallback for untyped placeholders.

    ::

        TextType().serialize("O'Brien")   # "'O''Brien'"
    """

    type_name = "StringInput"
    display_name = "Text Input"
    expects = "text"

    def default_value(self) -> str:
        return ""

    def serialize(self, value: Any) -> str:
        return quote_text(value)


class ChoiceType(TextType):
    """A single value picked from ``options``; serialized like free text.

    Membership in ``options`` is a display concern and is not enforced, so a
    template default such as ``{Form:FormTypes:ARS}`` still compiles.
    """

    expects = "a single choice"

    def __init__(
            self,
            type_name: str = "FormTypes",
            display_name: str = "Form Type",
            options: Sequence[str] = FORM_TYPE_CODES,
    ) -> None:
        self.type_name = type_name
        self.display_name = display_name
        self.options: Tuple[str, ...] = tuple(options)
