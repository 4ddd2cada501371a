"""Multi-value (tags) value type."""

from __future__ import annotations

from typing import Any, List, Optional

from ..core import ValueType
from ..serializers import quote_text, split_tags


class TagsType(ValueType):
    """``Tags``: a list of strings, or one comma-separated string.

    Each tag is quoted on its own and the results are joined with a bare
    comma: ``["A", "B"]`` → ``'A','B'``.  No tags → ``''``.
    """

    type_name = "Tags"
    display_name = "Tags"
    expects = "a list or comma-separated string of tags"

    def default_value(self) -> List[str]:
        return []

    def serialize(self, value: Any) -> str:
        tags = split_tags(value) or []
        if not tags:
            return "''"
        return ",".join(quote_text(tag) for tag in tags)

    def validate(self, value: Any) -> Optional[str]:
        if split_tags(value) is None:
            return "Value must be a list or a comma-separated string"
        return None
