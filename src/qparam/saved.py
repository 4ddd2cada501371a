"""Saved queries and the positional value list that travels with them.

Exports
-------
SavedQuery
    A template plus its positional values, as stored by the persistence layer.

sync_values
    Resize a stored value list to match a freshly parsed template.

migrate_saved_queries
    Read a ``{guid: …}`` map in either the current or the legacy format.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .compiler import QueryCompiler
from .core import ParseResult, QParamError, Value


class SavedQueryError(QParamError):
    """Raised when stored query data has an unexpected shape."""


@dataclass
class SavedQuery:
    """A template with the values the user last entered for it.

    Attributes:
        query:        Template text with placeholder syntax.
        values:       Positional values, indexed by placeholder ordinal.
        name:         Optional display name.
        blueprint_id: Stable id of the blueprint this query was provisioned
                      from, if any.
    """

    query: str
    values: List[Value] = field(default_factory=list)
    name: Optional[str] = None
    blueprint_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"query": self.query, "values": copy.deepcopy(self.values)}
        if self.name is not None:
            data["name"] = self.name
        if self.blueprint_id is not None:
            data["blueprintId"] = self.blueprint_id
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SavedQuery:
        query = data.get("query")
        if not isinstance(query, str):
            raise SavedQueryError("Saved query requires a string 'query' field")
        values = data.get("values", [])
        if not isinstance(values, list):
            raise SavedQueryError("Saved query 'values' must be a list")
        return cls(
            query=query,
            values=copy.deepcopy(values),
            name=data.get("name"),
            blueprint_id=data.get("blueprintId"),
        )


def sync_values(
        values: Sequence[Value],
        parsed: ParseResult,
        compiler: Optional[QueryCompiler] = None,
) -> List[Value]:
    """Grow or shrink *values* to one entry per placeholder of *parsed*.

    Existing entries keep their position.  New slots get the placeholder's
    default when *compiler* is given, else ``""``.
    """
    count = len(parsed.placeholders)
    synced: List[Value] = list(values[:count])
    for placeholder in parsed.placeholders[len(synced):]:
        synced.append(compiler.default_for(placeholder) if compiler is not None else "")
    return synced


def migrate_saved_queries(data: Mapping[str, Any]) -> Dict[str, SavedQuery]:
    """Load a guid → query map, upgrading legacy bare-string entries.

    ::

        migrate_saved_queries({"a1": "form_type = {Form:FormTypes:8-K}"})
        # → {"a1": SavedQuery(query="form_type = …", values=[])}
    """
    migrated: Dict[str, SavedQuery] = {}
    for guid, entry in data.items():
        if isinstance(entry, str):
            migrated[guid] = SavedQuery(query=entry)
        elif isinstance(entry, Mapping):
            migrated[guid] = SavedQuery.from_dict(entry)
        else:
            raise SavedQueryError(
                f"Saved query {guid!r} must be a string or a mapping, got {type(entry).__name__}"
            )
    return migrated
