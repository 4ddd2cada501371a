"""Built-in value serializers shared by the value types.

This module defines the conversion helpers used by the built-in
``ValueType`` implementations in ``descriptors`` and by the registry's
free-text fallback.

Exports
-------
quote_text
    Wrap a value in single quotes, doubling embedded quotes (SQL style).

parse_number
    Read a leading decimal literal from a value; ``None`` when there is none.

format_number
    Render a number the way it should appear in a query (``50``, ``2.5``).

split_tags
    Normalise a list or a comma-separated string into a list of tags.
"""

from __future__ import annotations

import math
from typing import Any, List, Optional, Union

import regex

_LEADING_NUMBER = regex.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")

Number = Union[int, float]


def quote_text(value: Any) -> str:
    """``O'Brien`` → ``'O''Brien'``.  ``None`` renders as ``''``."""
    if value is None:
        text = ""
    elif isinstance(value, (list, tuple)):
        text = ",".join(str(v) for v in value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        number = parse_number(value)
        text = format_number(number) if number is not None else str(value)
    else:
        text = str(value)
    return "'" + text.replace("'", "''") + "'"


def parse_number(value: Any) -> Optional[Number]:
    """Return the numeric reading of *value*, or ``None`` if it has none.

    Strings are read by their leading literal, so ``" 12px"`` gives ``12.0``.
    Booleans, containers and non-finite floats are not numbers.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match is None:
            return None
        number = float(match.group(1))
        return number if math.isfinite(number) else None
    return None


def format_number(number: Number) -> str:
    """Integral values drop the fractional part: ``50.0`` → ``50``."""
    if isinstance(number, int):
        return str(number)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def split_tags(value: Any) -> Optional[List[str]]:
    """``"a, b,,c"`` → ``["a", "b", "c"]``; lists are kept element by element.

    Returns ``None`` for values that are neither a list nor a string.
    """
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    return None
