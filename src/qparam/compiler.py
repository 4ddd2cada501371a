"""Compilation — substituting positional values into a parsed template.

Exports
-------
QueryCompiler
    Produces the executable query string from a template and a value list.

Processing order
----------------
Placeholders are spliced right to left (descending ``start``), so each
replacement only shifts text that has already been processed and the
offsets of the remaining placeholders stay valid.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from .core import CompileResult, ParseResult, Placeholder, TypeRegistry, Value
from .parser import QueryParser, unescape_literals

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


class QueryCompiler:
    """Compile templates using *parser* for structure and *registry* for values.

    Configuration
    -------------
    validate
        ``True`` (default) → every value is checked by its type's validator
        and failures leave the placeholder untouched.
        ``False`` → values are serialized unchecked (a non-numeric number
        silently becomes ``0``).
    """

    def __init__(
            self,
            parser: QueryParser,
            registry: TypeRegistry,
            *,
            validate: bool = True,
    ) -> None:
        self._parser = parser
        self._registry = registry
        self._validate = validate

    # -- public -------------------------------------------------------------

    def compile(self, template: str, values: Optional[Sequence[Any]] = None) -> CompileResult:
        values = list(values) if values is not None else []
        parsed = self._parser.parse(template)

        if not parsed.is_valid:
            return CompileResult(text=template, errors=parsed.messages)

        if not parsed.placeholders:
            return CompileResult(text=unescape_literals(template))

        errors: List[str] = []
        text = template

        for placeholder in sorted(parsed.placeholders, key=lambda p: p.start, reverse=True):
            raw = values[placeholder.ordinal] if placeholder.ordinal < len(values) else None
            value = raw if not _is_blank(raw) else self.default_for(placeholder)

            message = self._check(placeholder, value)
            if message is not None:
                errors.append(message)
                continue

            rendered = self._registry.serialize(placeholder.type_name, value)
            text = text[:placeholder.start] + rendered + text[placeholder.end:]

        logger.debug(
            "Compiled %d placeholder(s) with %d error(s)",
            len(parsed.placeholders), len(errors),
        )
        return CompileResult(text=unescape_literals(text), errors=errors)

    def get_default_values(self, parsed: ParseResult) -> List[Value]:
        """Initial value list for *parsed*, one entry per placeholder."""
        return [self.default_for(p) for p in parsed.placeholders]

    def default_for(self, placeholder: Placeholder) -> Value:
        """Template default if present, otherwise the type's default."""
        if placeholder.default_value != "":
            return placeholder.default_value
        return self._registry.default_value(placeholder.type_name)

    # -- internal -----------------------------------------------------------

    def _check(self, placeholder: Placeholder, value: Any) -> Optional[str]:
        if not self._validate:
            return None
        if self._registry.validate(placeholder.type_name, value) is None:
            return None
        value_type = self._registry.get(placeholder.type_name)
        expects = value_type.expects if value_type is not None else "a valid value"
        return f'Parameter "{placeholder.label}" expects {expects}, got: {_describe(value)}'


def _describe(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)
