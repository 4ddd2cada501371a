"""Placeholder parsing — everything that touches ``{…}`` syntax.

Exports
-------
QueryParser
    Extracts placeholders from a template and reports syntax errors.

unescape_literals
    Turns the ``\\{`` / ``\\}`` escapes back into literal braces.

Placeholder syntax
------------------
* ``{Label}``                    – free text, no default
* ``{Label::Default}``           – free text with a default
* ``{Label:TypeName:Default}``   – explicit value type

Everything after the second colon is the default, so ``{Site::https://x}``
keeps its URL intact.  ``\\{`` and ``\\}`` are literal braces and never
delimit a placeholder.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

import regex

from .core import ParseError, ParseResult, Placeholder, TypeRegistry

logger = logging.getLogger(__name__)

# One level only: the content may not contain a raw brace, and neither
# delimiter may be escaped.
PLACEHOLDER_PATTERN = regex.compile(r"(?<!\\)\{([^{}]*?)(?<!\\)\}")


# ─────────────────────────────────────────────────────────────────────────────
# Public helpers
# ─────────────────────────────────────────────────────────────────────────────


def unescape_literals(text: str) -> str:
    """``\\{`` → ``{`` and ``\\}`` → ``}``; text without escapes is unchanged."""
    return text.replace("\\{", "{").replace("\\}", "}")


# ─────────────────────────────────────────────────────────────────────────────
# Parser
# ─────────────────────────────────────────────────────────────────────────────


class QueryParser:
    """Parse templates against the type names known to *registry*.

    Errors are collected exhaustively: every malformed occurrence and every
    unmatched brace is reported, nothing is raised.

    ::

        parser = QueryParser(registry)
        result = parser.parse("form_type = {Form Type:FormTypes:8-K}")
        result.placeholders[0].default_value   # "8-K"
    """

    def __init__(self, registry: TypeRegistry, *, fallback_type: str = "StringInput") -> None:
        self._registry = registry
        self._fallback_type = fallback_type

    @property
    def fallback_type(self) -> str:
        return self._fallback_type

    # -- public -------------------------------------------------------------

    def parse(self, template: str) -> ParseResult:
        placeholders: List[Placeholder] = []
        errors: List[ParseError] = []

        for match in PLACEHOLDER_PATTERN.finditer(template):
            parsed = self._parse_occurrence(match, ordinal=len(placeholders))
            if isinstance(parsed, ParseError):
                errors.append(parsed)
            else:
                placeholders.append(parsed)

        errors.extend(self._check_braces(template))

        logger.debug(
            "Parsed template: %d placeholder(s), %d error(s)",
            len(placeholders), len(errors),
        )
        return ParseResult(source=template, placeholders=placeholders, errors=errors)

    def has_placeholders(self, template: str) -> bool:
        """True if at least one well-formed placeholder occurs; brace balance is ignored."""
        return any(
            isinstance(self._parse_occurrence(match, ordinal=0), Placeholder)
            for match in PLACEHOLDER_PATTERN.finditer(template)
        )

    def unescape_literals(self, text: str) -> str:
        return unescape_literals(text)

    def display_query(self, template: str) -> str:
        """Text shown in the editor; currently the template itself."""
        return template

    # -- internal -----------------------------------------------------------

    def _parse_occurrence(
            self, match: regex.Match, ordinal: int,
    ) -> Union[Placeholder, ParseError]:
        """Turn one raw ``{…}`` match into a placeholder or an error spanning it."""
        raw_text = match.group(0)
        content = match.group(1)
        start, end = match.span()

        def error(message: str) -> ParseError:
            return ParseError(message=message, start=start, end=end, raw_text=raw_text)

        if not content.strip():
            return error("Empty parameter definition")

        parts = content.split(":")
        label = parts[0].strip()
        if not label:
            return error("Parameter must have a label")

        type_name = self._fallback_type
        if len(parts) > 1 and parts[1].strip():
            type_name = parts[1].strip()
            if not self._registry.is_registered(type_name):
                valid = ", ".join(sorted(self._registry.type_names()))
                return error(f"Invalid component type: {type_name}. Valid types are: {valid}")

        default_value = ":".join(parts[2:]).strip() if len(parts) > 2 else ""

        return Placeholder(
            label=label,
            type_name=type_name,
            default_value=default_value,
            ordinal=ordinal,
            raw_text=raw_text,
            start=start,
            end=end,
        )

    @staticmethod
    def _check_braces(template: str) -> List[ParseError]:
        """Depth scan catching braces the placeholder pattern silently skips."""
        errors: List[ParseError] = []
        depth = 0
        open_at: Optional[int] = None

        for i, ch in enumerate(template):
            if i > 0 and template[i - 1] == "\\":
                continue
            if ch == "{":
                if depth == 0:
                    open_at = i
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth < 0:
                    errors.append(ParseError(
                        message="Unmatched closing brace",
                        start=i, end=i + 1, raw_text=ch,
                    ))
                    depth = 0

        if depth > 0 and open_at is not None:
            errors.append(ParseError(
                message="Unmatched opening brace",
                start=open_at, end=len(template), raw_text=template[open_at:],
            ))
        return errors
