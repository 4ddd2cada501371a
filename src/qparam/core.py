"""Core data model, the value-type interface and the TypeRegistry.

This module owns every *interface* in the system.  Nothing here depends on a
concrete value type; the built-in types live in the ``descriptors``
sub-package and are wired together by ``factory``.

Data flow (``QueryEngine.compile`` entry point)::

    template (raw user input)
      │
      ▼
    QueryParser.parse(template)          ← placeholders + syntax errors
      │
      ▼
    for placeholder in right-to-left order:
        TypeRegistry.validate(type_name, value)
        TypeRegistry.serialize(type_name, value)   ← spliced into the text
      │
      ▼
    CompileResult(text, success, errors)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union

from .serializers import quote_text

logger = logging.getLogger(__name__)

Value = Union[str, int, float, List[str]]


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────


class QParamError(Exception):
    """Base class for errors caused by misuse of the library.

    Bad *user input* (malformed templates, invalid values) is never raised;
    it is reported through ``ParseResult.errors`` / ``CompileResult.errors``.
    """


class RegistryError(QParamError):
    """Raised when a value type cannot be registered."""


# ─────────────────────────────────────────────────────────────────────────────
# Parse / compile results
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Placeholder:
    """A single well-formed ``{…}`` occurrence inside a template.

    Attributes:
        label:         Display label, trimmed.
        type_name:     Registered value-type name.
        default_value: Default text from the template (may be empty).
        ordinal:       Position among the valid placeholders; the key used to
                       pick a value out of the caller's positional list.
        raw_text:      The matched text including braces.
        start:         Offset of the opening brace.
        end:           Offset just past the closing brace.
    """

    label: str
    type_name: str
    default_value: str
    ordinal: int
    raw_text: str
    start: int
    end: int


@dataclass(frozen=True)
class ParseError:
    """A syntax error with the ``[start, end)`` span it covers."""

    message: str
    start: int
    end: int
    raw_text: str = ""

    def __str__(self) -> str:
        return f"{self.message} (at {self.start}:{self.end})"


@dataclass
class ParseResult:
    """Outcome of ``QueryParser.parse``.

    ``placeholders`` only holds well-formed occurrences, ordered by appearance.
    """

    source: str
    placeholders: List[Placeholder] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.errors]


@dataclass
class CompileResult:
    """Outcome of ``QueryCompiler.compile``."""

    text: str
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


# ─────────────────────────────────────────────────────────────────────────────
# ValueType — one entry of the registry
# ─────────────────────────────────────────────────────────────────────────────


class ValueType(ABC):
    """Describe how one kind of placeholder value behaves.

    Class attributes (set in subclass)::

        type_name:    str  – key inside the registry, used in templates
        display_name: str  – human-readable name for input widgets
        expects:      str  – phrase completing "expects …" in compile errors

    ``validate`` is optional: the default accepts everything.
    """

    type_name: str
    display_name: str = ""
    expects: str = "a valid value"

    @abstractmethod
    def default_value(self) -> Value:
        """Return a fresh default, used when neither caller nor template supply one."""

    @abstractmethod
    def serialize(self, value: Any) -> str:
        """Render *value* as query-string syntax.  Must not raise on bad input."""

    def validate(self, value: Any) -> Optional[str]:
        """Return an error message for *value*, or ``None`` if it is acceptable."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({getattr(self, 'type_name', None)!r})"


# ─────────────────────────────────────────────────────────────────────────────
# TypeRegistry
# ─────────────────────────────────────────────────────────────────────────────


class TypeRegistry:
    """Name → ``ValueType`` table shared by the parser and the compiler.

    ``register`` overwrites by name (last writer wins), so the built-ins can
    be replaced at runtime or in tests.  ``reset`` restores the types the
    registry was constructed with.

    The map is not locked; populate it once at startup and treat it as
    read-mostly afterwards.

    ::

        registry = TypeRegistry([TextType(), NumberType()])
        registry.serialize("NumberInput", "42")   # "42"
        registry.serialize("Missing", "x")        # "'x'"  (free-text fallback)
    """

    def __init__(
            self,
            types: Iterable[ValueType] = (),
    ) -> None:
        self._types: dict[str, ValueType] = {}
        self._initial: Tuple[ValueType, ...] = tuple(types)
        for value_type in self._initial:
            self.register(value_type)

    # -- registration -------------------------------------------------------

    def register(self, value_type: ValueType) -> None:
        """Insert or replace *value_type* under its ``type_name``."""
        name = getattr(value_type, "type_name", None)
        if not isinstance(name, str) or not name.strip():
            raise RegistryError(f"Cannot register {value_type!r}: type_name must be a non-empty string")
        if name in self._types:
            logger.debug("Replacing value type %r", name)
        self._types[name] = value_type

    def unregister(self, type_name: str) -> None:
        """Remove *type_name*; unknown names are ignored."""
        self._types.pop(type_name, None)

    def reset(self) -> None:
        """Drop every registration and re-register the initial types."""
        self._types.clear()
        for value_type in self._initial:
            self.register(value_type)

    # -- lookup -------------------------------------------------------------

    def get(self, type_name: str) -> Optional[ValueType]:
        return self._types.get(type_name)

    def type_names(self) -> frozenset[str]:
        return frozenset(self._types)

    def is_registered(self, type_name: str) -> bool:
        return type_name in self._types

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[ValueType]:
        return iter(list(self._types.values()))

    # -- delegation ---------------------------------------------------------

    def serialize(self, type_name: str, value: Any) -> str:
        """Serialize through *type_name*, or the free-text fallback if it is unknown."""
        value_type = self._types.get(type_name)
        if value_type is None:
            logger.warning("Unknown value type %r, serializing as free text", type_name)
            return quote_text(value)
        return value_type.serialize(value)

    def default_value(self, type_name: str) -> Value:
        value_type = self._types.get(type_name)
        return value_type.default_value() if value_type is not None else ""

    def validate(self, type_name: str, value: Any) -> Optional[str]:
        value_type = self._types.get(type_name)
        if value_type is None:
            return None
        return value_type.validate(value)

