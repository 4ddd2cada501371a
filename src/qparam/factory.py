"""Engine factory — the single place where all pieces are assembled.

``build_default_engine`` is the recommended entry point for users who want a
fully functional engine without hand-wiring the registry, the parser and
the compiler.

Customisation points:

* **types**         – extra ``ValueType`` instances, registered after the
                      built-ins (same name → replaces the built-in).
* **fallback_type** – type used by placeholders that name none.
* **validate**      – run type validators during compilation (default on).
"""

from __future__ import annotations

from typing import Iterable, Optional

from .compiler import QueryCompiler
from .core import RegistryError, TypeRegistry, ValueType
from .descriptors import ChoiceType, NumberType, TagsType, TextType
from .engine import QueryEngine
from .parser import QueryParser


def default_types() -> list[ValueType]:
    """Fresh instances of the four built-in value types."""
    return [TextType(), NumberType(), ChoiceType(), TagsType()]


def build_default_registry(types: Optional[Iterable[ValueType]] = None) -> TypeRegistry:
    """Registry holding the built-ins plus *types* (which win on name clashes).

    ``reset()`` on the returned registry restores this exact set.
    """
    return TypeRegistry([*default_types(), *(types or ())])


def build_default_engine(
        *,
        types: Optional[Iterable[ValueType]] = None,
        registry: Optional[TypeRegistry] = None,
        fallback_type: str = "StringInput",
        validate: bool = True,
) -> QueryEngine:
    """Assemble a QueryEngine with the standard value types.

    What gets wired
    ---------------
    registry
        ``StringInput``, ``NumberInput``, ``FormTypes``, ``Tags`` and any
        *types* given.  Pass *registry* to share one across engines instead;
        *types* are then registered into it.

    parser
        ``QueryParser`` validating type names against the registry.

    compiler
        ``QueryCompiler`` with validation switched by *validate*.

    Raises:
        RegistryError: *fallback_type* is not registered.

    Example::

        engine = build_default_engine()
        engine.compile("limit {Limit:NumberInput:50}", []).text
        # → "limit 50"
    """
    if registry is None:
        registry = build_default_registry(types)
    else:
        for value_type in types or ():
            registry.register(value_type)

    if not registry.is_registered(fallback_type):
        raise RegistryError(f"Fallback type {fallback_type!r} is not registered")

    parser = QueryParser(registry, fallback_type=fallback_type)
    compiler = QueryCompiler(parser, registry, validate=validate)
    return QueryEngine(registry, parser, compiler)
