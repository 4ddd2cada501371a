"""QueryEngine — the facade consumers call into.

The engine only forwards; the work is done by the parser, the compiler and
the registry it was assembled with (see ``factory.build_default_engine``).
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from .compiler import QueryCompiler
from .core import CompileResult, ParseResult, TypeRegistry, Value, ValueType
from .parser import QueryParser, unescape_literals


class QueryEngine:
    """Bundle of one registry, one parser and one compiler.

    ::

        engine = build_default_engine()
        engine.compile("name = {Name}", ["O'Brien"]).text   # "name = 'O''Brien'"
    """

    def __init__(
            self,
            registry: TypeRegistry,
            parser: QueryParser,
            compiler: QueryCompiler,
    ) -> None:
        self.registry = registry
        self.parser = parser
        self.compiler = compiler

    def parse(self, template: str) -> ParseResult:
        return self.parser.parse(template)

    def compile(self, template: str, values: Optional[Sequence[Any]] = None) -> CompileResult:
        return self.compiler.compile(template, values)

    def has_placeholders(self, template: str) -> bool:
        return self.parser.has_placeholders(template)

    def unescape_literals(self, text: str) -> str:
        return unescape_literals(text)

    def get_default_values(self, parsed: ParseResult) -> List[Value]:
        return self.compiler.get_default_values(parsed)

    def register(self, value_type: ValueType) -> None:
        """Add or replace a value type; later parses and compiles see it."""
        self.registry.register(value_type)
