from .compiler import QueryCompiler
from .core import (
    CompileResult,
    ParseError,
    ParseResult,
    Placeholder,
    QParamError,
    RegistryError,
    TypeRegistry,
    Value,
    ValueType,
)
from .descriptors import FORM_TYPE_CODES, ChoiceType, NumberType, TagsType, TextType
from .engine import QueryEngine
from .factory import build_default_engine, build_default_registry, default_types
from .parser import PLACEHOLDER_PATTERN, QueryParser, unescape_literals
from .saved import SavedQuery, SavedQueryError, migrate_saved_queries, sync_values
from .serializers import format_number, parse_number, quote_text, split_tags

__all__ = [
    # core
    "Value",
    "ValueType",
    "TypeRegistry",
    "Placeholder",
    "ParseError",
    "ParseResult",
    "CompileResult",
    "QParamError",
    "RegistryError",
    # descriptors
    "TextType",
    "ChoiceType",
    "NumberType",
    "TagsType",
    "FORM_TYPE_CODES",
    # parser / compiler / engine
    "QueryParser",
    "QueryCompiler",
    "QueryEngine",
    "PLACEHOLDER_PATTERN",
    "unescape_literals",
    # factory
    "build_default_engine",
    "build_default_registry",
    "default_types",
    # saved queries
    "SavedQuery",
    "SavedQueryError",
    "sync_values",
    "migrate_saved_queries",
    # serializers
    "quote_text",
    "parse_number",
    "format_number",
    "split_tags",
]
