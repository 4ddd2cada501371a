"""Descriptors sub-package — the built-in ``ValueType`` implementations.

text    – ``StringInput`` (free text) and ``FormTypes`` (single choice)
number  – ``NumberInput``
tags    – ``Tags`` (multi-value)
"""

from .number import NumberType
from .tags import TagsType
from .text import FORM_TYPE_CODES, ChoiceType, TextType

__all__ = [
    "TextType",
    "ChoiceType",
    "FORM_TYPE_CODES",
    "NumberType",
    "TagsType",
]
