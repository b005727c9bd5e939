"""CVUF document parsing, repair and validation."""

from .guard import SchemaGuard
from .parser import ResponseParser, serialize
from .schema import DEFAULT_THEME, FORM_VERSION, THEME_KEYS
from .validator import DocumentValidator

__all__ = [
    "DEFAULT_THEME",
    "DocumentValidator",
    "FORM_VERSION",
    "ResponseParser",
    "SchemaGuard",
    "THEME_KEYS",
    "serialize",
]
