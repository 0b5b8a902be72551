"""
Theme Interpreter - theme resolution engine for PDF rendering pipelines.

Turns a hierarchical theme (scopes such as ``page``, ``base``, ``heading``
carrying literal values and ``$scope_attribute`` expressions) into a flat,
immutable style table:

- Value parsing (numbers, dimensions, hex/RGB/CMYK colors, strings, arrays)
- Expression parsing and evaluation (``+ - * /``, ``round``, ``floor``, ``ceil``)
- Scope inheritance (nested scope -> container -> ``base``)
- Dependency scheduling with cycle detection and per-attribute error isolation
- Color normalization (canonical CMYK) and font catalog resolution with fallbacks
"""

from .exceptions import (
    CircularReference,
    ErrorKind,
    MalformedLiteral,
    ThemeInterpreterError,
    ThemeLoadError,
    TypeMismatch,
    UnknownAttribute,
    UnresolvedFont,
)
from .config import ResolverConfig
from .api import load_theme, resolve_theme
from .styles.style_table import ResolutionError, StyleTable

__version__ = "0.1.0"

__all__ = [
    "CircularReference",
    "ErrorKind",
    "MalformedLiteral",
    "ThemeInterpreterError",
    "ThemeLoadError",
    "TypeMismatch",
    "UnknownAttribute",
    "UnresolvedFont",
    "ResolverConfig",
    "load_theme",
    "resolve_theme",
    "ResolutionError",
    "StyleTable",
]
