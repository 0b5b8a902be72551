"""
Parser module for theme documents.

Loads theme files, classifies terminal values and parses expressions.
"""

from .expression_parser import ExpressionParser, looks_like_expression, parse_expression
from .scope_builder import build_scope_tree
from .theme_loader import load_theme_file, load_theme_text
from .value_parser import parse_color_array, parse_value

__all__ = [
    "ExpressionParser",
    "looks_like_expression",
    "parse_expression",
    "build_scope_tree",
    "load_theme_file",
    "load_theme_text",
    "parse_color_array",
    "parse_value",
]
