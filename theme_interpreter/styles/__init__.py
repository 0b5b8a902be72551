"""
Styles module for theme resolution.

This module contains the components that turn a scope tree into a resolved
style table: inheritance, reference graph, evaluation, scheduling, and color
and font normalization.
"""

from .scope_tree import ScopeNode, ScopeTree
from .reference_graph import ReferenceGraph, ReferenceGraphBuilder, StyleKey
from .evaluator import ExpressionEvaluator
from .color_map import ColorMap, normalize_color
from .font_catalog import FontCatalog, FontCatalogEntry
from .style_table import ResolutionError, StyleTable
from .scheduler import ResolutionScheduler

__all__ = [
    "ScopeNode",
    "ScopeTree",
    "ReferenceGraph",
    "ReferenceGraphBuilder",
    "StyleKey",
    "ExpressionEvaluator",
    "ColorMap",
    "normalize_color",
    "FontCatalog",
    "FontCatalogEntry",
    "ResolutionError",
    "StyleTable",
    "ResolutionScheduler",
]
