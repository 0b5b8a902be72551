"""
High-level API for theme_interpreter.

Example:
    >>> from theme_interpreter import load_theme
    >>>
    >>> table = load_theme("chess-theme.yml")
    >>> table.get("heading", "h1_font_size")
    Number(value=36.0)
    >>> for error in table.errors:
    ...     print(error)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .config import ResolverConfig
from .parser.scope_builder import build_scope_tree
from .parser.theme_loader import load_theme_file
from .styles.scheduler import ResolutionScheduler
from .styles.style_table import StyleTable

logger = logging.getLogger(__name__)

__all__ = ["resolve_theme", "load_theme"]


def resolve_theme(theme: Mapping[str, Any], config: Optional[ResolverConfig] = None) -> StyleTable:
    """
    Resolve a nested theme mapping into a StyleTable.

    Args:
        theme: Mapping of scope -> attribute -> value as produced by any loader
        config: Resolver options

    Returns:
        StyleTable holding every attribute that resolved and the recorded errors
    """
    config = config or ResolverConfig()
    tree, parse_errors = build_scope_tree(theme, root_scope=config.root_scope)
    scheduler = ResolutionScheduler(tree, config=config, parse_errors=parse_errors)
    return scheduler.resolve()


def load_theme(path: Union[str, Path], config: Optional[ResolverConfig] = None) -> StyleTable:
    """
    Load a YAML theme file and resolve it.

    Raises:
        ThemeLoadError: when the file cannot be read or is not a mapping
    """
    logger.info(f"Loading theme {path}")
    return resolve_theme(load_theme_file(path), config)
