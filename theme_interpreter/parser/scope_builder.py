"""Build a ScopeTree from a nested theme mapping."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Tuple

from ..exceptions import MalformedLiteral, ThemeInterpreterError, ThemeLoadError
from ..models.values import InvalidValue
from ..styles.scope_tree import ROOT_SCOPE, ScopeTree
from .value_parser import parse_font_family_map, parse_value

logger = logging.getLogger(__name__)

FONT_SCOPE = "font"
FONT_CATALOG_ATTRIBUTE = "catalog"


def _join(scope: str, name: str) -> str:
    return f"{scope}.{name}" if scope else name


def build_scope_tree(
    theme: Mapping[str, Any], root_scope: str = "base"
) -> Tuple[ScopeTree, List[ThemeInterpreterError]]:
    """
    Convert a theme mapping into a ScopeTree.

    Nested mappings become nested scopes, except ``font.catalog`` which is a
    font family map. Entries that fail to parse are kept as InvalidValue so
    they never silently inherit an ancestor's value.

    Returns:
        (tree, parse errors)
    """
    if not isinstance(theme, Mapping):
        raise ThemeLoadError("Theme document must be a mapping", details=type(theme).__name__)

    tree = ScopeTree(root_scope=root_scope)
    errors: List[ThemeInterpreterError] = []

    def visit(scope: str, entries: Mapping[str, Any]) -> None:
        for key in sorted(entries, key=str):
            value = entries[key]
            name = str(key)
            if "." in name:
                error = MalformedLiteral(f"Key {name!r} must not contain '.'", scope=scope, attribute=name)
                errors.append(error)
                continue
            try:
                if scope == FONT_SCOPE and name == FONT_CATALOG_ATTRIBUTE:
                    tree.set_attribute(scope, name, parse_font_family_map(value, scope, name))
                elif isinstance(value, Mapping):
                    child = _join(scope, name)
                    tree.add_scope(child)
                    visit(child, value)
                else:
                    tree.set_attribute(scope, name, parse_value(value, scope, name))
            except ThemeInterpreterError as exc:
                exc.at(scope, name)
                logger.warning(f"Could not parse {exc}")
                tree.set_attribute(scope, name, InvalidValue(exc))
                errors.append(exc)

    visit(ROOT_SCOPE, theme)
    logger.debug(f"Built scope tree with {len(tree.scopes())} scopes and {len(errors)} parse errors")
    return tree, errors
