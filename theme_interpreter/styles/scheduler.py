"""
Resolution scheduler for theme attributes.

Resolves every node of the reference graph depth-first, dependencies before
dependants, memoizing results. Nodes are visited in sorted (scope, attribute)
order so results and error messages are reproducible. A failing attribute is
recorded and the pass continues with the next one.

``font_family`` inherits like any other attribute. The font a scope actually
uses depends on its own ``font_style`` as well, so every scope with a family
also gets a derived ``font`` attribute resolved with that style.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

from ..config import ResolverConfig
from ..exceptions import (
    CircularReference,
    ThemeInterpreterError,
    TypeMismatch,
    UnknownAttribute,
)
from ..models.values import (
    ArrayValue,
    Boolean,
    Dimension,
    Expression,
    FontCatalogValue,
    FontDescriptor,
    InvalidValue,
    Literal,
    LiteralKind,
    Number,
    RawValue,
    ResolvedValue,
    Text,
    describe,
)
from .color_map import ColorMap
from .evaluator import ExpressionEvaluator
from .font_catalog import FontCatalog
from .reference_graph import GraphNode, ReferenceGraph, StyleKey, build_reference_graph
from .scope_tree import ScopeTree
from .style_table import ResolutionError, StyleTable

logger = logging.getLogger(__name__)

FONT_CATALOG_KEY = StyleKey("font", "catalog")
FONT_FALLBACKS_KEY = StyleKey("font", "fallbacks")


class ResolutionScheduler:
    """
    Turns a ScopeTree into a StyleTable.

    All memo tables live on the instance and are reset by ``resolve``, so
    separate schedulers never share state.
    """

    def __init__(
        self,
        tree: ScopeTree,
        graph: Optional[ReferenceGraph] = None,
        config: Optional[ResolverConfig] = None,
        evaluator: Optional[ExpressionEvaluator] = None,
        color_map: Optional[ColorMap] = None,
        parse_errors: Iterable[ThemeInterpreterError] = (),
    ):
        self.tree = tree
        self.graph = graph if graph is not None else build_reference_graph(tree)
        self.config = config or ResolverConfig(root_scope=tree.root_scope)
        self.evaluator = evaluator or ExpressionEvaluator()
        self.color_map = color_map or ColorMap()
        self.parse_errors = list(parse_errors)
        self._reset()

    def _reset(self) -> None:
        self._values: Dict[StyleKey, ResolvedValue] = {}
        self._failures: Dict[StyleKey, ThemeInterpreterError] = {}
        self._path: List[StyleKey] = []
        self._in_progress: Set[StyleKey] = set()
        self._font_catalog: Optional[FontCatalog] = None

    def resolve(self) -> StyleTable:
        """
        Resolve every attribute of the tree.

        Returns:
            StyleTable with resolved values and recorded errors
        """
        self._reset()
        for key in self.graph.sorted_keys():
            try:
                self.resolve_key(key)
            except ThemeInterpreterError:
                # already recorded against the key
                continue
        if self.config.resolve_fonts:
            self._derive_fonts()

        errors = [ResolutionError.from_exception(key, exc) for key, exc in self._failures.items()]
        for exc in self.parse_errors:
            key = StyleKey(exc.scope or "", exc.attribute or "")
            if key not in self._failures:
                errors.append(ResolutionError.from_exception(key, exc))

        logger.info(f"Resolved {len(self._values)} attributes with {len(errors)} errors")
        return StyleTable(self._values, errors)

    def resolve_key(self, key: StyleKey) -> ResolvedValue:
        if key in self._values:
            return self._values[key]
        if key in self._failures:
            raise self._failures[key]
        if key in self._in_progress:
            cycle = self._path[self._path.index(key):] + [key]
            raise CircularReference(
                "Circular reference",
                cycle=[tuple(step) for step in cycle],
                details=" -> ".join(str(step) for step in cycle),
            )

        node = self.graph.nodes.get(key)
        if node is None:
            raise UnknownAttribute(f"Attribute '{key.attribute}' is not defined", scope=key.scope, attribute=key.attribute)

        self._path.append(key)
        self._in_progress.add(key)
        try:
            value = self._compute(node)
        except ThemeInterpreterError as exc:
            raise self._record_failure(key, exc)
        finally:
            self._path.pop()
            self._in_progress.discard(key)

        self._values[key] = value
        logger.debug(f"Resolved {key} = {value!r}")
        return value

    def _record_failure(self, key: StyleKey, exc: ThemeInterpreterError) -> ThemeInterpreterError:
        source = StyleKey(exc.scope or "", exc.attribute) if exc.attribute is not None else None
        if source is None or source == key:
            error = exc.at(key.scope, key.attribute)
        else:
            error = _dependency_error(key, source, exc)
        self._failures[key] = error
        logger.warning(f"Could not resolve {error}")
        return error

    def _compute(self, node: GraphNode) -> ResolvedValue:
        key = node.key
        if node.inherited:
            return self.resolve_key(StyleKey(node.owner, key.attribute))
        value = self._materialize(key, node.raw)
        if self.config.resolve_fonts and key.attribute == self.config.font_family_attribute:
            return self._resolve_font(key, value)
        return value

    def _derive_fonts(self) -> None:
        """Add ``(scope, font)``: the scope's family resolved with its own style."""
        for scope in self.tree.scopes():
            family_key = StyleKey(scope, self.config.font_family_attribute)
            key = StyleKey(scope, self.config.font_attribute)
            # a failed family is already reported; an explicit attribute wins
            if family_key not in self.graph or family_key in self._failures or key in self.graph:
                continue
            try:
                self._values[key] = self._resolve_font(key, self.resolve_key(family_key))
            except ThemeInterpreterError as exc:
                self._record_failure(key, exc)

    def _materialize(self, key: StyleKey, raw: RawValue) -> ResolvedValue:
        if isinstance(raw, InvalidValue):
            raise raw.error
        if isinstance(raw, Expression):
            return self.evaluator.evaluate(
                raw.node, lambda ref: self.resolve_key(self.graph.binding(key, ref.token))
            )
        if not isinstance(raw, Literal):
            raise TypeMismatch(f"Unexpected raw value {raw!r}")

        kind = raw.kind
        if kind is LiteralKind.NUMBER:
            return Number(raw.value)
        if kind is LiteralKind.DIMENSION:
            return Dimension(raw.value)
        if kind is LiteralKind.COLOR:
            return self.color_map.normalize(raw.value)
        if kind is LiteralKind.STRING:
            return Text(raw.value)
        if kind is LiteralKind.BOOLEAN:
            return Boolean(raw.value)
        if kind is LiteralKind.ARRAY:
            return ArrayValue(tuple(self._materialize(key, item) for item in raw.value))
        if kind is LiteralKind.FONT_FAMILY_MAP:
            return FontCatalogValue({family: dict(variants) for family, variants in raw.value.items()})
        raise TypeMismatch(f"Unsupported literal kind {kind}")

    def _resolve_font(self, key: StyleKey, value: ResolvedValue) -> FontDescriptor:
        if isinstance(value, FontDescriptor):
            family = value.family
        elif isinstance(value, Text):
            family = value.value
        else:
            raise TypeMismatch(f"Font family must be a string, got {describe(value)}")
        return self._catalog().resolve(family, self._font_style(key.scope))

    def _font_style(self, scope: str) -> str:
        style_key = StyleKey(scope, self.config.font_style_attribute)
        if style_key not in self.graph:
            return "normal"
        style = self.resolve_key(style_key)
        if not isinstance(style, Text):
            raise TypeMismatch(f"Font style must be a string, got {describe(style)}")
        return style.value

    def _catalog(self) -> FontCatalog:
        if self._font_catalog is not None:
            return self._font_catalog

        families = {}
        if FONT_CATALOG_KEY in self.graph:
            catalog = self.resolve_key(FONT_CATALOG_KEY)
            if not isinstance(catalog, FontCatalogValue):
                raise TypeMismatch(f"font.catalog must be a font family map, got {describe(catalog)}")
            families = catalog.families

        fallbacks: List[str] = []
        if FONT_FALLBACKS_KEY in self.graph:
            configured = self.resolve_key(FONT_FALLBACKS_KEY)
            items = configured.items if isinstance(configured, ArrayValue) else (configured,)
            for item in items:
                if not isinstance(item, Text):
                    raise TypeMismatch(f"font.fallbacks entries must be family names, got {describe(item)}")
                fallbacks.append(item.value)
        fallbacks.extend(self.config.extra_fallbacks)

        self._font_catalog = FontCatalog.from_mapping(families, fallbacks, self.config.font_dirs)
        logger.debug(f"Font catalog ready: {len(families)} families, fallbacks {fallbacks}")
        return self._font_catalog


def _dependency_error(key: StyleKey, source: StyleKey, exc: ThemeInterpreterError) -> ThemeInterpreterError:
    """Error for ``key`` caused by the failure of the attribute it depends on."""
    if isinstance(exc, CircularReference):
        members = {StyleKey(*step) for step in exc.cycle}
        message = "Circular reference" if key in members else f"Depends on {source}, which is part of a circular reference"
        return CircularReference(message, cycle=exc.cycle, details=exc.cycle_path, scope=key.scope, attribute=key.attribute)
    return type(exc)(
        f"Depends on {source}, which failed",
        details=f"{exc.message}: {exc.details}" if exc.details else exc.message,
        scope=key.scope,
        attribute=key.attribute,
    )


def resolve_tree(
    tree: ScopeTree,
    config: Optional[ResolverConfig] = None,
    parse_errors: Iterable[ThemeInterpreterError] = (),
) -> StyleTable:
    return ResolutionScheduler(tree, config=config, parse_errors=parse_errors).resolve()
