"""
Reference graph for theme attributes.

Every effective (scope, attribute) pair of the tree is a node. Edges point from
a node to the nodes it needs before it can be resolved: the owning scope's node
for inherited attributes, and the bound target of every ``$reference`` in an
expression.
"""

from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Tuple

from ..exceptions import UnknownAttribute
from ..models.values import RawValue, iter_expressions, iter_var_refs
from .scope_tree import ROOT_SCOPE, ScopeTree

logger = logging.getLogger(__name__)


class StyleKey(NamedTuple):
    scope: str
    attribute: str

    def __str__(self) -> str:
        return f"{self.scope}.{self.attribute}" if self.scope else self.attribute


class GraphNode:
    """One (scope, attribute) pair with its raw value and owner."""

    def __init__(self, key: StyleKey, owner: str, raw: RawValue):
        self.key = key
        self.owner = owner
        self.raw = raw

    @property
    def inherited(self) -> bool:
        return self.owner != self.key.scope


class ReferenceGraph:
    def __init__(self) -> None:
        self.nodes: Dict[StyleKey, GraphNode] = {}
        self.edges: Dict[StyleKey, List[StyleKey]] = {}
        self.bindings: Dict[Tuple[StyleKey, str], StyleKey] = {}
        self.unbound: Dict[Tuple[StyleKey, str], UnknownAttribute] = {}

    def add_edge(self, source: StyleKey, target: StyleKey) -> None:
        targets = self.edges.setdefault(source, [])
        if target not in targets:
            targets.append(target)

    def dependencies(self, key: StyleKey) -> List[StyleKey]:
        return list(self.edges.get(key, ()))

    def binding(self, key: StyleKey, token: str) -> StyleKey:
        """Target of ``$token`` as used by ``key``; raises UnknownAttribute if unbound."""
        try:
            return self.bindings[(key, token)]
        except KeyError:
            error = self.unbound.get((key, token))
            if error is None:
                error = UnknownAttribute(f"Unknown variable '${token}'")
            raise UnknownAttribute(error.message, details=error.details) from None

    def sorted_keys(self) -> List[StyleKey]:
        return sorted(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, key: object) -> bool:
        return key in self.nodes


class ReferenceGraphBuilder:
    """Scan a ScopeTree and record dependencies between attributes."""

    def __init__(self, tree: ScopeTree):
        self.tree = tree
        # longest flattened scope names first so `heading_h4_x` prefers heading.h4
        self._scope_prefixes = sorted(
            ((node, node.replace(".", "_")) for node in tree.scopes() if node != ROOT_SCOPE),
            key=lambda item: (-len(item[1]), item[0]),
        )

    def candidates(self, token: str) -> List[StyleKey]:
        """All (scope, attribute) splits of a reference token, most specific first."""
        result = [
            StyleKey(scope, token[len(flat) + 1:])
            for scope, flat in self._scope_prefixes
            if token.startswith(flat + "_") and len(token) > len(flat) + 1
        ]
        result.append(StyleKey(ROOT_SCOPE, token))
        return result

    def bind(self, token: str) -> StyleKey:
        """
        Bind ``$token`` to the (scope, attribute) it names.

        Raises:
            UnknownAttribute: when no split resolves through inheritance
        """
        tried = []
        for candidate in self.candidates(token):
            try:
                self.tree.resolve_owner(candidate.scope, candidate.attribute)
            except UnknownAttribute:
                tried.append(str(candidate))
                continue
            return candidate
        raise UnknownAttribute(f"Unknown variable '${token}'", details=f"tried {', '.join(tried)}")

    def build(self) -> ReferenceGraph:
        graph = ReferenceGraph()
        for scope, attribute in self.tree.iter_effective():
            key = StyleKey(scope, attribute)
            owner, raw = self.tree.resolve_owner(scope, attribute)
            graph.nodes[key] = GraphNode(key, owner, raw)
            graph.edges[key] = []
            if owner != scope:
                graph.add_edge(key, StyleKey(owner, attribute))
                continue
            for expression in iter_expressions(raw):
                for ref in iter_var_refs(expression.node):
                    if (key, ref.token) in graph.bindings or (key, ref.token) in graph.unbound:
                        continue
                    try:
                        target = self.bind(ref.token)
                    except UnknownAttribute as exc:
                        graph.unbound[(key, ref.token)] = exc
                        logger.debug(f"{key}: {exc}")
                        continue
                    graph.bindings[(key, ref.token)] = target
                    graph.add_edge(key, target)
        logger.debug(
            f"Built reference graph: {len(graph)} nodes, "
            f"{sum(len(targets) for targets in graph.edges.values())} edges"
        )
        return graph


def build_reference_graph(tree: ScopeTree) -> ReferenceGraph:
    return ReferenceGraphBuilder(tree).build()
