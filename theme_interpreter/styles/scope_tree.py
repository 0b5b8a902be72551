"""Scope inheritance tree for theme documents."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..exceptions import UnknownAttribute
from ..models.values import RawValue

logger = logging.getLogger(__name__)

ROOT_SCOPE = ""


class ScopeNode:
    """A named style scope and the attributes it declares itself."""

    def __init__(self, path: str, parent: Optional[str] = None, attributes: Optional[Dict[str, RawValue]] = None):
        self.path = path
        self.parent = parent
        self.attributes: Dict[str, RawValue] = dict(attributes or {})

    @property
    def name(self) -> str:
        return self.path.rsplit(".", 1)[-1]

    @property
    def flat_name(self) -> str:
        """Underscore-joined path as used in ``$scope_attribute`` references."""
        return self.path.replace(".", "_")

    def __repr__(self) -> str:
        return f"ScopeNode({self.path!r}, parent={self.parent!r}, attributes={sorted(self.attributes)!r})"


class ScopeTree:
    """
    Maintain scopes and their inheritance chain.

    A nested scope (``heading.h4``) inherits from its container (``heading``),
    every top-level scope inherits from the inheritance root (``base`` by
    default), and the root scope ``""`` holding top-level variables has no
    parent and is nobody's ancestor.
    """

    def __init__(self, root_scope: str = "base") -> None:
        if not root_scope:
            raise ValueError("root_scope is required")
        self.root_scope = root_scope
        self._scopes: Dict[str, ScopeNode] = {ROOT_SCOPE: ScopeNode(ROOT_SCOPE)}

    def default_parent(self, path: str) -> Optional[str]:
        if path in (ROOT_SCOPE, self.root_scope):
            return None
        if "." in path:
            return path.rsplit(".", 1)[0]
        return self.root_scope

    def add_scope(self, path: str) -> ScopeNode:
        if path in self._scopes:
            return self._scopes[path]
        node = ScopeNode(path, self.default_parent(path))
        self._scopes[path] = node
        logger.debug(f"Added scope {path!r} (parent: {node.parent!r})")
        return node

    def set_attribute(self, path: str, attribute: str, value: RawValue) -> None:
        if not attribute:
            raise ValueError("attribute is required")
        self.add_scope(path).attributes[attribute] = value

    def has_scope(self, path: str) -> bool:
        return path in self._scopes

    def get_scope(self, path: str) -> ScopeNode:
        return self._scopes[path]

    def scopes(self) -> List[str]:
        return sorted(self._scopes)

    def get_scope_hierarchy(self, path: str) -> List[str]:
        """Return ``[path, parent, ..., root_scope]``, only listing known scopes."""
        chain: List[str] = []
        current: Optional[str] = path
        while current is not None:
            if current in self._scopes:
                chain.append(current)
                current = self._scopes[current].parent
            else:
                current = self.default_parent(current)
        return chain

    def resolve_owner(self, scope: str, attribute: str) -> Tuple[str, RawValue]:
        """
        Find the scope that defines an attribute for ``scope``.

        Args:
            scope: Scope the attribute is requested for
            attribute: Attribute name

        Returns:
            (owning scope, raw value)

        Raises:
            UnknownAttribute: when no scope on the chain defines the attribute
        """
        for candidate in self.get_scope_hierarchy(scope):
            attributes = self._scopes[candidate].attributes
            if attribute in attributes:
                return candidate, attributes[attribute]
        chain = " -> ".join(self.get_scope_hierarchy(scope)) or "(no scopes)"
        raise UnknownAttribute(
            f"Attribute '{attribute}' is not defined",
            details=f"searched {chain}",
            scope=scope,
            attribute=attribute,
        )

    def effective_attributes(self, scope: str) -> List[str]:
        """Own and inherited attribute names of a scope, sorted."""
        names: Set[str] = set()
        for candidate in self.get_scope_hierarchy(scope):
            names.update(self._scopes[candidate].attributes)
        return sorted(names)

    def iter_effective(self) -> Iterable[Tuple[str, str]]:
        for scope in self.scopes():
            for attribute in self.effective_attributes(scope):
                yield scope, attribute
