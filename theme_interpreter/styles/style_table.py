"""Immutable result of a theme resolution."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..exceptions import CircularReference, ErrorKind, ThemeInterpreterError
from ..models.values import ResolvedValue
from .reference_graph import StyleKey


@dataclass(frozen=True)
class ResolutionError:
    """A failure recorded against one (scope, attribute)."""

    scope: str
    attribute: str
    kind: ErrorKind
    message: str
    cycle: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_exception(cls, key: StyleKey, exc: ThemeInterpreterError) -> "ResolutionError":
        message = exc.message if not exc.details else f"{exc.message}: {exc.details}"
        cycle = exc.cycle if isinstance(exc, CircularReference) else ()
        return cls(key.scope, key.attribute, exc.kind, message, cycle)

    @property
    def key(self) -> StyleKey:
        return StyleKey(self.scope, self.attribute)

    def __str__(self) -> str:
        return f"{self.key}: {self.kind.value}: {self.message}"


class StyleTable:
    """
    Resolved style values keyed by (scope, attribute).

    Built once per theme load and never mutated; a theme change produces a new
    table. Failed entries are absent from the values and listed in ``errors``.
    """

    def __init__(self, values: Mapping[StyleKey, ResolvedValue], errors: List[ResolutionError]):
        self._values = MappingProxyType(dict(values))
        self._errors: Tuple[ResolutionError, ...] = tuple(sorted(errors, key=lambda error: error.key))
        self._errors_by_key = MappingProxyType({error.key: error for error in self._errors})

    def get(self, scope: str, attribute: str, default: Optional[ResolvedValue] = None) -> Optional[ResolvedValue]:
        return self._values.get(StyleKey(scope, attribute), default)

    def __getitem__(self, key: Tuple[str, str]) -> ResolvedValue:
        return self._values[StyleKey(*key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, tuple) and len(key) == 2 and StyleKey(*key) in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[StyleKey]:
        return iter(sorted(self._values))

    def items(self) -> List[Tuple[StyleKey, ResolvedValue]]:
        return [(key, self._values[key]) for key in sorted(self._values)]

    @property
    def errors(self) -> Tuple[ResolutionError, ...]:
        return self._errors

    @property
    def ok(self) -> bool:
        return not self._errors

    def error_for(self, scope: str, attribute: str) -> Optional[ResolutionError]:
        return self._errors_by_key.get(StyleKey(scope, attribute))

    def scopes(self) -> List[str]:
        return sorted({key.scope for key in self._values} | {error.scope for error in self._errors})

    def attributes(self, scope: str) -> Dict[str, ResolvedValue]:
        return {key.attribute: value for key, value in self.items() if key.scope == scope}

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested dict: scope -> attribute -> JSON-friendly value, plus ``errors``."""
        values: Dict[str, Dict[str, Any]] = {}
        for key, value in self.items():
            values.setdefault(key.scope, {})[key.attribute] = value.to_plain()
        return {
            "values": values,
            "errors": [
                {
                    "scope": error.scope,
                    "attribute": error.attribute,
                    "kind": error.kind.value,
                    "message": error.message,
                    "cycle": [list(step) for step in error.cycle],
                }
                for error in self._errors
            ],
        }
