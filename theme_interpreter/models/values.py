"""
Value models for theme documents.

Raw values are what the parser produces from the theme tree: either a typed
literal or a pre-parsed expression. Resolved values are what ends up in the
StyleTable: concrete, typed, and free of references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

from reportlab.lib import colors


class LiteralKind(str, Enum):
    NUMBER = "number"
    DIMENSION = "dimension"
    COLOR = "color"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    FONT_FAMILY_MAP = "font_family_map"


FONT_STYLES = ("normal", "bold", "italic", "bold_italic")


# ---------------------------------------------------------------------------
# Expression AST
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VarRef:
    """``$token`` reference; bound to a (scope, attribute) by the graph builder."""

    token: str


@dataclass(frozen=True)
class BinaryOp:
    op: str
    lhs: "ExpressionNode"
    rhs: "ExpressionNode"


@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: "ExpressionNode"


@dataclass(frozen=True)
class FuncCall:
    name: str
    args: Tuple["ExpressionNode", ...]


@dataclass(frozen=True)
class ConstNode:
    """Numeric literal inside an expression (already unit-normalized)."""

    value: "ResolvedValue"


ExpressionNode = Union[VarRef, BinaryOp, UnaryOp, FuncCall, ConstNode]


def iter_var_refs(node: ExpressionNode) -> Iterator[VarRef]:
    """Yield every VarRef of an expression, left to right."""
    if isinstance(node, VarRef):
        yield node
    elif isinstance(node, BinaryOp):
        yield from iter_var_refs(node.lhs)
        yield from iter_var_refs(node.rhs)
    elif isinstance(node, UnaryOp):
        yield from iter_var_refs(node.operand)
    elif isinstance(node, FuncCall):
        for arg in node.args:
            yield from iter_var_refs(arg)


# ---------------------------------------------------------------------------
# Raw values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColorSpec:
    """Color literal as written: ``hex`` string, ``rgb`` 0-255 ints or ``cmyk`` 0-1 floats."""

    space: str
    components: Tuple[Any, ...]


@dataclass(frozen=True)
class Literal:
    kind: LiteralKind
    value: Any


@dataclass(frozen=True)
class Expression:
    node: ExpressionNode
    source: str


@dataclass(frozen=True)
class InvalidValue:
    """Placeholder for an entry that failed to parse; keeps it from inheriting."""

    error: Exception


RawValue = Union[Literal, Expression, InvalidValue]


def iter_expressions(raw: RawValue) -> Iterator[Expression]:
    if isinstance(raw, Expression):
        yield raw
    elif isinstance(raw, Literal) and raw.kind is LiteralKind.ARRAY:
        for item in raw.value:
            yield from iter_expressions(item)


# ---------------------------------------------------------------------------
# Resolved values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Number:
    value: float

    def to_plain(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Dimension:
    """A length in PDF points."""

    points: float

    def to_plain(self) -> Any:
        return self.points


@dataclass(frozen=True)
class Color:
    """
    Canonical color: CMYK components in [0, 1].

    Conversions to and from RGB/hex use the naive complement formula and are
    approximate; no color profile is involved.
    """

    c: float
    m: float
    y: float
    k: float

    @property
    def cmyk(self) -> Tuple[float, float, float, float]:
        return (self.c, self.m, self.y, self.k)

    def to_rgb(self) -> Tuple[int, int, int]:
        r, g, b = colors.cmyk2rgb(self.cmyk)
        return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))

    def to_hex(self) -> str:
        return "%02x%02x%02x" % self.to_rgb()

    def to_reportlab(self) -> colors.CMYKColor:
        return colors.CMYKColor(self.c, self.m, self.y, self.k)

    def to_plain(self) -> Any:
        return {"hex": self.to_hex(), "cmyk": list(self.cmyk)}


@dataclass(frozen=True)
class Text:
    value: str

    def to_plain(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Boolean:
    value: bool

    def to_plain(self) -> Any:
        return self.value


@dataclass(frozen=True)
class ArrayValue:
    items: Tuple["ResolvedValue", ...]

    def to_plain(self) -> Any:
        return [item.to_plain() for item in self.items]


@dataclass(frozen=True)
class FontDescriptor:
    """A font family/style pair bound to a file; ``provided_by`` names the supplying family."""

    family: str
    style: str
    file: str
    provided_by: str

    @property
    def is_fallback(self) -> bool:
        return self.provided_by != self.family

    def to_plain(self) -> Any:
        return {
            "family": self.family,
            "style": self.style,
            "file": self.file,
            "provided_by": self.provided_by,
        }


@dataclass(frozen=True)
class FontCatalogValue:
    """Resolved ``font.catalog``: family name -> {style: file}."""

    families: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def to_plain(self) -> Any:
        return {family: dict(variants) for family, variants in self.families.items()}


ResolvedValue = Union[Number, Dimension, Color, Text, Boolean, ArrayValue, FontDescriptor, FontCatalogValue]

NUMERIC_TYPES = (Number, Dimension)


def describe(value: Optional[ResolvedValue]) -> str:
    """Short type name used in error messages."""
    if value is None:
        return "nothing"
    names: Dict[type, str] = {
        Number: "number",
        Dimension: "dimension",
        Color: "color",
        Text: "string",
        Boolean: "boolean",
        ArrayValue: "array",
        FontDescriptor: "font",
        FontCatalogValue: "font catalog",
    }
    return names.get(type(value), type(value).__name__)
