"""
Value models for theme documents.

Raw values (literals and parsed expressions) and resolved values.
"""

from .values import (
    ArrayValue,
    BinaryOp,
    Boolean,
    Color,
    ColorSpec,
    ConstNode,
    Dimension,
    Expression,
    FontCatalogValue,
    FontDescriptor,
    FuncCall,
    InvalidValue,
    Literal,
    LiteralKind,
    Number,
    Text,
    UnaryOp,
    VarRef,
)

__all__ = [
    "ArrayValue",
    "BinaryOp",
    "Boolean",
    "Color",
    "ColorSpec",
    "ConstNode",
    "Dimension",
    "Expression",
    "FontCatalogValue",
    "FontDescriptor",
    "FuncCall",
    "InvalidValue",
    "Literal",
    "LiteralKind",
    "Number",
    "Text",
    "UnaryOp",
    "VarRef",
]
