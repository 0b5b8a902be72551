"""
Expression evaluator for theme values.

Arithmetic rules:

- number op number -> number
- dimension +/- dimension -> dimension
- dimension (+|-|*) number, number (+|-|*) dimension -> dimension (bare numbers are points)
- any division with a dimension operand -> unitless ratio (number), e.g. a line
  height multiplier from a length and a font size. Bare numbers are points, so
  ``12.5 / 14pt`` and ``12.5pt / 14`` both give the same ratio as ``12.5 / 14``.
- dimension * dimension, division by zero, non-numeric operands -> TypeMismatch
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict

from ..exceptions import TypeMismatch
from ..models.values import (
    NUMERIC_TYPES,
    BinaryOp,
    ConstNode,
    Dimension,
    ExpressionNode,
    FuncCall,
    Number,
    ResolvedValue,
    UnaryOp,
    VarRef,
    describe,
)

logger = logging.getLogger(__name__)

Lookup = Callable[[VarRef], ResolvedValue]


def round_half_away(x: float) -> float:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return math.copysign(math.floor(abs(x) + 0.5), x)


FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "round": round_half_away,
    "floor": lambda x: float(math.floor(x)),
    "ceil": lambda x: float(math.ceil(x)),
}


def _magnitude(value: ResolvedValue) -> float:
    return value.points if isinstance(value, Dimension) else value.value


def _same_kind(template: ResolvedValue, magnitude: float) -> ResolvedValue:
    if isinstance(template, Dimension):
        return Dimension(magnitude)
    return Number(magnitude)


class ExpressionEvaluator:
    """Evaluate expression trees against already resolved operands."""

    def evaluate(self, node: ExpressionNode, lookup: Lookup) -> ResolvedValue:
        if isinstance(node, ConstNode):
            return node.value
        if isinstance(node, VarRef):
            return lookup(node)
        if isinstance(node, UnaryOp):
            return self._unary(node, lookup)
        if isinstance(node, BinaryOp):
            return self._binary(node, lookup)
        if isinstance(node, FuncCall):
            return self._call(node, lookup)
        raise TypeMismatch(f"Cannot evaluate {type(node).__name__}")

    def _numeric(self, value: ResolvedValue, context: str) -> ResolvedValue:
        if not isinstance(value, NUMERIC_TYPES):
            raise TypeMismatch(f"{context} expects a number or dimension, got {describe(value)}", details=repr(value))
        return value

    def _unary(self, node: UnaryOp, lookup: Lookup) -> ResolvedValue:
        operand = self._numeric(self.evaluate(node.operand, lookup), f"unary '{node.op}'")
        if node.op == "-":
            return _same_kind(operand, -_magnitude(operand))
        return operand

    def _binary(self, node: BinaryOp, lookup: Lookup) -> ResolvedValue:
        context = f"operator '{node.op}'"
        lhs = self._numeric(self.evaluate(node.lhs, lookup), context)
        rhs = self._numeric(self.evaluate(node.rhs, lookup), context)
        a, b = _magnitude(lhs), _magnitude(rhs)
        lhs_dim = isinstance(lhs, Dimension)
        rhs_dim = isinstance(rhs, Dimension)

        if node.op in ("+", "-"):
            result = a + b if node.op == "+" else a - b
            return Dimension(result) if (lhs_dim or rhs_dim) else Number(result)

        if node.op == "*":
            if lhs_dim and rhs_dim:
                raise TypeMismatch("Cannot multiply two dimensions", details=f"{a}pt * {b}pt")
            return Dimension(a * b) if (lhs_dim or rhs_dim) else Number(a * b)

        if node.op == "/":
            if b == 0:
                raise TypeMismatch("Division by zero")
            return Number(a / b)

        raise TypeMismatch(f"Unsupported operator '{node.op}'")

    def _call(self, node: FuncCall, lookup: Lookup) -> ResolvedValue:
        function = FUNCTIONS.get(node.name)
        if function is None:
            raise TypeMismatch(f"Unknown function '{node.name}'")
        if len(node.args) != 1:
            raise TypeMismatch(f"{node.name}() takes exactly one argument ({len(node.args)} given)")
        value = self._numeric(self.evaluate(node.args[0], lookup), f"{node.name}()")
        return _same_kind(value, function(_magnitude(value)))


def evaluate(node: ExpressionNode, lookup: Lookup) -> ResolvedValue:
    return ExpressionEvaluator().evaluate(node, lookup)
