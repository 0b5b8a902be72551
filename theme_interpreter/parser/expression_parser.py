"""
Expression parser for theme values.

Turns strings such as ``round($base_font_size * 1.25)`` into an expression
tree once, at load time. Grammar::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('-' | '+') unary | primary
    primary := NUMBER | VARIABLE | NAME '(' expr (',' expr)* ')' | '(' expr ')'
"""

from __future__ import annotations

import logging
import re
from typing import List, NamedTuple, Optional

from ..exceptions import MalformedLiteral
from ..models.values import (
    BinaryOp,
    ConstNode,
    Dimension,
    ExpressionNode,
    FuncCall,
    Number,
    UnaryOp,
    VarRef,
)
from ..utils.units import to_points

logger = logging.getLogger(__name__)

FUNCTION_NAMES = ("round", "floor", "ceil")

TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?P<unit>[A-Za-z%]+)?)
  | (?P<variable>\$[A-Za-z_][A-Za-z0-9_]*)
  | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<op>[-+*/(),])
    """,
    re.VERBOSE,
)

VARIABLE_RE = re.compile(r"\$[A-Za-z_]")
FUNCTION_CALL_RE = re.compile(r"\b(?:%s)\s*\(" % "|".join(FUNCTION_NAMES))
NUMERIC_ARITHMETIC_RE = re.compile(
    r"^\s*\(*\s*-?\s*(?:\d+(?:\.\d*)?|\.\d+)[A-Za-z]*\s*\)*"
    r"(?:\s*[-+*/]\s*\(*\s*-?\s*(?:\d+(?:\.\d*)?|\.\d+)[A-Za-z]*\s*\)*)+\s*$"
)


class Token(NamedTuple):
    kind: str
    text: str
    position: int
    unit: Optional[str] = None


def looks_like_expression(text: str) -> bool:
    """
    Check whether a string value should be parsed as an expression.

    Strings are expressions when they reference a variable, call a supported
    function, or are pure arithmetic over numbers. Text that merely contains an
    operator character (``M+ 1mn``) is not.
    """
    if not isinstance(text, str):
        return False
    stripped = text.strip()
    if stripped.startswith("$") or VARIABLE_RE.search(stripped):
        return True
    if FUNCTION_CALL_RE.search(stripped):
        return True
    return bool(NUMERIC_ARITHMETIC_RE.match(stripped))


def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    position = 0
    while position < len(text):
        match = TOKEN_RE.match(text, position)
        if not match:
            raise MalformedLiteral(
                f"Unexpected character {text[position]!r} in expression",
                details=f"at offset {position} of {text!r}",
            )
        kind = match.lastgroup
        if kind == "unit":
            kind = "number"
        if kind != "ws":
            tokens.append(Token(kind, match.group(kind), position, match.group("unit")))
        position = match.end()
    return tokens


class ExpressionParser:
    """Recursive-descent parser producing ExpressionNode trees."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0

    def parse(self) -> ExpressionNode:
        if not self.tokens:
            raise MalformedLiteral("Empty expression")
        node = self._expr()
        if self.index < len(self.tokens):
            token = self.tokens[self.index]
            raise self._error(f"Unexpected token {token.text!r}", token)
        return node

    def _peek(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise MalformedLiteral("Unexpected end of expression", details=repr(self.text))
        self.index += 1
        return token

    def _accept_op(self, *ops: str) -> Optional[Token]:
        token = self._peek()
        if token is not None and token.kind == "op" and token.text in ops:
            self.index += 1
            return token
        return None

    def _expect_op(self, op: str) -> Token:
        token = self._accept_op(op)
        if token is None:
            found = self._peek()
            if found is None:
                raise MalformedLiteral(f"Expected {op!r} before end of expression", details=repr(self.text))
            raise self._error(f"Expected {op!r}, found {found.text!r}", found)
        return token

    def _error(self, message: str, token: Token) -> MalformedLiteral:
        return MalformedLiteral(message, details=f"at offset {token.position} of {self.text!r}")

    def _expr(self) -> ExpressionNode:
        node = self._term()
        while True:
            token = self._accept_op("+", "-")
            if token is None:
                return node
            node = BinaryOp(token.text, node, self._term())

    def _term(self) -> ExpressionNode:
        node = self._unary()
        while True:
            token = self._accept_op("*", "/")
            if token is None:
                return node
            node = BinaryOp(token.text, node, self._unary())

    def _unary(self) -> ExpressionNode:
        token = self._accept_op("-", "+")
        if token is None:
            return self._primary()
        operand = self._unary()
        if token.text == "+":
            return operand
        if isinstance(operand, ConstNode):
            return ConstNode(_negate(operand.value))
        return UnaryOp("-", operand)

    def _primary(self) -> ExpressionNode:
        token = self._advance()
        if token.kind == "number":
            return ConstNode(_number_value(token))
        if token.kind == "variable":
            return VarRef(token.text[1:])
        if token.kind == "name":
            if token.text not in FUNCTION_NAMES:
                raise self._error(f"Unknown function or bare word {token.text!r}", token)
            self._expect_op("(")
            args = [self._expr()]
            while self._accept_op(","):
                args.append(self._expr())
            self._expect_op(")")
            return FuncCall(token.text, tuple(args))
        if token.kind == "op" and token.text == "(":
            node = self._expr()
            self._expect_op(")")
            return node
        raise self._error(f"Unexpected token {token.text!r}", token)


def _number_value(token: Token):
    unit = (token.unit or "").lower()
    magnitude = float(token.text[: len(token.text) - len(unit)] if unit else token.text)
    if not unit:
        return Number(magnitude)
    return Dimension(to_points(magnitude, unit))


def _negate(value):
    if isinstance(value, Dimension):
        return Dimension(-value.points)
    return Number(-value.value)


def parse_expression(text: str) -> ExpressionNode:
    """Parse an expression string; raises MalformedLiteral on bad syntax."""
    node = ExpressionParser(text).parse()
    logger.debug(f"Parsed expression {text!r} -> {node!r}")
    return node
