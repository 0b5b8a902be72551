"""
Tests for expression parsing.
"""

import pytest

from theme_interpreter.exceptions import MalformedLiteral
from theme_interpreter.models.values import (
    BinaryOp,
    ConstNode,
    Dimension,
    FuncCall,
    Number,
    UnaryOp,
    VarRef,
    iter_var_refs,
)
from theme_interpreter.parser.expression_parser import looks_like_expression, parse_expression, tokenize


class TestDetection:
    """Test cases for expression detection."""

    @pytest.mark.parametrize(
        "text",
        [
            "$base_font_size",
            "$base_line_height_length / $base_font_size",
            "round($base_font_size * 1.25)",
            "floor(14 * 2.15)",
            "2 * 3",
            "(1 + 2) / 3",
            "10pt + 2pt",
        ],
    )
    def test_expressions(self, text):
        assert looks_like_expression(text)

    @pytest.mark.parametrize("text", ["M+ 1mn", "M+ 1p Fallback", "justify", "14", "-2", "0.5in", "bold_italic"])
    def test_not_expressions(self, text):
        assert not looks_like_expression(text)


class TestParsing:
    """Test cases for the recursive-descent parser."""

    def test_single_reference(self):
        assert parse_expression("$base_font_size") == VarRef("base_font_size")

    def test_precedence(self):
        node = parse_expression("$a + $b * 2")
        assert node == BinaryOp("+", VarRef("a"), BinaryOp("*", VarRef("b"), ConstNode(Number(2.0))))

    def test_left_associative(self):
        node = parse_expression("8 / 4 / 2")
        assert node == BinaryOp("/", BinaryOp("/", ConstNode(Number(8.0)), ConstNode(Number(4.0))), ConstNode(Number(2.0)))

    def test_parentheses(self):
        node = parse_expression("($a + $b) * 2")
        assert node == BinaryOp("*", BinaryOp("+", VarRef("a"), VarRef("b")), ConstNode(Number(2.0)))

    def test_negative_literal_is_folded(self):
        node = parse_expression("$vertical_rhythm / -2")
        assert node == BinaryOp("/", VarRef("vertical_rhythm"), ConstNode(Number(-2.0)))

    def test_unary_minus_on_reference(self):
        assert parse_expression("-$a") == UnaryOp("-", VarRef("a"))

    def test_dimension_literal(self):
        node = parse_expression("$a + 1in")
        assert node.rhs == ConstNode(Dimension(72.0))

    def test_function_call(self):
        node = parse_expression("round($base_font_size * 2.6)")
        assert isinstance(node, FuncCall)
        assert node.name == "round"
        assert node.args == (BinaryOp("*", VarRef("base_font_size"), ConstNode(Number(2.6))),)

    def test_var_refs_in_order(self):
        node = parse_expression("$base_line_height_length / $base_font_size")
        assert [ref.token for ref in iter_var_refs(node)] == ["base_line_height_length", "base_font_size"]

    @pytest.mark.parametrize(
        "text",
        ["", "$a +", "round($a", "($a + 1", "$a $b", "max($a)", "$a ^ 2", "1 2"],
    )
    def test_malformed(self, text):
        with pytest.raises(MalformedLiteral):
            parse_expression(text)

    def test_unknown_unit_in_expression(self):
        with pytest.raises(MalformedLiteral):
            parse_expression("$a + 3furlongs")

    def test_tokenize_keeps_units(self):
        tokens = tokenize("0.5in * 2")
        assert [token.kind for token in tokens] == ["number", "op", "number"]
        assert tokens[0].unit == "in"
