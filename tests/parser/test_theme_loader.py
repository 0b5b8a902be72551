"""
Tests for theme loading and scope tree construction.
"""

import pytest

from theme_interpreter.exceptions import MalformedLiteral, ThemeLoadError
from theme_interpreter.models.values import ColorSpec, Expression, InvalidValue, LiteralKind
from theme_interpreter.parser.scope_builder import build_scope_tree
from theme_interpreter.parser.theme_loader import load_theme_file, load_theme_text


class TestThemeLoader:
    """Test cases for YAML loading."""

    def test_six_digit_scalars_stay_text(self):
        data = load_theme_text("base:\n  font_color: 000000\n  border_color: 001100\n  font_size: 14\n")
        assert data["base"]["font_color"] == "000000"
        assert data["base"]["border_color"] == "001100"
        assert data["base"]["font_size"] == 14

    def test_commented_alternatives_are_ignored(self):
        data = load_theme_text("base:\n  #font_size: 11\n  font_size: 14\n")
        assert data == {"base": {"font_size": 14}}

    def test_empty_document(self):
        assert load_theme_text("") == {}

    def test_non_mapping_document(self):
        with pytest.raises(ThemeLoadError):
            load_theme_text("- a\n- b\n")

    def test_invalid_yaml(self):
        with pytest.raises(ThemeLoadError):
            load_theme_text("base: [1, 2\n")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ThemeLoadError) as exc_info:
            load_theme_file(tmp_path / "missing.yml")
        assert "missing.yml" in str(exc_info.value)

    def test_chess_theme(self, chess_theme):
        assert chess_theme["base"]["font_color"] == "333333"
        assert chess_theme["page"]["margin"] == ["0.5in", "0.67in", "0.67in", "0.67in"]
        assert chess_theme["font"]["fallbacks"] == ["M+ 1p Fallback"]
        assert chess_theme["heading"]["h4"]["align"] == "center"


class TestScopeBuilder:
    """Test cases for build_scope_tree."""

    def test_scopes_and_parents(self, chess_theme):
        tree, errors = build_scope_tree(chess_theme)

        assert errors == []
        assert "heading.h4" in tree.scopes()
        assert "table.head" in tree.scopes()
        assert tree.get_scope("heading.h4").parent == "heading"
        assert tree.get_scope("heading").parent == "base"
        assert tree.get_scope("base").parent is None
        assert tree.get_scope("").parent is None

    def test_top_level_scalars_go_to_root_scope(self, chess_theme):
        tree, _ = build_scope_tree(chess_theme)
        root = tree.get_scope("")
        assert set(root.attributes) == {"vertical_rhythm", "horizontal_rhythm", "vertical_spacing"}
        assert isinstance(root.attributes["vertical_rhythm"], Expression)

    def test_font_catalog_is_a_family_map(self, chess_theme):
        tree, _ = build_scope_tree(chess_theme)
        catalog = tree.get_scope("font").attributes["catalog"]
        assert catalog.kind is LiteralKind.FONT_FAMILY_MAP
        assert catalog.value["ChessMerida"] == {"normal": "/usr/share/fonts/TTF/ChessMeridaUnicode.ttf"}
        assert not tree.has_scope("font.catalog")

    def test_colors_are_parsed(self, chess_theme):
        tree, _ = build_scope_tree(chess_theme)
        assert tree.get_scope("blockquote").attributes["font_color"].value == ColorSpec("hex", ("000000",))

    def test_malformed_entry_is_kept_as_invalid(self):
        tree, errors = build_scope_tree({"base": {"font_color": [1, 2]}, "heading": {"margin": "3furlongs"}})

        assert len(errors) == 2
        assert all(isinstance(error, MalformedLiteral) for error in errors)
        assert {(error.scope, error.attribute) for error in errors} == {("base", "font_color"), ("heading", "margin")}
        assert isinstance(tree.get_scope("heading").attributes["margin"], InvalidValue)

    def test_custom_root_scope(self):
        tree, _ = build_scope_tree({"defaults": {"align": "left"}, "heading": {}}, root_scope="defaults")
        assert tree.get_scope("heading").parent == "defaults"

    def test_non_mapping_theme(self):
        with pytest.raises(ThemeLoadError):
            build_scope_tree(["base"])
