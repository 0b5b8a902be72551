"""
Tests for FontCatalog.
"""

import pytest

from theme_interpreter import ResolverConfig, resolve_theme
from theme_interpreter.exceptions import UnresolvedFont
from theme_interpreter.styles.font_catalog import FontCatalog, resolve_font_path


@pytest.fixture
def catalog():
    return FontCatalog.from_mapping(
        {
            "Noto Serif": {"normal": "noto-serif.ttf", "bold": "noto-serif-bold.ttf"},
            "Mono": {"normal": "mono.ttf"},
            "Symbols": {"normal": "symbols.ttf"},
            "Wide": {"normal": "wide.ttf", "bold": "wide-bold.ttf", "italic": "wide-italic.ttf"},
        },
        fallbacks=["Missing", "Symbols", "Wide"],
    )


class TestFontCatalog:
    """Test cases for FontCatalog.resolve."""

    def test_direct_hit(self, catalog):
        font = catalog.resolve("Noto Serif", "bold")
        assert font.file == "noto-serif-bold.ttf"
        assert font.provided_by == "Noto Serif"
        assert not font.is_fallback

    def test_default_style_is_normal(self, catalog):
        assert catalog.resolve("Mono").file == "mono.ttf"

    def test_first_fallback_with_style_wins(self, catalog):
        # Missing is not in the catalog and Symbols has no bold
        font = catalog.resolve("Mono", "bold")
        assert font.family == "Mono"
        assert font.style == "bold"
        assert font.file == "wide-bold.ttf"
        assert font.provided_by == "Wide"

    def test_no_fallback_has_style(self, catalog):
        with pytest.raises(UnresolvedFont) as exc_info:
            catalog.resolve("Mono", "bold_italic")
        assert "Missing, Symbols, Wide" in str(exc_info.value)

    def test_unknown_family_is_not_substituted(self, catalog):
        with pytest.raises(UnresolvedFont) as exc_info:
            catalog.resolve("Helvetica", "normal")
        assert "Helvetica" in str(exc_info.value)

    def test_unknown_style(self, catalog):
        with pytest.raises(UnresolvedFont):
            catalog.resolve("Mono", "oblique")

    def test_families(self, catalog):
        assert catalog.families() == ["Mono", "Noto Serif", "Symbols", "Wide"]
        assert catalog.get_entry("Mono").file_for("bold") is None


class TestFontPaths:
    """Test cases for font file lookup in font directories."""

    def test_relative_file_found_in_font_dir(self, tmp_path):
        (tmp_path / "found.ttf").write_bytes(b"")
        catalog = FontCatalog.from_mapping({"Found": {"normal": "found.ttf"}}, font_dirs=[tmp_path])
        assert catalog.resolve("Found").file == str(tmp_path / "found.ttf")

    def test_relative_file_not_found_is_unchanged(self, tmp_path):
        assert resolve_font_path("absent.ttf", (str(tmp_path),)) == "absent.ttf"

    def test_absolute_path_is_unchanged(self, tmp_path):
        assert resolve_font_path("/usr/share/fonts/TTF/x.ttf", (str(tmp_path),)) == "/usr/share/fonts/TTF/x.ttf"

    def test_paths_are_memoized_per_catalog(self, tmp_path):
        catalog = FontCatalog.from_mapping({"Late": {"normal": "late.ttf"}}, font_dirs=[tmp_path])
        assert catalog.resolve("Late").file == "late.ttf"

        (tmp_path / "late.ttf").write_bytes(b"")
        assert catalog.resolve("Late").file == "late.ttf"

        fresh = FontCatalog.from_mapping({"Late": {"normal": "late.ttf"}}, font_dirs=[tmp_path])
        assert fresh.resolve("Late").file == str(tmp_path / "late.ttf")

    def test_resolutions_do_not_share_path_lookups(self, tmp_path):
        theme = {"font": {"catalog": {"Late": {"normal": "late.ttf"}}}, "base": {"font_family": "Late"}}
        config = ResolverConfig(font_dirs=[str(tmp_path)])

        first = resolve_theme(theme, config)
        (tmp_path / "late.ttf").write_bytes(b"")
        second = resolve_theme(theme, config)

        assert first.get("base", "font_family").file == "late.ttf"
        assert second.get("base", "font_family").file == str(tmp_path / "late.ttf")
