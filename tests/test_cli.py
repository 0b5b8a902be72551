"""
Tests for the command-line interface.
"""

import json
from io import StringIO

import pytest
from rich.console import Console

from theme_interpreter.cli import create_parser, main


@pytest.fixture
def console():
    return Console(file=StringIO(), width=200, color_system=None)


def output(console):
    return console.file.getvalue()


class TestResolveCommand:
    """Test cases for `resolve`."""

    def test_json_output(self, chess_theme_path, console):
        assert main(["resolve", str(chess_theme_path), "--json"], console=console) == 0

        data = json.loads(output(console))
        assert data["values"]["heading"]["h1_font_size"] == 36.0
        assert data["values"][""]["vertical_rhythm"] == 12.5
        assert len(data["errors"]) == 3

    def test_json_single_scope(self, chess_theme_path, console):
        main(["resolve", str(chess_theme_path), "--json", "--scope", "heading.h4"], console=console)

        data = json.loads(output(console))
        assert list(data["values"]) == ["heading.h4"]
        assert data["values"]["heading.h4"]["align"] == "center"

    def test_table_output(self, chess_theme_path, console):
        assert main(["resolve", str(chess_theme_path)], console=console) == 0
        text = output(console)
        assert "Resolved theme" in text
        assert "Resolution errors" in text
        assert "h1_font_size" in text

    def test_strict_fails_on_errors(self, chess_theme_path, console):
        assert main(["resolve", str(chess_theme_path), "--strict"], console=console) == 1

    def test_strict_passes_clean_theme(self, tmp_path, console):
        theme = tmp_path / "clean.yml"
        theme.write_text("base:\n  font_size: 12\n  line_height: $base_font_size * 1.5\n")
        assert main(["resolve", str(theme), "--strict"], console=console) == 0
        assert "No resolution errors" in output(console)

    def test_missing_file(self, tmp_path, console, capsys):
        assert main(["resolve", str(tmp_path / "missing.yml")], console=console) == 2
        assert "Error:" in capsys.readouterr().err


class TestGetCommand:
    """Test cases for `get`."""

    def test_get_value(self, chess_theme_path, console):
        assert main(["get", str(chess_theme_path), "heading", "h1_font_size"], console=console) == 0
        assert json.loads(output(console)) == 36.0

    def test_get_root_variable(self, chess_theme_path, console):
        assert main(["get", str(chess_theme_path), "", "vertical_rhythm"], console=console) == 0
        assert json.loads(output(console)) == 12.5

    def test_get_font(self, chess_theme_path, console):
        assert main(["get", str(chess_theme_path), "literal", "font_family"], console=console) == 0
        assert json.loads(output(console))["file"] == "mplus1mn-regular-ascii-conums.ttf"

    def test_get_failed_attribute(self, chess_theme_path, console):
        assert main(["get", str(chess_theme_path), "heading", "font_family"], console=console) == 1
        assert "UnknownAttribute" in output(console)

    def test_get_undefined_attribute(self, chess_theme_path, console):
        assert main(["get", str(chess_theme_path), "heading", "nothing"], console=console) == 1
        assert "not defined" in output(console)


class TestParser:
    """Test cases for argument parsing."""

    def test_no_command_prints_help(self, console, capsys):
        assert main([], console=console) == 0
        assert "theme-interpreter" in capsys.readouterr().out

    def test_global_options(self):
        args = create_parser().parse_args(["--log-level", "debug", "--font-dir", "/a", "--font-dir", "/b", "get", "t.yml", "base", "x"])
        assert args.log_level == "DEBUG"
        assert args.font_dirs == ["/a", "/b"]
        assert args.command == "get"
