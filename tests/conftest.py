"""
Pytest configuration for theme_interpreter
"""

import logging
import sys
from pathlib import Path

import pytest

from theme_interpreter import resolve_theme
from theme_interpreter.parser.theme_loader import load_theme_file

FILES_DIR = Path(__file__).parent / "files"


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid leaking handlers between tests."""
    package_logger = logging.getLogger("theme_interpreter")
    package_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))
    package_logger.addHandler(console_handler)
    package_logger.setLevel(logging.WARNING)

    yield

    package_logger.handlers.clear()


@pytest.fixture
def chess_theme_path():
    """Path to the sample chess theme."""
    return FILES_DIR / "chess-theme.yml"


@pytest.fixture
def chess_theme(chess_theme_path):
    """Sample chess theme as a nested mapping."""
    return load_theme_file(chess_theme_path)


@pytest.fixture
def chess_table(chess_theme):
    """Resolved sample chess theme."""
    return resolve_theme(chess_theme)


@pytest.fixture
def small_theme():
    """Minimal theme exercising inheritance, expressions and fonts."""
    return {
        "font": {
            "catalog": {
                "Serif": {"normal": "serif.ttf", "bold": "serif-bold.ttf"},
                "Mono": {"normal": "mono.ttf"},
                "Fallback": {"normal": "fb.ttf", "bold": "fb-bold.ttf", "italic": "fb-italic.ttf"},
            },
            "fallbacks": ["Fallback"],
        },
        "base": {
            "align": "justify",
            "font_color": "333333",
            "font_family": "Serif",
            "font_size": 14,
            "font_style": "normal",
            "line_height_length": 12.5,
            "line_height": "$base_line_height_length / $base_font_size",
        },
        "heading": {
            "font_style": "bold",
            "h1_font_size": "round($base_font_size * 2.6)",
            "h2_font_size": "floor($base_font_size * 2.15)",
            "h4": {"font_size": "$base_font_size"},
        },
        "code": {
            "font_family": "Mono",
            "font_style": "bold",
        },
    }
