#!/usr/bin/env python3
"""
Example use of the high-level API.

Resolves the sample chess theme and prints a few values and every error.
"""

from pathlib import Path

from theme_interpreter import ResolverConfig, load_theme
from theme_interpreter.utils.rich_logger import print_errors, setup_logging

THEME = Path("tests/files/chess-theme.yml")


def main():
    """Resolve the sample theme."""
    setup_logging("INFO")

    table = load_theme(THEME, ResolverConfig(font_dirs=["/usr/share/fonts/TTF"]))

    print(f"📋 Resolved attributes: {len(table)}")
    print(f"   h1 font size:  {table.get('heading', 'h1_font_size')}")
    print(f"   line height:   {table.get('base', 'line_height')}")
    print(f"   page margin:   {table.get('page', 'margin')}")
    print(f"   body color:    #{table.get('base', 'font_color').to_hex()}")
    print(f"   quote font:    {table.get('blockquote', 'font_family')}")

    print_errors(table)


if __name__ == "__main__":
    main()
