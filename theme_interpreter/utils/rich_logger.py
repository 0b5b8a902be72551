"""
Rich output for theme_interpreter.

Colorful logging and table rendering of resolved themes using the rich library.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..styles.style_table import StyleTable
from .logger import check_level


def setup_logging(level: str = "WARNING", use_rich: bool = True, console: Optional[Console] = None) -> None:
    """
    Setup logging for the theme_interpreter package.

    Args:
        level: Log level
        use_rich: Whether to log through RichHandler (plain stderr otherwise)
        console: Console to log to (defaults to stderr)
    """
    numeric_level = check_level(level)
    package_logger = logging.getLogger("theme_interpreter")
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()

    if use_rich:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    handler.setLevel(numeric_level)
    package_logger.addHandler(handler)


def _format_value(value) -> str:
    plain = value.to_plain()
    if isinstance(plain, dict) and "hex" in plain:
        return f"#{plain['hex']} cmyk{tuple(plain['cmyk'])}"
    if isinstance(plain, dict) and "file" in plain:
        suffix = f" (via {plain['provided_by']})" if plain["provided_by"] != plain["family"] else ""
        return f"{plain['family']} {plain['style']}: {plain['file']}{suffix}"
    if isinstance(plain, float) and plain.is_integer():
        return str(int(plain))
    return str(plain)


def build_style_table(table: StyleTable, scope: Optional[str] = None) -> Table:
    """Render resolved values as a rich Table, optionally for one scope."""
    output = Table(title="Resolved theme" if scope is None else f"Resolved theme: {scope or '(root)'}")
    output.add_column("Scope", style="cyan")
    output.add_column("Attribute", style="green")
    output.add_column("Type", style="blue")
    output.add_column("Value", style="magenta")

    for key, value in table.items():
        if scope is not None and key.scope != scope:
            continue
        output.add_row(key.scope or "(root)", key.attribute, type(value).__name__, _format_value(value))
    return output


def build_error_table(table: StyleTable) -> Table:
    output = Table(title="Resolution errors", style="red")
    output.add_column("Scope", style="cyan")
    output.add_column("Attribute", style="green")
    output.add_column("Kind", style="red")
    output.add_column("Message")
    for error in table.errors:
        output.add_row(error.scope or "(root)", error.attribute, error.kind.value, error.message)
    return output


def print_style_table(table: StyleTable, scope: Optional[str] = None, console: Optional[Console] = None) -> None:
    (console or Console()).print(build_style_table(table, scope))


def print_errors(table: StyleTable, console: Optional[Console] = None) -> None:
    console = console or Console()
    if table.ok:
        console.print("[green]✓ No resolution errors[/green]")
        return
    console.print(build_error_table(table))
