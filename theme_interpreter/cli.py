"""
Command-line interface for theme_interpreter.

Usage:
    theme-interpreter resolve theme.yml
    theme-interpreter resolve theme.yml --scope heading --json
    theme-interpreter resolve theme.yml --strict
    theme-interpreter get theme.yml heading h1_font_size
"""

import argparse
import json
import sys
from typing import List, Optional

from rich.console import Console

from .api import load_theme
from .config import ResolverConfig
from .exceptions import ThemeLoadError
from .utils.logger import LOG_LEVELS
from .utils.rich_logger import print_errors, print_style_table, setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="theme-interpreter",
        description="Resolve a PDF theme into a flat style table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  theme-interpreter resolve chess-theme.yml
  theme-interpreter resolve chess-theme.yml --scope heading --json
  theme-interpreter get chess-theme.yml base line_height
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Log level (default: WARNING or $THEME_INTERPRETER_LOG_LEVEL)",
    )
    parser.add_argument(
        "--font-dir",
        action="append",
        dest="font_dirs",
        help="Directory searched for relative font files (repeatable)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a theme and print every attribute")
    resolve_parser.add_argument("theme", help="Theme YAML file")
    resolve_parser.add_argument("--scope", help="Only print attributes of this scope")
    resolve_parser.add_argument("--json", action="store_true", help="Output as JSON")
    resolve_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any attribute failed to resolve",
    )

    get_parser = subparsers.add_parser("get", help="Print one resolved attribute")
    get_parser.add_argument("theme", help="Theme YAML file")
    get_parser.add_argument("scope", help="Scope path, e.g. heading.h4 (use '' for top-level variables)")
    get_parser.add_argument("attribute", help="Attribute name, e.g. font_size")

    return parser


def _config(args) -> ResolverConfig:
    overrides = {"log_level": args.log_level}
    if args.font_dirs:
        overrides["font_dirs"] = args.font_dirs
    return ResolverConfig.from_env(**overrides)


def cmd_resolve(args, config: ResolverConfig, console: Console) -> int:
    """Handle resolve command."""
    table = load_theme(args.theme, config)

    if args.json:
        data = table.to_dict()
        if args.scope is not None:
            data["values"] = {args.scope: data["values"].get(args.scope, {})}
        console.print_json(json.dumps(data))
    else:
        print_style_table(table, scope=args.scope, console=console)
        print_errors(table, console=console)

    if args.strict and not table.ok:
        return 1
    return 0


def cmd_get(args, config: ResolverConfig, console: Console) -> int:
    """Handle get command."""
    table = load_theme(args.theme, config)
    value = table.get(args.scope, args.attribute)
    if value is None:
        error = table.error_for(args.scope, args.attribute)
        if error is not None:
            console.print(f"[red]✗ {error}[/red]")
        else:
            console.print(f"[red]✗ {args.scope}.{args.attribute} is not defined[/red]")
        return 1
    console.print_json(json.dumps(value.to_plain()))
    return 0


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    config = _config(args)
    setup_logging(config.log_level)
    console = console or Console()

    commands = {
        "resolve": cmd_resolve,
        "get": cmd_get,
    }
    try:
        return commands[args.command](args, config, console)
    except ThemeLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
