"""
Entry point for running theme_interpreter as a module.

Usage:
    python -m theme_interpreter resolve theme.yml --json
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
