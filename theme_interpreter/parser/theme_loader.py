"""
Theme file loading.

Reads a YAML theme into a plain nested mapping. Six-digit plain scalars such as
``000000`` or ``001100`` are kept as strings: YAML would otherwise read them as
(octal) integers and the color would be lost before the value parser sees it.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..exceptions import ThemeLoadError

logger = logging.getLogger(__name__)

SIX_DIGITS_RE = re.compile(r"^[0-9]{6}$")


class ThemeYamlLoader(yaml.SafeLoader):
    """SafeLoader that keeps six-digit scalars (hex color candidates) as text."""

    def construct_yaml_int(self, node):
        raw = self.construct_scalar(node)
        if SIX_DIGITS_RE.match(raw):
            return raw
        return super().construct_yaml_int(node)


ThemeYamlLoader.add_constructor("tag:yaml.org,2002:int", ThemeYamlLoader.construct_yaml_int)


def load_theme_text(text: str) -> Dict[str, Any]:
    """Parse YAML theme text into a mapping."""
    try:
        data = yaml.load(text, Loader=ThemeYamlLoader)
    except yaml.YAMLError as exc:
        raise ThemeLoadError("Invalid YAML theme", details=str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ThemeLoadError("Theme document must be a mapping", details=type(data).__name__)
    return data


def load_theme_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML theme file.

    Args:
        path: Theme file path

    Returns:
        Nested mapping of scopes and attributes

    Raises:
        ThemeLoadError: file missing, unreadable or not a mapping
    """
    theme_path = Path(path)
    try:
        text = theme_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ThemeLoadError(f"Cannot read theme file {theme_path}", details=str(exc)) from exc
    logger.debug(f"Loaded theme file {theme_path} ({len(text)} bytes)")
    return load_theme_text(text)
