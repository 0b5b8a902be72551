"""
Value parser for theme terminal entries.

Classifies each raw entry of the theme tree into a typed RawValue. The
attribute name takes part in classification: six-digit strings and numeric
arrays are only read as colors for ``*color`` attributes.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping, Optional

from ..exceptions import MalformedLiteral, ThemeInterpreterError
from ..models.values import FONT_STYLES, ColorSpec, Expression, Literal, LiteralKind, RawValue
from ..utils.units import split_number, to_points
from .expression_parser import looks_like_expression, parse_expression

logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"^#?[0-9a-fA-F]{6}$")


def is_color_attribute(attribute: str) -> bool:
    return attribute == "color" or attribute.endswith("_color")


def parse_value(value: Any, scope: str, attribute: str) -> RawValue:
    """
    Classify a terminal entry.

    Args:
        value: Scalar or list taken from the theme tree
        scope: Dotted scope path owning the entry
        attribute: Attribute name of the entry

    Returns:
        Literal or Expression

    Raises:
        MalformedLiteral: with scope and attribute attached
    """
    try:
        return _parse(value, attribute)
    except ThemeInterpreterError as exc:
        raise exc.at(scope, attribute)


def _parse(value: Any, attribute: str) -> RawValue:
    color_attribute = is_color_attribute(attribute)

    if isinstance(value, bool):
        return Literal(LiteralKind.BOOLEAN, value)

    if isinstance(value, int) and color_attribute:
        # generic loaders read `font_color: 333333` as an integer
        if 0 <= value <= 999999:
            return Literal(LiteralKind.COLOR, ColorSpec("hex", (str(value).zfill(6),)))
        raise MalformedLiteral(f"Integer {value} is not a six-digit hex color")

    if isinstance(value, (int, float)):
        return Literal(LiteralKind.NUMBER, float(value))

    if isinstance(value, str):
        return _parse_string(value, color_attribute)

    if isinstance(value, (list, tuple)):
        if color_attribute:
            return Literal(LiteralKind.COLOR, parse_color_array(value))
        return Literal(LiteralKind.ARRAY, tuple(_parse(item, attribute) for item in value))

    if value is None:
        raise MalformedLiteral("Empty value")

    raise MalformedLiteral(f"Unsupported value type {type(value).__name__}")


def _parse_string(text: str, color_attribute: bool) -> RawValue:
    stripped = text.strip()

    if HEX_COLOR_RE.match(stripped) and (color_attribute or stripped.startswith("#") or not stripped.isdigit()):
        return Literal(LiteralKind.COLOR, ColorSpec("hex", (stripped.lstrip("#").lower(),)))

    if looks_like_expression(stripped):
        return Expression(parse_expression(stripped), stripped)

    number = split_number(stripped)
    if number is not None:
        magnitude, unit = number
        if not unit:
            return Literal(LiteralKind.NUMBER, magnitude)
        return Literal(LiteralKind.DIMENSION, to_points(magnitude, unit))

    if color_attribute and stripped.lower() == "transparent":
        return Literal(LiteralKind.STRING, "transparent")

    return Literal(LiteralKind.STRING, text)


def _color_component(item: Any) -> tuple:
    """Return (value, is_percentage) for a color array item."""
    if isinstance(item, bool):
        raise MalformedLiteral(f"Color component {item!r} is not a number")
    if isinstance(item, (int, float)):
        return float(item), False
    if isinstance(item, str):
        number = split_number(item)
        if number is not None:
            magnitude, unit = number
            if unit == "%":
                return magnitude / 100.0, True
            if not unit:
                return magnitude, False
    raise MalformedLiteral(f"Color component {item!r} is not a number or percentage")


def parse_color_array(items: List[Any]) -> ColorSpec:
    """
    Classify a color array.

    ``[r, g, b]`` with integers 0-255 is RGB. Three or four components that are
    all fractions <= 1 (or ``%`` strings) are CMYK; a three-item CMYK array has
    no black component.
    """
    if len(items) not in (3, 4):
        raise MalformedLiteral(f"Color array must have 3 or 4 components, got {len(items)}")

    parsed = [_color_component(item) for item in items]
    values = [value for value, _ in parsed]
    has_percentage = any(is_percentage for _, is_percentage in parsed)
    all_integral = all(value == int(value) for value in values)

    if len(values) == 3 and not has_percentage and all_integral and all(0 <= v <= 255 for v in values):
        return ColorSpec("rgb", tuple(int(v) for v in values))

    if all(0 <= v <= 1 for v in values):
        if len(values) == 3:
            values.append(0.0)
        return ColorSpec("cmyk", tuple(values))

    raise MalformedLiteral(
        f"Color array {list(items)!r} is neither RGB (0-255) nor CMYK (0-1 or %)"
    )


def parse_font_family_map(value: Any, scope: str, attribute: str) -> Literal:
    """Parse ``font.catalog``: family name -> {normal|bold|italic|bold_italic: file}."""
    if not isinstance(value, Mapping):
        raise MalformedLiteral("Font catalog must be a mapping", scope=scope, attribute=attribute)

    families = {}
    for family, variants in value.items():
        if isinstance(variants, str):
            # shorthand: a single file used for every style
            variants = {style: variants for style in FONT_STYLES}
        if not isinstance(variants, Mapping):
            raise MalformedLiteral(
                f"Font family {family!r} must map styles to files", scope=scope, attribute=attribute
            )
        unknown = [style for style in variants if style not in FONT_STYLES]
        if unknown:
            raise MalformedLiteral(
                f"Font family {family!r} has unknown style(s) {', '.join(map(str, unknown))}",
                details=f"expected one of {', '.join(FONT_STYLES)}",
                scope=scope,
                attribute=attribute,
            )
        families[str(family)] = {style: str(path) for style, path in variants.items()}
    logger.debug(f"Parsed font catalog with {len(families)} families")
    return Literal(LiteralKind.FONT_FAMILY_MAP, families)


def classify(value: Any, scope: str = "", attribute: str = "") -> Optional[LiteralKind]:
    """Return the literal kind of a value, or None for expressions."""
    raw = parse_value(value, scope, attribute)
    if isinstance(raw, Expression):
        return None
    return raw.kind
