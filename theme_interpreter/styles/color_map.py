"""
Color normalization for theme values.

The canonical color form is CMYK with components in [0, 1]. Hex and RGB inputs
are converted with reportlab's naive complement formula (with under-color
removal). The conversion is approximate: no ICC profile or press
characterization is involved.
"""

from typing import Any, Dict, Tuple, Union
import logging

from reportlab.lib import colors

from ..exceptions import MalformedLiteral
from ..models.values import Color, ColorSpec

logger = logging.getLogger(__name__)

PRECISION = 6


def _clamp(value: float) -> float:
    return round(min(1.0, max(0.0, float(value))), PRECISION)


def hex_to_rgb(hex_value: str) -> Tuple[int, int, int]:
    text = hex_value.lstrip("#")
    if len(text) != 6:
        raise MalformedLiteral(f"Hex color must have six digits: {hex_value!r}")
    try:
        return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)
    except ValueError:
        raise MalformedLiteral(f"Invalid hex color: {hex_value!r}") from None


def rgb_to_cmyk(rgb: Tuple[int, int, int]) -> Color:
    """Approximate RGB (0-255) -> CMYK conversion."""
    if len(rgb) != 3 or not all(0 <= component <= 255 for component in rgb):
        raise MalformedLiteral(f"RGB components must be three values 0-255: {rgb!r}")
    r, g, b = (component / 255.0 for component in rgb)
    c, m, y, k = colors.rgb2cmyk(r, g, b)
    return Color(_clamp(c), _clamp(m), _clamp(y), _clamp(k))


def cmyk(components: Tuple[float, ...]) -> Color:
    if len(components) == 3:
        components = tuple(components) + (0.0,)
    if len(components) != 4:
        raise MalformedLiteral(f"CMYK color must have 3 or 4 components: {components!r}")
    return Color(*(_clamp(component) for component in components))


def normalize_color(value: Union[Color, ColorSpec]) -> Color:
    """
    Convert a parsed color literal into the canonical CMYK form.

    Already normalized colors are returned unchanged, so normalization is
    idempotent.
    """
    if isinstance(value, Color):
        return value
    if not isinstance(value, ColorSpec):
        raise MalformedLiteral(f"Not a color: {value!r}")
    if value.space == "hex":
        return rgb_to_cmyk(hex_to_rgb(value.components[0]))
    if value.space == "rgb":
        return rgb_to_cmyk(tuple(int(component) for component in value.components))
    if value.space == "cmyk":
        return cmyk(value.components)
    raise MalformedLiteral(f"Unknown color space: {value.space!r}")


class ColorMap:
    """
    Normalizes color literals and caches the results for one resolution pass.

    Handles color normalization, hex conversion, and color validation.
    """

    def __init__(self):
        """
        Initialize color map.

        Sets up the color cache and conversion statistics.
        """
        self.color_cache: Dict[ColorSpec, Color] = {}
        self.color_stats = {
            'normalizations': 0,
            'cache_hits': 0,
            'conversions': 0,
        }

        logger.debug("ColorMap initialized")

    def normalize(self, value: Union[Color, ColorSpec]) -> Color:
        """
        Normalize a color literal.

        Args:
            value: Parsed color literal or normalized color

        Returns:
            Canonical CMYK color
        """
        if isinstance(value, Color):
            return value

        if value in self.color_cache:
            self.color_stats['cache_hits'] += 1
            return self.color_cache[value]

        color = normalize_color(value)
        self.color_cache[value] = color
        self.color_stats['normalizations'] += 1
        if value.space != "cmyk":
            self.color_stats['conversions'] += 1
            logger.debug(f"Approximated {value.space} {value.components} as CMYK {color.cmyk}")
        return color

    def to_hex(self, value: Union[Color, ColorSpec]) -> str:
        """
        Convert a color to a six-digit hex string (approximate for CMYK input).

        Args:
            value: Color to convert

        Returns:
            Lowercase hex string without a leading '#'
        """
        return self.normalize(value).to_hex()

    def validate_color(self, value: Any) -> bool:
        """
        Validate a color value.

        Args:
            value: Color value to validate

        Returns:
            True if the value normalizes, False otherwise
        """
        try:
            self.normalize(value)
        except (MalformedLiteral, TypeError):
            return False
        return True

    def get_color_stats(self) -> Dict[str, int]:
        """
        Get color statistics.

        Returns:
            Dictionary with color statistics
        """
        return self.color_stats.copy()

    def clear_cache(self) -> None:
        """Clear color cache."""
        self.color_cache.clear()
        logger.debug("Color cache cleared")
