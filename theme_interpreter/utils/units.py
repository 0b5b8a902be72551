"""Length unit conversion to PDF points."""

from __future__ import annotations

import re
from typing import Optional, Tuple

from reportlab.lib.units import cm, inch, mm, pica

from ..exceptions import MalformedLiteral

UNIT_TO_POINTS = {
    "pt": 1.0,
    "in": inch,
    "cm": cm,
    "mm": mm,
    "pc": pica,
    "px": 0.75,
}

NUMBER_WITH_UNIT_RE = re.compile(r"^([-+]?(?:\d+(?:\.\d*)?|\.\d+))([A-Za-z%]*)$")


def split_number(text: str) -> Optional[Tuple[float, str]]:
    """Split ``"0.5in"`` into ``(0.5, "in")``; None when text is not numeric."""
    match = NUMBER_WITH_UNIT_RE.match(text.strip())
    if not match:
        return None
    return float(match.group(1)), match.group(2).lower()


def to_points(value: float, unit: str) -> float:
    if not unit:
        return float(value)
    try:
        factor = UNIT_TO_POINTS[unit]
    except KeyError:
        raise MalformedLiteral(
            f"Unknown unit suffix '{unit}'",
            details=f"expected one of {', '.join(sorted(UNIT_TO_POINTS))}",
        ) from None
    return float(value) * factor
