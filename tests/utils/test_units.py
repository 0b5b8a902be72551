"""
Tests for unit conversion.
"""

import pytest

from theme_interpreter.exceptions import MalformedLiteral
from theme_interpreter.utils.units import split_number, to_points


class TestUnits:
    """Test cases for to_points and split_number."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("0.5in", 36.0),
            ("1in", 72.0),
            ("0.67in", 48.24),
            ("12pt", 12.0),
            ("10px", 7.5),
            ("1pc", 12.0),
            ("2.54cm", 72.0),
            ("25.4mm", 72.0),
        ],
    )
    def test_to_points(self, text, expected):
        magnitude, unit = split_number(text)
        assert to_points(magnitude, unit) == pytest.approx(expected)

    def test_split_number(self):
        assert split_number("14") == (14.0, "")
        assert split_number("-1.5IN") == (-1.5, "in")
        assert split_number(".5pt") == (0.5, "pt")
        assert split_number("40%") == (40.0, "%")
        assert split_number("M+ 1mn") is None
        assert split_number("1 + 2") is None

    def test_unknown_unit(self):
        with pytest.raises(MalformedLiteral) as exc_info:
            to_points(3, "furlongs")
        assert "furlongs" in str(exc_info.value)

    def test_bare_number_is_points(self):
        assert to_points(12.5, "") == 12.5
