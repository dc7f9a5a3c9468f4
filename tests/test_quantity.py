"""Unit tests for quantity parsing and ingredient keys."""

import pytest

from mealcart.plan.quantity import (
    ParsedQuantity,
    format_magnitude,
    ingredient_key,
    parse_quantity,
)


class TestParseQuantity:
    """Tests for parse_quantity function."""

    def test_integer_with_unit(self):
        """Test parsing '2 cups'."""
        assert parse_quantity("2 cups") == ParsedQuantity(magnitude=2.0, unit="cups", numeric=True)

    def test_decimal_with_unit(self):
        """Test parsing '1.5 tbsp'."""
        result = parse_quantity("1.5 tbsp")
        assert result.magnitude == 1.5
        assert result.unit == "tbsp"

    def test_number_only(self):
        """Test parsing a bare number."""
        result = parse_quantity("3")
        assert result.magnitude == 3.0
        assert result.unit is None
        assert result.numeric is True

    def test_unit_requires_whitespace(self):
        """A unit glued to the number is not recognized."""
        result = parse_quantity("500g")
        assert result.magnitude == 500.0
        assert result.unit is None

    def test_unit_case_preserved(self):
        """Test that the unit keeps its original case."""
        assert parse_quantity("2 Cups").unit == "Cups"

    def test_unit_stops_at_non_letter(self):
        """Only the leading run of letters is the unit."""
        assert parse_quantity("2 cups, sifted").unit == "cups"
        assert parse_quantity("1 (12 oz.) can").unit is None

    def test_multiple_spaces(self):
        """Test that several separators still yield a unit."""
        assert parse_quantity("4   cloves").unit == "cloves"

    def test_number_must_start_the_string(self):
        """Leading whitespace means there is no leading number."""
        result = parse_quantity("  2 cups")
        assert result.magnitude == 1.0
        assert result.unit is None
        assert result.numeric is False

    def test_accented_unit(self):
        """Units in any alphabet are read whole."""
        assert parse_quantity("2 cuillères") == ParsedQuantity(
            magnitude=2.0, unit="cuillères", numeric=True
        )

    def test_non_latin_unit(self):
        assert parse_quantity("3 стакана").unit == "стакана"

    def test_unit_excludes_underscore_and_digits(self):
        """Only letters belong to the unit token."""
        assert parse_quantity("2 g_x").unit == "g"
        assert parse_quantity("2 _g").unit is None

    @pytest.mark.parametrize("text", ["a pinch", "to taste", "", "some", "pinch of 2 cups"])
    def test_no_leading_number_defaults_to_one(self, text):
        """Text without a leading number reads as one unit and no unit token."""
        result = parse_quantity(text)
        assert result.magnitude == 1.0
        assert result.unit is None
        assert result.numeric is False

    def test_fraction_reads_leading_integer(self):
        """Fractions are not interpreted; the leading integer is taken."""
        result = parse_quantity("1/2 tsp")
        assert result.magnitude == 1.0
        assert result.unit is None

    def test_trailing_dot_is_not_decimal(self):
        """'2.' reads as 2 without a decimal part."""
        assert parse_quantity("2. cups").magnitude == 2.0

    def test_has_unit_property(self):
        """Test the has_unit convenience property."""
        assert parse_quantity("2 cups").has_unit
        assert not parse_quantity("2").has_unit


class TestFormatMagnitude:
    """Tests for format_magnitude function."""

    def test_whole_number_drops_decimal(self):
        assert format_magnitude(3.0) == "3"

    def test_fraction_kept(self):
        assert format_magnitude(2.5) == "2.5"

    def test_zero(self):
        assert format_magnitude(0.0) == "0"


class TestIngredientKey:
    """Tests for ingredient_key function."""

    def test_lowercase(self):
        """Test lowercase conversion."""
        assert ingredient_key("Flour") == "flour"

    def test_trim(self):
        """Test trimming surrounding whitespace."""
        assert ingredient_key("  flour \t") == "flour"

    def test_inner_whitespace_preserved(self):
        """Only surrounding whitespace is removed."""
        assert ingredient_key("Brown  Sugar") == "brown  sugar"

    def test_no_plural_folding(self):
        """Plural and singular forms are different keys."""
        assert ingredient_key("tomato") != ingredient_key("tomatoes")

    def test_equal_keys_group(self):
        """Names differing only in case and padding share a key."""
        assert ingredient_key("Flour") == ingredient_key(" flour ")
