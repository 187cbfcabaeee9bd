"""Tests for numeric cell parsing."""
import pytest

from comps_extractor.utils.number_parser import (
    SQUARE_FEET_PATTERN,
    PRICE_PATTERN,
    PRICE_PER_SF_PATTERN,
    PERCENT_PATTERN,
    parse_integer_amount,
    parse_percentage,
    round_half_up,
    derive_price_per_sf,
    format_currency,
)


class TestPatterns:
    """Test cell classification patterns."""

    def test_square_feet(self):
        """Area cells are digits with thousands separators."""
        assert SQUARE_FEET_PATTERN.match("336,350")
        assert SQUARE_FEET_PATTERN.match("981")
        assert not SQUARE_FEET_PATTERN.match("$330,000")
        assert not SQUARE_FEET_PATTERN.match("3.5%")

    def test_price(self):
        """Price cells may carry a dollar sign."""
        assert PRICE_PATTERN.match("$330,000,000")
        assert PRICE_PATTERN.match("330,000,000")
        assert not PRICE_PATTERN.match("$330.5M")

    def test_price_per_sf(self):
        """Price per SF is two or three digits."""
        assert PRICE_PER_SF_PATTERN.match("98")
        assert PRICE_PER_SF_PATTERN.match("981")
        assert not PRICE_PER_SF_PATTERN.match("9")
        assert not PRICE_PER_SF_PATTERN.match("1,981")

    def test_percent(self):
        """Percent sign is optional."""
        assert PERCENT_PATTERN.match("3.5%")
        assert PERCENT_PATTERN.match("4.25")
        assert not PERCENT_PATTERN.match("CBREI")

    def test_ascii_digits_only(self):
        """Digits from other scripts are not table numbers."""
        assert not SQUARE_FEET_PATTERN.match("٣٣٦,٣٥٠")
        assert not PRICE_PATTERN.match("$٣٣٠,٠٠٠")
        assert not PRICE_PER_SF_PATTERN.match("٩٨١")
        assert not PERCENT_PATTERN.match("٣.٥%")


class TestParseIntegerAmount:
    """Test integer amount parsing."""

    def test_thousands_separators(self):
        """Commas are removed."""
        assert parse_integer_amount("336,350") == 336350

    def test_dollar_sign(self):
        """Dollar sign is removed."""
        assert parse_integer_amount("$330,000,000") == 330000000

    def test_surrounding_spaces(self):
        """Whitespace is ignored."""
        assert parse_integer_amount(" 981 ") == 981

    @pytest.mark.parametrize("text", [",", "$", "", "12.5", "N/A", "٣٣٦,٣٥٠"])
    def test_invalid(self, text):
        """Text without a plain integer raises ValueError."""
        with pytest.raises(ValueError):
            parse_integer_amount(text)


class TestParsePercentage:
    """Test percentage parsing."""

    def test_with_sign(self):
        """Percent sign is stripped."""
        assert parse_percentage("3.5%") == 3.5

    def test_without_sign(self):
        """Bare numbers are accepted."""
        assert parse_percentage("4.25") == 4.25

    def test_invalid(self):
        """Unparseable text gives None."""
        assert parse_percentage("1.2.3%") is None
        assert parse_percentage("") is None
        assert parse_percentage(None) is None


class TestDerivePricePerSF:
    """Test price per SF derivation."""

    def test_rounds_to_integer(self):
        """Result is rounded to the nearest dollar."""
        assert derive_price_per_sf(330000000, 336350) == 981

    def test_half_rounds_up(self):
        """Halves round up, not to even."""
        assert round_half_up(500.5) == 501
        assert round_half_up(2.5) == 3
        assert derive_price_per_sf(5, 2) == 3

    def test_missing_inputs(self):
        """Zero price or area gives zero."""
        assert derive_price_per_sf(0, 336350) == 0
        assert derive_price_per_sf(330000000, 0) == 0


class TestFormatCurrency:
    """Test currency formatting."""

    def test_format_positive(self):
        """Test formatting positive amount."""
        assert format_currency(330000000) == "$330,000,000"

    def test_format_negative(self):
        """Test formatting negative amount."""
        assert format_currency(-1500) == "-$1,500"

    def test_format_custom_symbol(self):
        """Test formatting with custom symbol."""
        assert format_currency(1500, "£") == "£1,500"
