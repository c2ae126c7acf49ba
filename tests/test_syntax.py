"""Tests for code validity checks."""

import pytest
from olc_geo.syntax import code_length, is_full, is_short, is_valid


# (code, valid, short, full)
VALIDITY_CASES = [
    ("8fwc2345+G6", True, False, True),
    ("8FWC2345+G6G", True, False, True),
    ("8fwc2345+", True, False, True),
    ("8FWCX400+", True, False, True),
    ("WC2345+G6g", True, True, False),
    ("2345+G6", True, True, False),
    ("45+G6", True, True, False),
    ("+G6", True, True, False),
    ("G+", False, False, False),
    ("+", False, False, False),
    ("8FWC2345+G", False, False, False),
    ("8FWC2_45+G6", False, False, False),
    ("8FWC2η45+G6", False, False, False),
    ("8FWC2345+G6+", False, False, False),
    ("8FWC2300+G6", False, False, False),
    ("WC2300+G6g", False, False, False),
    ("WC2345+G", False, False, False),
]


class TestValidity:
    """Tests for the valid/short/full classification."""

    @pytest.mark.parametrize("code,valid,short,full", VALIDITY_CASES)
    def test_reference_cases(self, code, valid, short, full):
        """Test each reference code is classified correctly."""
        assert is_valid(code) == valid
        assert is_short(code) == short
        assert is_full(code) == full

    @pytest.mark.parametrize("code", [case[0] for case in VALIDITY_CASES])
    def test_classes_are_consistent(self, code):
        """Test full and short codes are valid and never both."""
        if is_full(code) or is_short(code):
            assert is_valid(code)
        assert not (is_full(code) and is_short(code))

    def test_surrounding_spaces(self):
        """Test surrounding spaces are ignored."""
        assert is_valid("  8FWC2345+G6 ")
        assert is_full("  8FWC2345+G6 ")

    def test_empty(self):
        """Test empty and blank strings are invalid."""
        assert not is_valid("")
        assert not is_valid("   ")

    def test_missing_separator(self):
        """Test codes without a separator are invalid."""
        assert not is_valid("8FWC2345G6")

    def test_separator_position(self):
        """Test the separator must be at an even position no later than 8."""
        assert not is_valid("8FWC2345G+6")
        assert not is_valid("8FW+C2345")
        assert not is_valid("8FWC2345G6+")


class TestPadding:
    """Tests for the padding rules."""

    def test_padding_first(self):
        """Test padding may not start the code."""
        assert not is_valid("00000000+")

    def test_padding_after_separator(self):
        """Test padding after the separator is invalid."""
        assert not is_valid("8FWC2345+00")

    def test_digit_after_padding(self):
        """Test padding must run unbroken up to the separator."""
        assert not is_valid("8F0C0000+")

    def test_odd_padding_start(self):
        """Test padding must start on a pair boundary."""
        assert not is_valid("8FW00000+")

    def test_padded_short_code(self):
        """Test short codes can be padded too."""
        assert is_valid("WC00+")
        assert is_short("WC00+")


class TestFull:
    """Tests for the first-digit range checks of full codes."""

    def test_latitude_out_of_range(self):
        """Test a first latitude digit beyond 90 degrees."""
        # 'F' is 9, 9 * 20 = 180 degrees above the south pole
        assert is_valid("FFWC2345+G6")
        assert not is_full("FFWC2345+G6")

    def test_longitude_out_of_range(self):
        """Test a first longitude digit beyond 180 degrees."""
        # 'W' is 18, 18 * 20 = 360 degrees east of the dateline
        assert is_valid("8WWC2345+G6")
        assert not is_full("8WWC2345+G6")

    def test_highest_first_digits(self):
        """Test the largest first digits that still fit on Earth."""
        assert is_full("CVX30000+")


class TestCodeLength:
    """Tests for counting significant digits."""

    @pytest.mark.parametrize("code,expected", [
        ("7FG49Q00+", 6),
        ("7FG40000+", 4),
        ("8FWC2345+", 8),
        ("8FWC2345+G6", 10),
        ("7FG49QCJ+2VXGJ", 13),
        ("+G6", 2),
        ("2345+G6", 6),
        (" 8FWC2345+G6 ", 10),
    ])
    def test_lengths(self, code, expected):
        """Test significant digit counts."""
        assert code_length(code) == expected

    def test_invalid(self):
        """Test invalid codes have no length."""
        assert code_length("8FWC2345+G") == 0
        assert code_length("") == 0
