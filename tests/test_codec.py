"""Tests for encoding and decoding codes."""

import pytest
from olc_geo.codec import (
    alphabet_index,
    clamp_code_length,
    clean_code,
    compute_latitude_precision,
    decode,
    encode,
    encode_default,
    encode_integers,
    power_of_20,
)
from olc_geo.quantize import quantize
from olc_geo.syntax import code_length


# (code, lat, lon, south, west, north, east)
ENCODING_CASES = [
    ("7FG49Q00+", 20.375, 2.775, 20.35, 2.75, 20.4, 2.8),
    ("7FG49QCJ+2V", 20.3700625, 2.7821875, 20.37, 2.782125, 20.370125, 2.78225),
    ("7FG49QCJ+2VX", 20.3701125, 2.782234375, 20.3701, 2.78221875, 20.370125, 2.78225),
    ("7FG49QCJ+2VXGJ", 20.3701135, 2.78223535156, 20.370113, 2.782234375, 20.370114, 2.78223632813),
    ("8FVC2222+22", 47.0000625, 8.0000625, 47.0, 8.0, 47.000125, 8.000125),
    ("4VCPPQGP+Q9", -41.2730625, 174.7859375, -41.273125, 174.785875, -41.273, 174.786),
    ("62G20000+", 0.5, -179.5, 0.0, -180.0, 1.0, -179.0),
    ("22220000+", -89.5, -179.5, -90.0, -180.0, -89.0, -179.0),
    ("7FG40000+", 20.5, 2.5, 20.0, 2.0, 21.0, 3.0),
    ("22222222+22", -89.9999375, -179.9999375, -90.0, -180.0, -89.999875, -179.999875),
    ("6VGX0000+", 0.5, 179.5, 0.0, 179.0, 1.0, 180.0),
    ("CFX30000+", 90.0, 1.0, 89.0, 1.0, 90.0, 2.0),
    ("CFX30000+", 92.0, 1.0, 89.0, 1.0, 90.0, 2.0),
    ("62H20000+", 1.0, 180.0, 1.0, -180.0, 2.0, -179.0),
    ("62H30000+", 1.0, 181.0, 1.0, -179.0, 2.0, -178.0),
]

# Decoded corners are compared with this tolerance
TOLERANCE = 1e-11


class TestAlphabet:
    """Tests for digit lookup."""

    def test_values(self):
        """Test first and last alphabet characters."""
        assert alphabet_index("2") == 0
        assert alphabet_index("X") == 19

    def test_case_insensitive(self):
        """Test lower case letters are accepted."""
        assert alphabet_index("c") == alphabet_index("C") == 8

    def test_not_in_alphabet(self):
        """Test characters outside the alphabet."""
        assert alphabet_index("A") == -1
        assert alphabet_index("0") == -1
        assert alphabet_index("+") == -1


class TestPrecision:
    """Tests for cell height computation."""

    def test_power_of_20(self):
        """Test the lookup table powers."""
        assert power_of_20(2) == 400.0
        assert power_of_20(0) == 1.0
        assert power_of_20(-3) == pytest.approx(1 / 8000)

    @pytest.mark.parametrize("length,expected", [
        (2, 20.0),
        (4, 1.0),
        (6, 0.05),
        (8, 0.0025),
        (10, 0.000125),
        (11, 0.000025),
        (15, 0.000125 / 3125),
    ])
    def test_latitude_precision(self, length, expected):
        """Test cell height for each pair and grid length."""
        assert compute_latitude_precision(length) == pytest.approx(expected)

    def test_odd_pair_length_rounds_up(self):
        """Test odd lengths below 10 share the height of the next even length."""
        assert compute_latitude_precision(3) == compute_latitude_precision(4)
        assert compute_latitude_precision(9) == compute_latitude_precision(10)


class TestClampCodeLength:
    """Tests for code length clamping."""

    def test_in_range(self):
        """Test usable lengths are unchanged."""
        assert clamp_code_length(2) == 2
        assert clamp_code_length(10) == 10
        assert clamp_code_length(11) == 11

    def test_out_of_range(self):
        """Test lengths are limited to [2, 15]."""
        assert clamp_code_length(0) == 2
        assert clamp_code_length(-5) == 2
        assert clamp_code_length(99) == 15

    def test_odd_below_pair_length(self):
        """Test odd lengths below 10 round up."""
        assert clamp_code_length(1) == 2
        assert clamp_code_length(7) == 8
        assert clamp_code_length(9) == 10


class TestEncode:
    """Tests for encoding locations."""

    @pytest.mark.parametrize("case", ENCODING_CASES, ids=lambda c: f"{c[0]}@{c[1]},{c[2]}")
    def test_encoding_cases(self, case):
        """Test encoding reproduces each reference code."""
        code, lat, lon = case[:3]
        assert encode(lat, lon, code_length(code)) == code

    def test_default_length(self):
        """Test the default is ten digits."""
        # 20.375 -> lat index 2759375000 -> pair digits 5, 10, 7, 10, 0
        # 2.775 -> lon index 1497292800 -> pair digits 9, 2, 15, 10, 0
        assert encode(20.375, 2.775) == "7FG49QGG+22"
        assert encode_default(20.375, 2.775) == "7FG49QGG+22"

    def test_padded_length(self):
        """Test short lengths are padded up to the separator."""
        assert encode(20.375, 2.775, 6) == "7FG49Q00+"
        assert encode(20.375, 2.775, 2) == "7F000000+"

    def test_clamped_lengths(self):
        """Test requested lengths outside the usable range."""
        assert encode(20.375, 2.775, 1) == "7F000000+"
        assert encode(20.375, 2.775, 7) == "7FG49QGG+"
        assert encode(20.375, 2.775, 20) == "7FG49QGG+2222222"

    def test_grid_digits(self):
        """Test lengths beyond ten add grid digits."""
        assert encode(20.375, 2.775, 11) == "7FG49QGG+222"
        assert encode(20.375, 2.775, 15) == "7FG49QGG+2222222"

    def test_single_separator(self):
        """Test every length produces exactly one separator at position 9."""
        for length in range(2, 16):
            code = encode(47.0000625, 8.0000625, length)
            assert code.count("+") == 1
            assert code.index("+") == 8

    def test_encode_integers_matches_encode(self):
        """Test encoding from integers gives the same code."""
        ilat, ilon = quantize(47.0000625, 8.0000625)
        assert encode_integers(ilat, ilon, 10) == encode(47.0000625, 8.0000625, 10)


class TestCleanCode:
    """Tests for stripping formatting from codes."""

    def test_removes_separator_and_padding(self):
        """Test only significant digits remain."""
        assert clean_code("7FG49Q00+") == "7FG49Q"
        assert clean_code("  8FVC2222+22 ") == "8FVC222222"


class TestDecode:
    """Tests for decoding codes."""

    @pytest.mark.parametrize("case", ENCODING_CASES, ids=lambda c: f"{c[0]}@{c[1]},{c[2]}")
    def test_encoding_cases(self, case):
        """Test decoding gives the reference corners."""
        code, _, _, south, west, north, east = case
        area = decode(code)

        assert area is not None
        assert area.code_length == code_length(code)
        assert area.lo.lat == pytest.approx(south, abs=TOLERANCE)
        assert area.lo.lon == pytest.approx(west, abs=TOLERANCE)
        assert area.hi.lat == pytest.approx(north, abs=TOLERANCE)
        assert area.hi.lon == pytest.approx(east, abs=TOLERANCE)

    def test_lower_case(self):
        """Test decoding is case-insensitive."""
        assert decode("7fg49qcj+2v") == decode("7FG49QCJ+2V")

    def test_not_full(self):
        """Test short and invalid codes decode to None."""
        assert decode("9QCJ+2VX") is None
        assert decode("8FWC2345+G") is None
        assert decode("") is None

    def test_padded_length(self):
        """Test padded codes count only digits before the padding."""
        area = decode("7FG40000+")
        assert area.code_length == 4
        assert area.height_degrees == pytest.approx(1.0)

    @pytest.mark.parametrize("code", [
        "7FG49QCJ+2V",
        "7FG49QCJ+2VX",
        "8FVC2222+22",
        "4VCPPQGP+Q9",
        "CFX30000+",
        "6VGX0000+",
    ])
    def test_center_encodes_to_code(self, code):
        """Test encoding the center of a decoded area gives the code back."""
        area = decode(code)
        center = area.center
        assert encode(center.lat, center.lon, area.code_length) == code

    def test_nested_cells(self):
        """Test a longer code's cell lies inside its shorter prefix's cell."""
        outer = decode("7FG49Q00+")
        inner = decode("7FG49QCJ+2VXGJ")
        assert outer.lo.lat <= inner.lo.lat < inner.hi.lat <= outer.hi.lat
        assert outer.lo.lon <= inner.lo.lon < inner.hi.lon <= outer.hi.lon


# One point in each hemisphere quadrant
QUADRANT_POINTS = [
    (47.3769, 8.5417),
    (40.7128, -74.0060),
    (-33.8688, 151.2093),
    (-34.6037, -58.3816),
]


class TestRoundTrip:
    """Tests for encoding the center of a decoded cell."""

    @pytest.mark.parametrize("lat,lon", QUADRANT_POINTS)
    @pytest.mark.parametrize("length", range(2, 15))
    def test_center_round_trip(self, lat, lon, length):
        """Test the center of a cell encodes back to its own code."""
        code = encode(lat, lon, length)
        area = decode(code)
        center = area.center
        assert encode(center.lat, center.lon, area.code_length) == code

    def test_fifteen_digits_north_east(self):
        """Test 15 digit centers round trip when both coordinates are positive."""
        code = encode(47.0000625, 8.0000625, 15)
        center = decode(code).center
        assert encode(center.lat, center.lon, 15) == code

    def test_fifteen_digits_south_west(self):
        """Test 15 digit centers truncate into the next cell for negative coordinates."""
        # The center is half a grid unit inside the cell; truncating toward
        # zero moves a negative half unit up to the next index.
        center = decode("2J9MR6H9+32MGG8F").center
        assert encode(center.lat, center.lon, 15) == "2J9MR6H9+32MGG8M"


class TestNonFinite:
    """Tests for NaN and infinite coordinates."""

    @pytest.mark.parametrize("lat,lon", [
        (float("nan"), 0.0),
        (0.0, float("nan")),
        (float("inf"), 0.0),
        (0.0, float("-inf")),
    ])
    def test_encode_returns_empty(self, lat, lon):
        """Test coordinates that are not finite give an empty code."""
        assert encode(lat, lon) == ""
        assert encode_default(lat, lon) == ""
