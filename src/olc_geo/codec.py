"""
Open Location Code digit packing.

This module converts between the scaled integer grid of quantize.py and the
text form of a code.

Code layout (full, 15 digit code):

    CFX3X2J9+2VXGJ4M
    ^^^^^^^^ ^^         pair digits
               ^^^^^    grid digits

- Pair digits (1-10) alternate latitude and longitude in base 20. The first
  pair covers 20 degrees, each later pair divides the cell by 20.
- Grid digits (11-15) split the cell into 5 rows by 4 columns; each digit
  encodes row * 4 + col as one alphabet symbol.
- The separator sits after the eighth digit. Codes shorter than eight
  digits are right padded with '0' up to the separator.
"""

from typing import Dict, Optional
import math

from .area import CodeArea
from .geodesy import LatLon
from .quantize import (
    quantize,
    LATITUDE_MAX,
    LONGITUDE_MAX,
    GRID_LAT_PRECISION_INVERSE,
    GRID_LON_PRECISION_INVERSE,
)


SEPARATOR = "+"
PADDING_CHARACTER = "0"
ALPHABET = "23456789CFGHJMPQRVWX"

ENCODING_BASE = 20
SEPARATOR_POSITION = 8
MIN_DIGIT_COUNT = 2
MAX_DIGIT_COUNT = 15
PAIR_CODE_LENGTH = 10
GRID_CODE_LENGTH = MAX_DIGIT_COUNT - PAIR_CODE_LENGTH
GRID_COLUMNS = 4
GRID_ROWS = ENCODING_BASE // GRID_COLUMNS

# Pair digit units per degree (1 / 0.000125 degrees)
PAIR_PRECISION_INVERSE = 8000

# Place value of the digit before the first pair, and of the digit before
# the first grid row/column.
PAIR_FIRST_PLACE_VALUE = ENCODING_BASE ** (PAIR_CODE_LENGTH // 2)  # 3,200,000
GRID_LAT_FIRST_PLACE_VALUE = GRID_ROWS ** GRID_CODE_LENGTH  # 3125
GRID_LON_FIRST_PLACE_VALUE = GRID_COLUMNS ** GRID_CODE_LENGTH  # 1024

# 20^0..20^2 and 20^0..20^-3, enough for every pair code length
POWER_20_TABLE = (1.0, 20.0, 400.0)
INV_POWER_20_TABLE = (1.0, 1 / 20, 1 / 400, 1 / 8000)

_DIGIT_VALUES: Dict[str, int] = {char: i for i, char in enumerate(ALPHABET)}


def alphabet_index(char: str) -> int:
    """
    Return the value of a code character, or -1 if it is not in the alphabet.

    Lookup is case-insensitive.
    """
    return _DIGIT_VALUES.get(char.upper(), -1)


def power_of_20(exponent: int) -> float:
    """Return 20**exponent for exponents in [-3, 2] from the lookup tables."""
    if exponent >= 0:
        return POWER_20_TABLE[exponent]
    return INV_POWER_20_TABLE[-exponent]


def compute_latitude_precision(length: int) -> float:
    """
    Compute the height in degrees of a cell for a given code length.

    For pair codes this is 20^(2 - ceil(length / 2)); each grid digit then
    divides the height by 5.

    Args:
        length: Number of significant digits

    Returns:
        Cell height in degrees
    """
    if length <= PAIR_CODE_LENGTH:
        return power_of_20(2 - (length + 1) // 2)
    return INV_POWER_20_TABLE[3] / GRID_ROWS ** (length - PAIR_CODE_LENGTH)


def clamp_code_length(code_length: int) -> int:
    """
    Clamp a requested code length to one that can be produced.

    Lengths are limited to [2, 15], and odd lengths below 10 are rounded up
    since pair digits always come in latitude/longitude pairs.
    """
    code_length = max(MIN_DIGIT_COUNT, min(MAX_DIGIT_COUNT, code_length))
    if code_length < PAIR_CODE_LENGTH and code_length % 2 == 1:
        code_length += 1
    return code_length


def encode_integers(ilat: int, ilon: int, code_length: int) -> str:
    """
    Encode scaled integer coordinates into a code.

    Args:
        ilat: Latitude index from quantize()
        ilon: Longitude index from quantize()
        code_length: Requested number of significant digits

    Returns:
        The code, upper case, with exactly one separator
    """
    code_length = clamp_code_length(code_length)

    # Digits 1-8, separator, digits 9-10, grid digits 11-15
    code = [""] * (MAX_DIGIT_COUNT + 1)
    code[SEPARATOR_POSITION] = SEPARATOR

    if code_length > PAIR_CODE_LENGTH:
        for i in range(GRID_CODE_LENGTH, 0, -1):
            lat_digit = ilat % GRID_ROWS
            lon_digit = ilon % GRID_COLUMNS
            code[SEPARATOR_POSITION + 2 + i] = ALPHABET[lat_digit * GRID_COLUMNS + lon_digit]
            ilat //= GRID_ROWS
            ilon //= GRID_COLUMNS
    else:
        ilat //= GRID_LAT_FIRST_PLACE_VALUE
        ilon //= GRID_LON_FIRST_PLACE_VALUE

    # The pair after the separator
    code[SEPARATOR_POSITION + 1] = ALPHABET[ilat % ENCODING_BASE]
    code[SEPARATOR_POSITION + 2] = ALPHABET[ilon % ENCODING_BASE]
    ilat //= ENCODING_BASE
    ilon //= ENCODING_BASE

    # The pairs before the separator, right to left
    for i in range(SEPARATOR_POSITION - 2, -1, -2):
        code[i] = ALPHABET[ilat % ENCODING_BASE]
        code[i + 1] = ALPHABET[ilon % ENCODING_BASE]
        ilat //= ENCODING_BASE
        ilon //= ENCODING_BASE

    if code_length < SEPARATOR_POSITION:
        for i in range(code_length, SEPARATOR_POSITION):
            code[i] = PADDING_CHARACTER
        code_length = SEPARATOR_POSITION

    return "".join(code[: code_length + 1])


def encode(lat: float, lon: float, code_length: int = PAIR_CODE_LENGTH) -> str:
    """
    Encode a location into an Open Location Code.

    Args:
        lat: Latitude in degrees (clamped to [-90, 90])
        lon: Longitude in degrees (wrapped into [-180, 180))
        code_length: Number of significant digits, clamped to [2, 15]

    Returns:
        The code, e.g. "7FG49QCJ+2V", or "" if either coordinate is NaN or
        infinite
    """
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return ""

    ilat, ilon = quantize(lat, lon)
    return encode_integers(ilat, ilon, code_length)


def encode_default(lat: float, lon: float) -> str:
    """Encode a location with the default ten significant digits."""
    return encode(lat, lon, PAIR_CODE_LENGTH)


def clean_code(code: str) -> str:
    """Strip whitespace, the separator and padding, leaving only significant digits."""
    return "".join(
        char for char in code.strip()
        if char != SEPARATOR and char != PADDING_CHARACTER
    )


def decode(code: str) -> Optional[CodeArea]:
    """
    Decode a full code into the area it represents.

    Args:
        code: A full Open Location Code (case-insensitive, may be padded)

    Returns:
        CodeArea spanning the cell, or None if the code is not a valid
        full code
    """
    from .syntax import is_full

    if not is_full(code):
        return None

    clean = clean_code(code)[:MAX_DIGIT_COUNT]

    # Pair digits, accumulated in units of 1/8000 degree
    normal_lat = -LATITUDE_MAX * PAIR_PRECISION_INVERSE
    normal_lon = -LONGITUDE_MAX * PAIR_PRECISION_INVERSE
    place_value = PAIR_FIRST_PLACE_VALUE
    digits = min(len(clean), PAIR_CODE_LENGTH)
    for i in range(0, digits - 1, 2):
        place_value //= ENCODING_BASE
        normal_lat += alphabet_index(clean[i]) * place_value
        normal_lon += alphabet_index(clean[i + 1]) * place_value

    lat_precision = place_value / PAIR_PRECISION_INVERSE
    lon_precision = place_value / PAIR_PRECISION_INVERSE

    # Grid digits, accumulated in units of the finest grid
    extra_lat = 0
    extra_lon = 0
    if len(clean) > PAIR_CODE_LENGTH:
        row_place_value = GRID_LAT_FIRST_PLACE_VALUE
        col_place_value = GRID_LON_FIRST_PLACE_VALUE
        for i in range(PAIR_CODE_LENGTH, len(clean)):
            row_place_value //= GRID_ROWS
            col_place_value //= GRID_COLUMNS
            value = alphabet_index(clean[i])
            extra_lat += (value // GRID_COLUMNS) * row_place_value
            extra_lon += (value % GRID_COLUMNS) * col_place_value

        lat_precision = row_place_value / GRID_LAT_PRECISION_INVERSE
        lon_precision = col_place_value / GRID_LON_PRECISION_INVERSE

    lat = normal_lat / PAIR_PRECISION_INVERSE + extra_lat / GRID_LAT_PRECISION_INVERSE
    lon = normal_lon / PAIR_PRECISION_INVERSE + extra_lon / GRID_LON_PRECISION_INVERSE

    return CodeArea(
        lo=LatLon(lat, lon),
        hi=LatLon(lat + lat_precision, lon + lon_precision),
        code_length=len(clean),
    )
