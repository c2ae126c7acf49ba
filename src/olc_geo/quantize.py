"""
Quantization module for converting between WGS84 coordinates and integer grid indices.

This module handles the conversion between continuous (lat, lon) coordinates
and the discrete (ilat, ilon) integers that all Open Location Code digit
packing operates on.

The grid is the finest one a 15 digit code can address:
- one degree of latitude is 25,000,000 units (20^3 * 5^5)
- one degree of longitude is 8,192,000 units (20^3 * 4^5)
- ilat is in [0, 180 * 25e6) representing latitude in [-90, +90)
- ilon is in [0, 360 * 8.192e6) representing longitude in [-180, +180)

Quantization truncates toward zero before shifting.
"""

from typing import Tuple
import math


# Maximum absolute value of latitude and longitude in degrees.
LATITUDE_MAX = 90
LONGITUDE_MAX = 180

# Integer units per degree at the maximum code length.
GRID_LAT_PRECISION_INVERSE = 25_000_000
GRID_LON_PRECISION_INVERSE = 8_192_000

# 90 degrees of latitude and 180 degrees of longitude on the integer scale.
GRID_LAT_SCALE = LATITUDE_MAX * GRID_LAT_PRECISION_INVERSE
GRID_LON_SCALE = LONGITUDE_MAX * GRID_LON_PRECISION_INVERSE

# Full ranges (-90..90 and -180..180) on the integer scale.
GRID_LAT_SCALE_MAX = 2 * GRID_LAT_SCALE
GRID_LON_SCALE_MAX = 2 * GRID_LON_SCALE


def clamp_latitude(lat: float) -> float:
    """Clamp a latitude to the range [-90, 90]."""
    return max(-LATITUDE_MAX, min(LATITUDE_MAX, lat))


def normalize_longitude(lon: float) -> float:
    """
    Normalize a longitude into the range [-180, 180).

    Longitude is cyclic, so values are wrapped rather than clamped. NaN and
    infinite values are returned as they are.
    """
    if not math.isfinite(lon):
        return lon
    while lon < -LONGITUDE_MAX:
        lon += 2 * LONGITUDE_MAX
    while lon >= LONGITUDE_MAX:
        lon -= 2 * LONGITUDE_MAX
    return lon


def adjust_latitude(lat: float, code_length: int) -> float:
    """
    Clamp a latitude and pull 90 degrees down into a legal cell.

    A latitude of exactly 90 lies on the northern edge of the grid, which no
    cell contains. It is moved south by half the cell height at the given
    code length so that it lands inside the topmost cell.

    Args:
        lat: Latitude in degrees
        code_length: Number of significant digits of the code being produced

    Returns:
        Latitude in degrees, strictly below 90
    """
    from .codec import compute_latitude_precision

    lat = clamp_latitude(lat)
    if lat < LATITUDE_MAX:
        return lat
    return lat - compute_latitude_precision(code_length) / 2


def quantize(lat: float, lon: float) -> Tuple[int, int]:
    """
    Convert WGS84 coordinates to scaled integer grid indices.

    Args:
        lat: Latitude in degrees (out of range values are clamped)
        lon: Longitude in degrees (out of range values are wrapped)

    Returns:
        Tuple of (ilat, ilon), both non-negative

    The quantization formula is:
        ilat = clamp(trunc(lat * 25e6) + 90 * 25e6)
        ilon = (trunc(lon * 8.192e6) + 180 * 8.192e6) mod (360 * 8.192e6)
    """
    ilat = int(lat * GRID_LAT_PRECISION_INVERSE) + GRID_LAT_SCALE
    ilon = int(lon * GRID_LON_PRECISION_INVERSE) + GRID_LON_SCALE

    # Latitude is clamped; the top edge belongs to the last cell
    if ilat < 0:
        ilat = 0
    elif ilat >= GRID_LAT_SCALE_MAX:
        ilat = GRID_LAT_SCALE_MAX - 1

    # Longitude wraps around the antimeridian
    ilon %= GRID_LON_SCALE_MAX

    return ilat, ilon


def dequantize(ilat: int, ilon: int) -> Tuple[float, float]:
    """
    Convert scaled integer grid indices back to WGS84 coordinates.

    Args:
        ilat: Latitude index
        ilon: Longitude index

    Returns:
        Tuple of (lat, lon) as floating point degrees

    Note: This returns the south-west corner of the finest grid cell, which
    may not exactly match the original input due to truncation.
    """
    lat = (ilat - GRID_LAT_SCALE) / GRID_LAT_PRECISION_INVERSE
    lon = (ilon - GRID_LON_SCALE) / GRID_LON_PRECISION_INVERSE
    return lat, lon
