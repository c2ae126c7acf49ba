"""
Shortening full codes and recovering them from a reference location.

A full code can drop its leading digits when the place it names is close to
a reference location that the reader already knows (for example a town).
The reader restores the missing digits from that same reference.

Leading digits are removed in pairs of 4, 6 or 8 characters. A pair is only
removed when the reference lies well inside the larger cell those digits
describe, so that recovery cannot land on a neighbouring cell.
"""

from .area import get_center
from .codec import (
    decode,
    encode,
    encode_default,
    power_of_20,
    compute_latitude_precision,
    SEPARATOR,
    PADDING_CHARACTER,
    SEPARATOR_POSITION,
)
from .quantize import adjust_latitude, clamp_latitude, normalize_longitude, LATITUDE_MAX
from .syntax import is_full, is_short


# Leading characters to try removing, most first
REMOVAL_LENGTHS = (8, 6, 4)

# Fraction of the cell size the reference must lie within to remove digits
SAFETY_FACTOR = 0.3


def shorten(code: str, ref_lat: float, ref_lon: float) -> str:
    """
    Remove leading characters from a full code relative to a reference.

    Args:
        code: A full, unpadded code
        ref_lat: Reference latitude in degrees
        ref_lon: Reference longitude in degrees

    Returns:
        The shortened code in the case it was given; the whole code if the
        reference is too far away to remove anything; "" if the code is not
        full or is padded
    """
    code = code.strip(" ")
    if not is_full(code):
        return ""

    # Padded codes cannot be shortened
    if PADDING_CHARACTER in code[: code.find(SEPARATOR)]:
        return ""

    area = decode(code)
    if area is None:
        return ""

    center = get_center(area)
    lat = adjust_latitude(ref_lat, area.code_length)
    lon = normalize_longitude(ref_lon)

    distance = max(abs(center.lat - lat), abs(center.lon - lon))

    for removal_length in REMOVAL_LENGTHS:
        area_edge = compute_latitude_precision(removal_length) * SAFETY_FACTOR
        if distance < area_edge:
            return code[removal_length:]

    return code


def recover_nearest(short_code: str, ref_lat: float, ref_lon: float) -> str:
    """
    Recover the full code nearest a reference location from a short code.

    The missing leading digits are taken from the reference location's own
    code. If the resulting cell center is more than half a cell away from
    the reference, it is moved one cell toward it, unless that would cross
    a pole.

    Args:
        short_code: A short code (full codes are returned upper-cased)
        ref_lat: Reference latitude in degrees
        ref_lon: Reference longitude in degrees

    Returns:
        The recovered full code, or "" if the input is neither a short nor
        a full code
    """
    code = short_code.strip(" ")
    if not code:
        return ""

    if not is_short(code):
        if is_full(code):
            return code.upper()
        return ""

    ref_lat = clamp_latitude(ref_lat)
    ref_lon = normalize_longitude(ref_lon)

    code = code.upper()
    padding_length = SEPARATOR_POSITION - code.find(SEPARATOR)

    # Size of the cell described by the missing digits
    resolution = power_of_20(2 - padding_length // 2)
    half_resolution = resolution / 2.0

    prefix = encode_default(ref_lat, ref_lon)[:padding_length]
    area = decode(prefix + code)
    if area is None:
        return ""

    center = get_center(area)
    center_lat = center.lat
    center_lon = center.lon

    if ref_lat + half_resolution < center_lat and center_lat - resolution >= -LATITUDE_MAX:
        center_lat -= resolution
    elif ref_lat - half_resolution > center_lat and center_lat + resolution <= LATITUDE_MAX:
        center_lat += resolution

    if ref_lon + half_resolution < center_lon:
        center_lon -= resolution
    elif ref_lon - half_resolution > center_lon:
        center_lon += resolution

    return encode(center_lat, center_lon, area.code_length)
