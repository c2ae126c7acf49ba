"""
Operations on code cells: neighbouring cells and choosing a code length.

Neighbours are found by moving the cell center one cell height or width in
a compass direction and re-encoding at the same length. The optimal code
length is the shortest one whose cells, measured on the WGS84 ellipsoid,
fit inside a requested size in meters.
"""

from enum import Enum
from typing import Dict, Iterable, List, Tuple, Union
import math

from .area import get_center
from .codec import (
    decode,
    encode,
    compute_latitude_precision,
    MIN_DIGIT_COUNT,
    MAX_DIGIT_COUNT,
    PAIR_CODE_LENGTH,
)
from .geodesy import LatLon, calculate_inverse
from .quantize import normalize_longitude, LATITUDE_MAX
from .syntax import is_full


# Meters per degree along a meridian, used when the geodesic solver fails
METERS_PER_DEGREE = 111320.0


class NeighborDirection(Enum):
    """Compass direction of a neighbouring cell."""
    NORTH = "n"
    SOUTH = "s"
    EAST = "e"
    WEST = "w"
    NORTH_EAST = "ne"
    NORTH_WEST = "nw"
    SOUTH_EAST = "se"
    SOUTH_WEST = "sw"


# (latitude step, longitude step) in cells for each direction
DIRECTION_OFFSETS: Dict[NeighborDirection, Tuple[int, int]] = {
    NeighborDirection.NORTH: (1, 0),
    NeighborDirection.SOUTH: (-1, 0),
    NeighborDirection.EAST: (0, 1),
    NeighborDirection.WEST: (0, -1),
    NeighborDirection.NORTH_EAST: (1, 1),
    NeighborDirection.NORTH_WEST: (1, -1),
    NeighborDirection.SOUTH_EAST: (-1, 1),
    NeighborDirection.SOUTH_WEST: (-1, -1),
}

CARDINAL_DIRECTIONS = (
    NeighborDirection.NORTH,
    NeighborDirection.SOUTH,
    NeighborDirection.EAST,
    NeighborDirection.WEST,
)


class Precision(Enum):
    """
    Predefined precision tiers, valued by target cell size in meters.
    """
    HUNDREDS_OF_METERS = 250.0
    TENS_OF_METERS = 15.0
    METERS = 3.0
    CENTIMETERS = 0.25
    MILLIMETERS = 0.005


def get_neighbor(code: str, direction: NeighborDirection) -> str:
    """
    Compute the code of the adjacent cell in a direction.

    Args:
        code: A full code
        direction: Direction of the neighbour

    Returns:
        The neighbour's code with the same number of digits, or "" if the
        code is not full or the neighbour would lie beyond a pole
    """
    if not is_full(code):
        return ""

    area = decode(code)
    if area is None:
        return ""

    center = get_center(area)
    lat_step, lon_step = DIRECTION_OFFSETS[direction]

    lat = center.lat + lat_step * area.height_degrees
    lon = center.lon + lon_step * area.width_degrees

    if lat >= LATITUDE_MAX or lat <= -LATITUDE_MAX:
        return ""

    return encode(lat, normalize_longitude(lon), area.code_length)


def get_neighbors(
    code: str,
    directions: Iterable[NeighborDirection] = CARDINAL_DIRECTIONS,
) -> List[str]:
    """
    Compute the codes of several neighbouring cells.

    Args:
        code: A full code
        directions: Directions to compute (default: north, south, east, west)

    Returns:
        Codes in NeighborDirection declaration order, one per requested
        direction ("" where the neighbour is beyond a pole); an empty list
        if the code is not full
    """
    if not is_full(code):
        return []

    wanted = set(directions)
    return [get_neighbor(code, d) for d in NeighborDirection if d in wanted]


def get_north_neighbor(code: str) -> str:
    return get_neighbor(code, NeighborDirection.NORTH)


def get_south_neighbor(code: str) -> str:
    return get_neighbor(code, NeighborDirection.SOUTH)


def get_east_neighbor(code: str) -> str:
    return get_neighbor(code, NeighborDirection.EAST)


def get_west_neighbor(code: str) -> str:
    return get_neighbor(code, NeighborDirection.WEST)


def _cell_edges(lat: float, lon: float, precision_deg: float) -> Tuple[float, float]:
    """Return (height, width) in meters of a cell with its south-west corner at (lat, lon)."""
    start = LatLon(lat, lon)

    result = calculate_inverse(start, LatLon(lat + precision_deg, lon))
    if result.success:
        height = result.distance
    else:
        height = precision_deg * METERS_PER_DEGREE

    result = calculate_inverse(start, LatLon(lat, lon + precision_deg))
    if result.success:
        width = result.distance
    else:
        width = precision_deg * METERS_PER_DEGREE * math.cos(math.radians(lat))

    return height, width


def optimal_code_length(
    lat: float,
    lon: float,
    target: Union[float, Precision],
) -> int:
    """
    Find the shortest code length whose cells fit a target size.

    Candidate lengths are 2, 4, 6, 8, 10, then every length up to 14. At
    each one the cell's north and east edges are measured from (lat, lon).

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        target: Largest acceptable cell edge in meters, or a Precision tier

    Returns:
        The first length whose larger edge is <= target, or 15 if none is
    """
    if isinstance(target, Precision):
        target = target.value

    length = MIN_DIGIT_COUNT
    while length < MAX_DIGIT_COUNT:
        precision_deg = compute_latitude_precision(length)
        height, width = _cell_edges(lat, lon, precision_deg)
        if max(height, width) <= target:
            return length

        if length < PAIR_CODE_LENGTH:
            length += 2
        else:
            length += 1

    return MAX_DIGIT_COUNT
