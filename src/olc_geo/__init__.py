"""
olc-geo: Open Location Code (Plus Code) codec with WGS84 geodesy.

This package converts WGS84 (lat, lon) coordinates to and from Plus Codes,
validates, shortens and recovers codes, finds neighbouring cells, and uses
Vincenty's formulae on the WGS84 ellipsoid to relate code cells to sizes in
meters.
"""

__version__ = "1.0.0"

from .quantize import quantize, dequantize, normalize_longitude, clamp_latitude
from .geodesy import (
    LatLon,
    InverseResult,
    INVALID_LATLON,
    calculate_destination,
    calculate_inverse,
    is_valid_latlon,
)
from .area import (
    CodeArea,
    get_center,
    wrapped_center,
    area_width,
    area_height,
    area_size,
    with_center,
    with_location,
    with_width,
    with_height,
    with_size,
    offset,
    from_center_meters,
)
from .codec import encode, encode_default, decode, compute_latitude_precision
from .syntax import is_valid, is_short, is_full, code_length
from .shorten import shorten, recover_nearest
from .neighbors import (
    NeighborDirection,
    Precision,
    get_neighbor,
    get_neighbors,
    get_north_neighbor,
    get_south_neighbor,
    get_east_neighbor,
    get_west_neighbor,
    optimal_code_length,
)
from .duckdb_batch import PlusCodeDatabase, BatchConfig

__all__ = [
    "quantize",
    "dequantize",
    "normalize_longitude",
    "clamp_latitude",
    "LatLon",
    "InverseResult",
    "INVALID_LATLON",
    "calculate_destination",
    "calculate_inverse",
    "is_valid_latlon",
    "CodeArea",
    "get_center",
    "wrapped_center",
    "area_width",
    "area_height",
    "area_size",
    "with_center",
    "with_location",
    "with_width",
    "with_height",
    "with_size",
    "offset",
    "from_center_meters",
    "encode",
    "encode_default",
    "decode",
    "compute_latitude_precision",
    "is_valid",
    "is_short",
    "is_full",
    "code_length",
    "shorten",
    "recover_nearest",
    "NeighborDirection",
    "Precision",
    "get_neighbor",
    "get_neighbors",
    "get_north_neighbor",
    "get_south_neighbor",
    "get_east_neighbor",
    "get_west_neighbor",
    "optimal_code_length",
    "PlusCodeDatabase",
    "BatchConfig",
]
