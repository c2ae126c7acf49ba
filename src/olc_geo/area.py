"""
Decoded code areas and their physical dimensions.

A CodeArea is the rectangle in degrees that a full code stands for, bounded
by its south-west (lo) and north-east (hi) corners. Areas are immutable; the
helpers in this module that move or resize an area return a new one.

Physical sizes are measured on the WGS84 ellipsoid with the Vincenty solver
in geodesy.py.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Tuple
import math

from .geodesy import LatLon, calculate_destination, calculate_inverse
from .quantize import normalize_longitude, LATITUDE_MAX, LONGITUDE_MAX


@dataclass(frozen=True)
class CodeArea:
    """
    An axis-aligned rectangle in degrees produced by decoding a code.

    Attributes:
        lo: South-west corner
        hi: North-east corner
        code_length: Number of significant digits of the decoded code
    """
    lo: LatLon
    hi: LatLon
    code_length: int

    @property
    def south_latitude(self) -> float:
        return self.lo.lat

    @property
    def north_latitude(self) -> float:
        return self.hi.lat

    @property
    def west_longitude(self) -> float:
        return self.lo.lon

    @property
    def east_longitude(self) -> float:
        return self.hi.lon

    @property
    def height_degrees(self) -> float:
        """Extent of the area in degrees of latitude."""
        return self.hi.lat - self.lo.lat

    @property
    def width_degrees(self) -> float:
        """Extent of the area in degrees of longitude."""
        return self.hi.lon - self.lo.lon

    @property
    def center(self) -> LatLon:
        """Center of the area with longitude wrapped, see wrapped_center()."""
        return wrapped_center(self)

    @property
    def location(self) -> LatLon:
        """North-west (top-left) corner of the area."""
        return LatLon(self.hi.lat, self.lo.lon)


def get_center(area: CodeArea) -> LatLon:
    """
    Compute the center of an area.

    The result is capped at 90 degrees latitude and 180 degrees longitude.
    """
    lat = area.lo.lat + (area.hi.lat - area.lo.lat) / 2.0
    if lat > LATITUDE_MAX:
        lat = LATITUDE_MAX

    lon = area.lo.lon + (area.hi.lon - area.lo.lon) / 2.0
    if lon > LONGITUDE_MAX:
        lon = LONGITUDE_MAX

    return LatLon(lat, lon)


def wrapped_center(area: CodeArea) -> LatLon:
    """
    Compute the center of an area, wrapping longitude into [-180, 180).

    Unlike get_center(), an area that straddles the antimeridian keeps a
    center on the far side of it. Used by the metre helpers that move or
    build areas.
    """
    lat = area.lo.lat + (area.hi.lat - area.lo.lat) / 2.0
    lon = area.lo.lon + (area.hi.lon - area.lo.lon) / 2.0
    return LatLon(lat, normalize_longitude(lon))


def area_width(area: CodeArea) -> float:
    """
    Width of the area in meters, measured along its center latitude.

    Returns 0 if the geodesic solver fails to converge.
    """
    mid_lat = area.lo.lat + (area.hi.lat - area.lo.lat) / 2.0
    result = calculate_inverse(LatLon(mid_lat, area.lo.lon), LatLon(mid_lat, area.hi.lon))
    return result.distance if result.success else 0.0


def area_height(area: CodeArea) -> float:
    """
    Height of the area in meters, measured along its western edge.

    Returns 0 if the geodesic solver fails to converge.
    """
    result = calculate_inverse(
        LatLon(area.hi.lat, area.lo.lon), LatLon(area.lo.lat, area.lo.lon)
    )
    return result.distance if result.success else 0.0


def area_size(area: CodeArea) -> Tuple[float, float]:
    """Return (width, height) of the area in meters."""
    return area_width(area), area_height(area)


def with_center(area: CodeArea, center: LatLon) -> CodeArea:
    """Move an area so it is centered on a point, keeping its size in degrees."""
    half_height = (area.hi.lat - area.lo.lat) / 2.0
    half_width = (area.hi.lon - area.lo.lon) / 2.0
    return replace(
        area,
        lo=LatLon(center.lat - half_height, center.lon - half_width),
        hi=LatLon(center.lat + half_height, center.lon + half_width),
    )


def with_location(area: CodeArea, location: LatLon) -> CodeArea:
    """Move an area so its north-west corner is at a point, keeping its size in degrees."""
    height = area.hi.lat - area.lo.lat
    width = area.hi.lon - area.lo.lon
    return replace(
        area,
        lo=LatLon(location.lat - height, location.lon),
        hi=LatLon(location.lat, location.lon + width),
    )


def with_width(area: CodeArea, width_meters: float) -> CodeArea:
    """Resize an area eastwards from its north-west corner to a width in meters."""
    top_right = calculate_destination(area.location, 90.0, width_meters)
    return replace(area, hi=LatLon(area.hi.lat, top_right.lon))


def with_height(area: CodeArea, height_meters: float) -> CodeArea:
    """Resize an area southwards from its north-west corner to a height in meters."""
    bottom_left = calculate_destination(area.location, 180.0, height_meters)
    return replace(area, lo=LatLon(bottom_left.lat, area.lo.lon))


def with_size(area: CodeArea, width_meters: float, height_meters: float) -> CodeArea:
    """Resize an area from its north-west corner, height first then width."""
    return with_width(with_height(area, height_meters), width_meters)


def offset(area: CodeArea, x_meters: float, y_meters: float) -> CodeArea:
    """
    Shift an area by a distance in meters.

    Args:
        area: Area to shift
        x_meters: Eastward shift (negative moves west)
        y_meters: Northward shift (negative moves south)

    Returns:
        A new area with the same size in degrees, centered on the center of
        the original moved along the geodesic with the combined bearing
    """
    if x_meters == 0 and y_meters == 0:
        return area

    distance = math.hypot(x_meters, y_meters)
    azimuth = math.degrees(math.atan2(x_meters, y_meters))
    if azimuth < 0:
        azimuth += 360

    new_center = calculate_destination(wrapped_center(area), azimuth, distance)
    return with_center(area, new_center)


def from_center_meters(center: LatLon, width_meters: float, height_meters: float) -> CodeArea:
    """
    Build an area around a center point from physical dimensions.

    The corners are found by travelling half the height north and south and
    half the width east and west from the center. The code length is the
    shortest one whose cells are no larger than the larger dimension.

    Args:
        center: Center of the area
        width_meters: East-west extent in meters
        height_meters: North-south extent in meters

    Returns:
        The new CodeArea
    """
    from .neighbors import optimal_code_length

    half_width = width_meters * 0.5
    half_height = height_meters * 0.5

    north = calculate_destination(center, 0.0, half_height)
    south = calculate_destination(center, 180.0, half_height)
    east = calculate_destination(center, 90.0, half_width)
    west = calculate_destination(center, 270.0, half_width)

    area = CodeArea(
        lo=LatLon(south.lat, west.lon),
        hi=LatLon(north.lat, east.lon),
        code_length=0,
    )
    mid = wrapped_center(area)
    cell_size = max(width_meters, height_meters)
    return replace(area, code_length=optimal_code_length(mid.lat, mid.lon, cell_size))
