"""
Geodetic calculations on the WGS84 ellipsoid using Vincenty's formulae.

This module solves the two classic geodetic problems:

- direct: given a start point, an initial bearing and a distance, find the
  destination point
- inverse: given two points, find the distance between them and the
  bearings at each end

Both are iterative. Iteration stops once successive estimates agree to
within EPSILON radians, or fails after MAX_ITERATIONS steps. Failure is
reported through the return value (a NaN point or a result with
success=False), never by raising.

References:
    Vincenty, T. (1975). Direct and inverse solutions of geodesics on the
    ellipsoid with application of nested equations. Survey Review, 23(176).
"""

from dataclasses import dataclass
import math


# WGS84 ellipsoid parameters
WGS84_A = 6378137.0  # semi-major axis in meters
WGS84_B = 6356752.314245  # semi-minor axis in meters
WGS84_F = 1 / 298.257223563  # flattening

WGS84_A_SQ = WGS84_A * WGS84_A
WGS84_B_SQ = WGS84_B * WGS84_B
ONE_MINUS_F = 1.0 - WGS84_F

EPSILON = 1e-12
MAX_ITERATIONS = 100


@dataclass(frozen=True)
class LatLon:
    """
    A latitude/longitude pair in degrees.

    No range is enforced; operations clamp or wrap values as they need.
    """
    lat: float
    lon: float


# Returned by calculate_destination when the iteration does not converge
INVALID_LATLON = LatLon(math.nan, math.nan)


@dataclass(frozen=True)
class InverseResult:
    """
    Result of the inverse geodetic problem.

    Attributes:
        distance: Ellipsoidal distance between the points in meters
        start_azimuth: Forward bearing at the first point, degrees in [0, 360)
        end_azimuth: Bearing from the second point back to the first,
            degrees in [0, 360)
        success: False if the iteration failed to converge, in which case
            the other fields carry no meaning
    """
    distance: float
    start_azimuth: float
    end_azimuth: float
    success: bool


def is_valid_latlon(point: LatLon) -> bool:
    """Check that neither component of a point is NaN."""
    return not (math.isnan(point.lat) or math.isnan(point.lon))


def _series_coefficients(u_sq: float):
    """Vincenty's A and B series coefficients for a given u^2."""
    a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    return a, b


def calculate_destination(start: LatLon, azimuth: float, distance: float) -> LatLon:
    """
    Solve the direct geodetic problem.

    Args:
        start: Starting point in degrees
        azimuth: Initial bearing in degrees (0=North, 90=East, 180=South, 270=West)
        distance: Distance to travel in meters

    Returns:
        Destination point in degrees, or INVALID_LATLON if the iteration
        does not converge
    """
    phi1 = math.radians(start.lat)
    lambda1 = math.radians(start.lon)
    alpha1 = math.radians(azimuth)

    sin_alpha1 = math.sin(alpha1)
    cos_alpha1 = math.cos(alpha1)

    tan_u1 = ONE_MINUS_F * math.tan(phi1)
    cos_u1 = 1 / math.sqrt(1 + tan_u1 * tan_u1)
    sin_u1 = tan_u1 * cos_u1

    sigma1 = math.atan2(tan_u1, cos_alpha1)
    sin_alpha = cos_u1 * sin_alpha1
    cos_sq_alpha = 1 - sin_alpha * sin_alpha
    u_sq = cos_sq_alpha * (WGS84_A_SQ - WGS84_B_SQ) / WGS84_B_SQ
    a, b = _series_coefficients(u_sq)

    sigma = distance / (WGS84_B * a)
    for _ in range(MAX_ITERATIONS):
        sigma_prev = sigma
        cos_2sigma_m = math.cos(2 * sigma1 + sigma)
        sin_sigma = math.sin(sigma)
        cos_sigma = math.cos(sigma)
        sq_cos_2sigma_m = cos_2sigma_m * cos_2sigma_m

        delta_sigma = b * sin_sigma * (
            cos_2sigma_m + b / 4 * (
                cos_sigma * (-1 + 2 * sq_cos_2sigma_m)
                - b / 6 * cos_2sigma_m
                * (-3 + 4 * sin_sigma * sin_sigma)
                * (-3 + 4 * sq_cos_2sigma_m)
            )
        )
        sigma = distance / (WGS84_B * a) + delta_sigma

        if abs(sigma - sigma_prev) < EPSILON:
            break
    else:
        return INVALID_LATLON

    tmp = sin_u1 * sin_sigma - cos_u1 * cos_sigma * cos_alpha1
    phi2 = math.atan2(
        sin_u1 * cos_sigma + cos_u1 * sin_sigma * cos_alpha1,
        ONE_MINUS_F * math.sqrt(sin_alpha * sin_alpha + tmp * tmp),
    )
    lam = math.atan2(
        sin_sigma * sin_alpha1,
        cos_u1 * cos_sigma - sin_u1 * sin_sigma * cos_alpha1,
    )

    c = WGS84_F / 16 * cos_sq_alpha * (4 + WGS84_F * (4 - 3 * cos_sq_alpha))
    l = lam - (1 - c) * WGS84_F * sin_alpha * (
        sigma + c * sin_sigma * (
            cos_2sigma_m + c * cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
        )
    )

    return LatLon(math.degrees(phi2), math.degrees(lambda1 + l))


def calculate_inverse(p1: LatLon, p2: LatLon) -> InverseResult:
    """
    Solve the inverse geodetic problem.

    Points whose latitudes and longitudes both agree to within EPSILON
    degrees are treated as identical. The comparison is on raw degrees,
    not on a physical distance.

    Args:
        p1: First point in degrees
        p2: Second point in degrees

    Returns:
        InverseResult; success is False for non-convergence, which happens
        for nearly antipodal points
    """
    if abs(p1.lat - p2.lat) <= EPSILON and abs(p1.lon - p2.lon) <= EPSILON:
        return InverseResult(0.0, 0.0, 0.0, True)

    phi1 = math.radians(p1.lat)
    phi2 = math.radians(p2.lat)
    l = math.radians(p2.lon) - math.radians(p1.lon)

    tan_u1 = ONE_MINUS_F * math.tan(phi1)
    cos_u1 = 1 / math.sqrt(1 + tan_u1 * tan_u1)
    sin_u1 = tan_u1 * cos_u1

    tan_u2 = ONE_MINUS_F * math.tan(phi2)
    cos_u2 = 1 / math.sqrt(1 + tan_u2 * tan_u2)
    sin_u2 = tan_u2 * cos_u2

    lam = l
    for _ in range(MAX_ITERATIONS):
        lam_prev = lam
        sin_lambda = math.sin(lam)
        cos_lambda = math.cos(lam)

        term1 = cos_u2 * sin_lambda
        term2 = cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lambda
        sin_sigma = math.sqrt(term1 * term1 + term2 * term2)
        if sin_sigma == 0:
            # Coincident points
            return InverseResult(0.0, 0.0, 0.0, True)

        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lambda
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lambda / sin_sigma
        cos_sq_alpha = 1 - sin_alpha * sin_alpha

        if cos_sq_alpha != 0:
            cos_2sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha
        else:
            cos_2sigma_m = 0.0  # equatorial line

        c = WGS84_F / 16 * cos_sq_alpha * (4 + WGS84_F * (4 - 3 * cos_sq_alpha))
        lam = l + (1 - c) * WGS84_F * sin_alpha * (
            sigma + c * sin_sigma * (
                cos_2sigma_m + c * cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
            )
        )

        if abs(lam - lam_prev) <= EPSILON:
            break
    else:
        return InverseResult(0.0, 0.0, 0.0, False)

    u_sq = cos_sq_alpha * (WGS84_A_SQ - WGS84_B_SQ) / WGS84_B_SQ
    a, b = _series_coefficients(u_sq)
    delta_sigma = b * sin_sigma * (
        cos_2sigma_m + b / 4 * (
            cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
            - b / 6 * cos_2sigma_m
            * (-3 + 4 * sin_sigma * sin_sigma)
            * (-3 + 4 * cos_2sigma_m * cos_2sigma_m)
        )
    )
    distance = WGS84_B * a * (sigma - delta_sigma)

    alpha1 = math.atan2(cos_u2 * sin_lambda, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lambda)
    alpha2 = math.atan2(cos_u1 * sin_lambda, -sin_u1 * cos_u2 + cos_u1 * sin_u2 * cos_lambda)

    start_azimuth = math.degrees(alpha1)
    if start_azimuth < 0:
        start_azimuth += 360

    end_azimuth = math.degrees(alpha2) + 180
    if end_azimuth >= 360:
        end_azimuth -= 360

    return InverseResult(distance, start_azimuth, end_azimuth, True)
