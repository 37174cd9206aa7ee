"""Distance helpers in miles.

``destination_point`` uses a flat-earth approximation (about 69 miles per
degree of latitude, longitude scaled by the cosine of the origin latitude).
It is accurate enough for metro-area search radii up to roughly 50 miles and
drifts at high latitudes or long distances.
"""

from __future__ import annotations

import math
import random

MILES_PER_DEGREE_LATITUDE = 69.0
EARTH_RADIUS_MILES = 3958.8


def destination_point(
    latitude: float,
    longitude: float,
    bearing: float,
    distance: float,
) -> tuple[float, float]:
    """Offset an origin by ``distance`` miles along ``bearing`` radians.

    A bearing of 0 points north and ``pi / 2`` points east.
    """
    degrees = distance / MILES_PER_DEGREE_LATITUDE
    new_latitude = latitude + degrees * math.cos(bearing)
    new_longitude = longitude + degrees * math.sin(bearing) / math.cos(math.radians(latitude))
    return new_latitude, new_longitude


def haversine_miles(
    latitude1: float,
    longitude1: float,
    latitude2: float,
    longitude2: float,
) -> float:
    """Great-circle distance between two coordinates in miles."""
    phi1 = math.radians(latitude1)
    phi2 = math.radians(latitude2)
    delta_phi = math.radians(latitude2 - latitude1)
    delta_lambda = math.radians(longitude2 - longitude1)
    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_MILES * math.asin(min(1.0, math.sqrt(a)))


def random_point_within(
    rng: random.Random,
    latitude: float,
    longitude: float,
    max_distance: float,
) -> tuple[float, float, float]:
    """Sample a point up to ``max_distance`` miles away.

    Returns ``(latitude, longitude, distance)``.
    """
    bearing = rng.random() * math.pi * 2
    distance = rng.random() * max_distance
    new_latitude, new_longitude = destination_point(latitude, longitude, bearing, distance)
    return new_latitude, new_longitude, distance
