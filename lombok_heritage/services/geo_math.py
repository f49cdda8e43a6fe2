"""
Geo Math
Great-circle distances on a spherical Earth (haversine formula)
"""
import math
from typing import Tuple

EARTH_RADIUS_KM = 6371.0


def to_radians(degrees: float) -> float:
    """Convert degrees to radians"""
    return degrees * (math.pi / 180)


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Haversine distance between two coordinates in kilometers.

    Inputs are not validated; NaN propagates.
    """
    d_lat = to_radians(lat2 - lat1)
    d_lng = to_radians(lng2 - lng1)

    a = (math.sin(d_lat / 2) ** 2 +
         math.cos(to_radians(lat1)) * math.cos(to_radians(lat2)) *
         math.sin(d_lng / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_m(point1: Tuple[float, float], point2: Tuple[float, float]) -> float:
    """Haversine distance in meters between two (lat, lng) pairs"""
    return distance_km(point1[0], point1[1], point2[0], point2[1]) * 1000
