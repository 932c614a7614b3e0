"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Optional

from ..models.domain import Coordinates

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def coordinates_distance_km(a: Optional[Coordinates], b: Optional[Coordinates]) -> Optional[float]:
    """Great-circle distance between two optional points, ``None`` if either is missing."""

    if a is None or b is None:
        return None
    return haversine_km(a.lat, a.lng, b.lat, b.lng)
