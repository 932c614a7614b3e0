"""Travel estimation services."""

from .estimator import GeoTravelEstimator, describe_route

__all__ = ["GeoTravelEstimator", "describe_route"]
