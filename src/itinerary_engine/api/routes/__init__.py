"""Route group exports."""

from . import health, itinerary, travel

__all__ = ["health", "itinerary", "travel"]
