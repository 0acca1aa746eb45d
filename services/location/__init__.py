"""Location resolver package"""

from .errors import (
    ConfigurationError,
    LocationResolverError,
    MalformedResponseError,
    ProviderError,
    ResolverTimeoutError,
    TransportError,
)
from .models import Coordinates, Elevation, LocationFix
from .service import LocationResolver
from .urls import build_elevation_url, build_geocode_url

__all__ = [
    "Coordinates",
    "Elevation",
    "LocationFix",
    "LocationResolver",
    "build_geocode_url",
    "build_elevation_url",
    "LocationResolverError",
    "ConfigurationError",
    "ProviderError",
    "TransportError",
    "ResolverTimeoutError",
    "MalformedResponseError",
]
