"""Request URL builders for the Google Geocoding and Elevation APIs"""

from decimal import Decimal
from urllib.parse import urlencode

from .models import Coordinates

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
ELEVATION_URL = "https://maps.googleapis.com/maps/api/elevation/json"


def format_degrees(value: float) -> str:
    """
    Render a coordinate component in fixed-point notation.

    Never scientific notation (1e-07 becomes 0.0000001). Keeps every digit
    of the shortest repr, so no precision is lost.
    """
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def build_geocode_url(place: str, api_key: str, base_url: str = GEOCODE_URL) -> str:
    """
    Build the Geocoding API request URL for a place description

    Every character of the place text is percent-encoded except unreserved
    ones; spaces become '+'.
    """
    query = urlencode({"address": place, "key": api_key})
    return f"{base_url}?{query}"


def build_elevation_url(coordinates: Coordinates, api_key: str, base_url: str = ELEVATION_URL) -> str:
    """Build the Elevation API request URL for a single coordinate pair"""
    locations = f"{format_degrees(coordinates.latitude)},{format_degrees(coordinates.longitude)}"
    query = urlencode({"locations": locations, "key": api_key}, safe=",")
    return f"{base_url}?{query}"
