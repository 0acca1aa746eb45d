"""Location resolver using the Google Maps Geocoding and Elevation APIs"""

import json
import logging
import math
import re
import time

import httpx

from core.config import settings

from .errors import (
    ConfigurationError,
    MalformedResponseError,
    ProviderError,
    ResolverTimeoutError,
    TransportError,
)
from .models import Coordinates, Elevation, LocationFix
from .urls import ELEVATION_URL, GEOCODE_URL, build_elevation_url, build_geocode_url

logger = logging.getLogger(__name__)

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"
STATUS_INVALID_REQUEST = "INVALID_REQUEST"

_KEY_PARAM = re.compile(r"([?&])key=[^&]*")


def _redact(url: str) -> str:
    return _KEY_PARAM.sub(r"\1key=REDACTED", url)


def _number(value, field: str) -> float:
    # bool is an int subclass but never a valid coordinate or elevation
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"Expected a number for '{field}', got {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        raise MalformedResponseError(f"Number for '{field}' is out of range") from e
    if not math.isfinite(number):
        raise MalformedResponseError(f"Expected a finite number for '{field}', got {value!r}")
    return number


class LocationResolver:
    """
    Resolves place descriptions to coordinates and elevation.

    Each operation issues one request per provider and returns a model,
    None when the provider reports no match, or raises a LocationResolverError.
    Holds no per-call state, so one instance can be shared across threads.
    """

    def __init__(
        self,
        api_key: str,
        *,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
        geocode_url: str = GEOCODE_URL,
        elevation_url: str = ELEVATION_URL,
    ):
        """
        Initialize the resolver

        Args:
            api_key: Google Maps API key
            client: HTTP client to send requests with (one is created if omitted)
            timeout: Default request timeout in seconds
            geocode_url: Geocoding API endpoint
            elevation_url: Elevation API endpoint
        """
        if not isinstance(api_key, str) or not api_key.strip():
            raise ConfigurationError(
                "Google Maps API key required. Set GOOGLE_MAPS_API_KEY "
                "environment variable or pass api_key"
            )
        self.api_key = api_key
        self.timeout = timeout
        self.geocode_url = geocode_url
        self.elevation_url = elevation_url

        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls, config=None, client: httpx.Client | None = None) -> "LocationResolver":
        """Build a resolver from application settings (defaults to core.config.settings)"""
        config = config or settings
        return cls(
            config.GOOGLE_MAPS_API_KEY,
            client=client,
            timeout=config.GOOGLE_MAPS_TIMEOUT,
            geocode_url=config.GOOGLE_GEOCODE_URL,
            elevation_url=config.GOOGLE_ELEVATION_URL,
        )

    def close(self):
        """Close the HTTP client if this resolver created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "LocationResolver":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def resolve_coordinates(self, place: str, *, timeout: float | None = None) -> Coordinates | None:
        """
        Convert a place description to coordinates (forward geocoding)

        Args:
            place: Free-text place description
            timeout: Total seconds allowed for the call, body included (defaults to self.timeout)

        Returns:
            Coordinates of the first result, or None on ZERO_RESULTS
        """
        self._check_place(place)
        return self._geocode(place, self._deadline(timeout))

    def resolve_elevation(self, coordinates: Coordinates, *, timeout: float | None = None) -> Elevation | None:
        """
        Look up the elevation (MASL) of a coordinate pair

        Exactly one result is expected per coordinate; if Google returns more,
        the first is used.

        Returns:
            Elevation, or None when Google rejects the coordinates as INVALID_REQUEST
        """
        return self._elevation(coordinates, self._deadline(timeout))

    def resolve(self, place: str, *, timeout: float | None = None) -> LocationFix | None:
        """
        Resolve a place description to coordinates and elevation

        Uses one Geocoding request and, if the place was found, one Elevation
        request. A timeout here bounds both requests together.

        Returns:
            LocationFix, or None if either lookup found nothing
        """
        self._check_place(place)
        deadline = self._deadline(timeout)
        coordinates = self._geocode(place, deadline)
        if coordinates is None:
            return None

        elevation = self._elevation(coordinates, deadline)
        if elevation is None:
            return None

        return LocationFix(place=place, coordinates=coordinates, elevation=elevation)

    def resolve_place_elevation(self, place: str, *, timeout: float | None = None) -> Elevation | None:
        """Elevation (MASL) of a place description, or None if it cannot be resolved"""
        fix = self.resolve(place, timeout=timeout)
        return fix.elevation if fix else None

    def _geocode(self, place: str, deadline: float) -> Coordinates | None:
        data = self._get_json(build_geocode_url(place, self.api_key, self.geocode_url), deadline, "Geocoding")
        status = data["status"]

        if status == STATUS_ZERO_RESULTS:
            logger.info(f"No geocoding results for '{place}'")
            return None
        if status != STATUS_OK:
            raise self._provider_error("Geocoding", data)

        # Google orders results by relevance; the first one wins
        first = self._first_result(data, "Geocoding")
        try:
            location = first["geometry"]["location"]
            lat, lng = location["lat"], location["lng"]
        except (KeyError, TypeError) as e:
            logger.warning(f"Geocoding result for '{place}' lacks geometry.location: {e!r}")
            raise MalformedResponseError(f"Geocoding result missing geometry.location field {e}") from e

        return Coordinates(latitude=_number(lat, "lat"), longitude=_number(lng, "lng"))

    def _elevation(self, coordinates: Coordinates, deadline: float) -> Elevation | None:
        url = build_elevation_url(coordinates, self.api_key, self.elevation_url)
        data = self._get_json(url, deadline, "Elevation")
        status = data["status"]

        if status == STATUS_INVALID_REQUEST:
            logger.info(
                f"Elevation unavailable for {coordinates.latitude},{coordinates.longitude}: "
                f"{data.get('error_message', status)}"
            )
            return None
        if status != STATUS_OK:
            raise self._provider_error("Elevation", data)

        first = self._first_result(data, "Elevation")
        if "elevation" not in first:
            raise MalformedResponseError("Elevation result missing 'elevation' field")

        resolution = first.get("resolution")
        return Elevation(
            meters=_number(first["elevation"], "elevation"),
            resolution=_number(resolution, "resolution") if resolution is not None else None,
        )

    def _check_place(self, place: str):
        if not isinstance(place, str) or not place.strip():
            raise ConfigurationError("Place description must be a non-empty string")

    def _deadline(self, timeout: float | None) -> float:
        budget = self.timeout if timeout is None else timeout
        return time.monotonic() + budget

    def _remaining(self, deadline: float, api: str) -> float:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.error(f"{api} request exceeded its deadline")
            raise ResolverTimeoutError(f"{api} request exceeded its deadline")
        return remaining

    def _read_body(self, response: httpx.Response, deadline: float, api: str) -> bytes:
        """
        Read the streamed body, checking the deadline after every chunk.

        httpx timeouts apply per socket operation, so a server trickling bytes
        would never trip them on its own.
        """
        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            self._remaining(deadline, api)
        return b"".join(chunks)

    def _get_json(self, url: str, deadline: float, api: str) -> dict:
        """Send one GET request and return the decoded JSON object"""
        # each socket wait is capped at the budget left when the request starts
        timeout = self._remaining(deadline, api)
        logger.debug(f"{api} request: GET {_redact(url)}")
        try:
            with self.client.stream("GET", url, timeout=timeout) as response:
                body = self._read_body(response, deadline, api)
        except httpx.TimeoutException as e:
            logger.error(f"{api} request timed out: {e}")
            raise ResolverTimeoutError(f"{api} request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"{api} request failed: {e}")
            raise TransportError(f"{api} request failed: {e}") from e

        try:
            data = json.loads(body)
        except ValueError as e:
            if response.is_error:
                raise TransportError(
                    f"{api} request returned HTTP {response.status_code}",
                    status_code=response.status_code,
                ) from e
            logger.warning(f"{api} response is not valid JSON: {e}")
            raise MalformedResponseError(f"{api} response is not valid JSON") from e

        # Google reports errors such as INVALID_REQUEST with a 4xx code and a
        # status in the body; a 4xx/5xx without one is a transport failure
        if not isinstance(data, dict) or not isinstance(data.get("status"), str):
            if response.is_error:
                raise TransportError(
                    f"{api} request returned HTTP {response.status_code}",
                    status_code=response.status_code,
                )
            logger.warning(f"{api} response has no 'status' field")
            raise MalformedResponseError(f"{api} response has no 'status' field")

        return data

    def _first_result(self, data: dict, api: str) -> dict:
        results = data.get("results")
        if not isinstance(results, list) or not results:
            logger.warning(f"{api} response is OK but has no results")
            raise MalformedResponseError(f"{api} response is OK but 'results' is empty or missing")
        first = results[0]
        if not isinstance(first, dict):
            raise MalformedResponseError(f"{api} result is not an object: {first!r}")
        return first

    def _provider_error(self, api: str, data: dict) -> ProviderError:
        status = data["status"]
        error_message = data.get("error_message")
        logger.warning(f"{api} API returned {status}: {error_message or 'no message'}")
        return ProviderError(status, error_message)
