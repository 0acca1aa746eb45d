"""Shared fixtures: a resolver wired to an in-memory Google Maps stand-in"""

import httpx
import pytest

from services.location import LocationResolver

API_KEY = "test-key"


def google_response(status: str, results=None, http_status: int = 200, **extra) -> httpx.Response:
    """JSON body shaped like a Google Maps web service response"""
    body = {"status": status, "results": results if results is not None else []}
    body.update(extra)
    return httpx.Response(http_status, json=body)


def geocode_result(lat: float, lng: float) -> dict:
    return {"geometry": {"location": {"lat": lat, "lng": lng}, "location_type": "APPROXIMATE"}}


def elevation_result(meters: float, resolution: float = 9.5) -> dict:
    return {"elevation": meters, "resolution": resolution}


class FakeGoogleMaps:
    """
    Records every request and answers from canned responses per API.

    Each canned value is either an httpx.Response or a callable taking the
    request and returning one (or raising an httpx exception).
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.geocode = google_response("ZERO_RESULTS")
        self.elevation = google_response("INVALID_REQUEST")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/geocode/json"):
            answer = self.geocode
        elif request.url.path.endswith("/elevation/json"):
            answer = self.elevation
        else:
            return httpx.Response(404, text="not found")
        return answer(request) if callable(answer) else answer

    def calls(self, api: str) -> int:
        return sum(1 for r in self.requests if r.url.path.endswith(f"/{api}/json"))


@pytest.fixture
def google():
    return FakeGoogleMaps()


@pytest.fixture
def resolver(google):
    client = httpx.Client(transport=httpx.MockTransport(google))
    with LocationResolver(API_KEY, client=client) as resolver:
        yield resolver
    client.close()


def raw_response(text: str, http_status: int = 200) -> httpx.Response:
    return httpx.Response(http_status, content=text.encode(), headers={"Content-Type": "application/json"})
