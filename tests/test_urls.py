"""
Tests for request URL construction

The builders are pure, so these run without any transport.
"""

from urllib.parse import parse_qs, urlsplit

import pytest

from services.location import Coordinates, build_elevation_url, build_geocode_url
from services.location.urls import format_degrees


def query_of(url: str) -> dict:
    return parse_qs(urlsplit(url).query)


def test_geocode_url_matches_google_format():
    url = build_geocode_url("1600 Amphitheatre Parkway, Mountain View, CA", "KEY")

    assert url == (
        "https://maps.googleapis.com/maps/api/geocode/json"
        "?address=1600+Amphitheatre+Parkway%2C+Mountain+View%2C+CA&key=KEY"
    )


def test_geocode_url_is_deterministic():
    assert build_geocode_url("Trondheim", "KEY") == build_geocode_url("Trondheim", "KEY")


@pytest.mark.parametrize(
    "first, second",
    [
        ("Trondheim", "trondheim"),
        ("a b", "a+b"),
        ("a b", "a%20b"),
        ("A&B", "A"),
        ("Oslo#1", "Oslo"),
        ("Main St/2", "Main St 2"),
    ],
)
def test_distinct_places_give_distinct_urls(first, second):
    assert build_geocode_url(first, "KEY") != build_geocode_url(second, "KEY")


@pytest.mark.parametrize(
    "place",
    [
        "A&B #1/2+3",
        "100% sure? key=evil",
        "Tromsø, Norway",
        "東京タワー",
        "  leading and trailing  ",
    ],
)
def test_special_characters_round_trip(place):
    url = build_geocode_url(place, "KEY")

    query = query_of(url)
    assert query["address"] == [place]
    assert query["key"] == ["KEY"]


def test_reserved_characters_are_percent_encoded():
    url = build_geocode_url("A&B #1/2+3?", "KEY")

    assert "address=A%26B+%231%2F2%2B3%3F&key=KEY" in url
    assert "#" not in url


def test_api_key_is_encoded():
    url = build_geocode_url("Oslo", "a&b=c")

    assert query_of(url)["key"] == ["a&b=c"]


def test_custom_base_url():
    url = build_geocode_url("Oslo", "KEY", base_url="http://proxy.local/geocode/json")

    assert url.startswith("http://proxy.local/geocode/json?address=Oslo")


def test_elevation_url_matches_google_format():
    url = build_elevation_url(Coordinates(latitude=39.7391536, longitude=-104.9847034), "KEY")

    assert url == (
        "https://maps.googleapis.com/maps/api/elevation/json"
        "?locations=39.7391536,-104.9847034&key=KEY"
    )


def test_elevation_url_keeps_zero_coordinates():
    url = build_elevation_url(Coordinates(latitude=0.0, longitude=0.0), "KEY")

    assert query_of(url)["locations"] == ["0,0"]


@pytest.mark.parametrize(
    "value, expected",
    [
        (45, "45"),
        (63.4305149, "63.4305149"),
        (-10.5, "-10.5"),
        (1e-7, "0.0000001"),
        (3e-11, "0.00000000003"),
        (1.23456789012345e-5, "0.0000123456789012345"),
        (-0.0, "0"),
    ],
)
def test_format_degrees_is_fixed_point_and_lossless(value, expected):
    assert format_degrees(value) == expected
