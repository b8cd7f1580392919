"""Tests for the Nominatim geocoder against a mocked HTTP transport."""

import httpx
import pytest

from core.domain.models import Coordinate
from infrastructure.geocoding.nominatim import NominatimGeocoder

URL = "https://geo.test/search"


def _geocoder(handler, **kwargs):
    return NominatimGeocoder(
        base_url=URL,
        user_agent="LeagueHubTests/1.0",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestNominatimGeocoder:

    @pytest.mark.asyncio
    async def test_returns_first_result(self):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json=[
                {"lat": "40.6782", "lon": "-73.9442", "display_name": "Brooklyn"},
                {"lat": "1", "lon": "1"},
            ])

        coordinate = await _geocoder(handler, country_codes="us").geocode("Brooklyn")

        assert coordinate == Coordinate(latitude=40.6782, longitude=-73.9442)
        request = seen["request"]
        assert request.url.params["q"] == "Brooklyn"
        assert request.url.params["format"] == "json"
        assert request.url.params["limit"] == "1"
        assert request.url.params["countrycodes"] == "us"
        assert request.headers["User-Agent"] == "LeagueHubTests/1.0"

    @pytest.mark.asyncio
    async def test_country_filter_can_be_disabled(self):
        seen = {}

        def handler(request):
            seen["params"] = request.url.params
            return httpx.Response(200, json=[{"lat": "51.5", "lon": "-0.12"}])

        await _geocoder(handler, country_codes="").geocode("London")

        assert "countrycodes" not in seen["params"]

    @pytest.mark.asyncio
    async def test_no_results(self):
        coordinate = await _geocoder(lambda request: httpx.Response(200, json=[])).geocode("Atlantis")
        assert coordinate is None

    @pytest.mark.asyncio
    async def test_http_error(self):
        coordinate = await _geocoder(lambda request: httpx.Response(503)).geocode("Brooklyn")
        assert coordinate is None

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        assert await _geocoder(handler).geocode("Brooklyn") is None

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        coordinate = await _geocoder(lambda request: httpx.Response(200, text="<html>")).geocode("Brooklyn")
        assert coordinate is None

    @pytest.mark.asyncio
    async def test_malformed_result(self):
        coordinate = await _geocoder(
            lambda request: httpx.Response(200, json=[{"lat": "north"}])
        ).geocode("Brooklyn")
        assert coordinate is None
