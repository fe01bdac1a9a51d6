# tests/test_reverse_geocoder.py
"""
Reverse Geocoder Tests - Ordered Fallback Across Services

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- geofx.application.reverse_geocoder (ReverseGeocoder)
- tests.conftest (FakeHttpClient)
"""
import pytest

from conftest import FakeHttpClient, bigdatacloud_body
from geofx.adapters.geocoders import BigDataCloudGeocoder, GeocodeXyzGeocoder, PositionstackGeocoder
from geofx.adapters.http_client import HttpTimeout
from geofx.application.reverse_geocoder import ReverseGeocoder, default_geocoders
from geofx.domain.errors import GeocodeUnavailable
from geofx.domain.models import GeocodeResult


def _geocoder(client):
    return ReverseGeocoder(
        client,
        geocoders=[BigDataCloudGeocoder(), GeocodeXyzGeocoder(), PositionstackGeocoder(access_key="x")],
        timeout=1,
    )


class TestReverseGeocoder:
    def test_default_order(self):
        names = [g.name for g in default_geocoders()]
        assert names == ["bigdatacloud", "geocode.xyz", "positionstack"]

    @pytest.mark.asyncio
    async def test_first_service_wins(self):
        client = FakeHttpClient({
            "bigdatacloud": bigdatacloud_body(),
            "geocode.xyz": {"prov": "GH", "country": "Ghana"},
        })
        result = await _geocoder(client).reverse(6.5, 3.4)
        assert result == GeocodeResult("NG", "Nigeria", "Lagos")
        assert client.calls_to("geocode.xyz") == []

    @pytest.mark.asyncio
    async def test_falls_through_on_error_and_empty_result(self):
        client = FakeHttpClient({
            "bigdatacloud": HttpTimeout("bigdatacloud timeout after 1s"),
            "geocode.xyz": {"error": {"description": "Throttled"}},
            "positionstack": {"data": [{"country_code": "KE", "country": "Kenya", "locality": "Nairobi"}]},
        })
        result = await _geocoder(client).reverse(-1.29, 36.82)
        assert result == GeocodeResult("KE", "Kenya", "Nairobi")
        assert [call[0] for call in client.calls] == ["bigdatacloud", "geocode.xyz", "positionstack"]

    @pytest.mark.asyncio
    async def test_each_service_tried_once_then_unavailable(self):
        client = FakeHttpClient({"bigdatacloud": {"countryCode": "", "countryName": ""}})
        with pytest.raises(GeocodeUnavailable):
            await _geocoder(client).reverse(0.0, 0.0)
        assert len(client.calls) == 3

    @pytest.mark.asyncio
    async def test_parser_crash_moves_on(self):
        class Broken(BigDataCloudGeocoder):
            def parse(self, data):
                raise TypeError("unexpected shape")

        client = FakeHttpClient({
            "bigdatacloud": bigdatacloud_body(),
            "geocode.xyz": {"prov": "GH", "country": "Ghana", "city": "Accra"},
        })
        geocoder = ReverseGeocoder(client, geocoders=[Broken(), GeocodeXyzGeocoder()], timeout=1)
        assert (await geocoder.reverse(5.6, -0.2)).country_code == "GH"
