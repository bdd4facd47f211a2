"""Payload Size — verifies the outbound size guard through a real route.

Invariants:
    - 50 forecasts encode to well over 1000 bytes → 413 with the exact limit message
    - The default limit lets the same payload through
"""

import pytest

from restful_service.config import Settings


async def test_default_limit_allows_all_weather(client):
    res = await client.get("/weatherforecast/all-weather")
    assert res.status_code == 200


class TestSmallLimit:
    @pytest.fixture
    def settings(self):
        return Settings(max_payload_size_bytes=1000)

    async def test_all_weather_is_too_large(self, client):
        res = await client.get("/weatherforecast/all-weather")
        assert res.status_code == 413
        assert res.text == "Payload size exceeds the allowed limit of 1000 bytes."

    async def test_single_forecast_still_fits(self, client):
        res = await client.get("/weatherforecast/1")
        assert res.status_code == 200
