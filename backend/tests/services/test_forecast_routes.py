"""Forecast Routes — verifies the example resource end-to-end through the pipeline.

Invariants:
    - Reads: 200 envelope (forecast / forecasts), 204 for unknown ids
    - Create: 201 + Location, raw record body; 422 for out-of-range temperatures
    - A 422 from create, update or summary update leaves the store as it was
    - Update: 202 envelope; unknown id rejected with 400 before the pipeline
    - Delete: 202 + raw indicator; unknown id rejected with 400
"""

import re

LOCATION = re.compile(r"^/weatherforecast/[0-9a-f-]{36}$")


async def test_all_weather_returns_every_forecast(client, repo):
    res = await client.get("/weatherforecast/all-weather")
    assert res.status_code == 200
    forecasts = res.json()["data"]["forecasts"]
    assert len(forecasts) == 50
    assert {"id", "date", "temperatureC", "temperatureF", "summary"} <= set(forecasts[0])


async def test_get_single_forecast(client, repo):
    res = await client.get("/weatherforecast/1")
    assert res.status_code == 200
    forecast = res.json()["data"]["forecast"]
    assert forecast["id"] == 1
    assert forecast["temperatureC"] == repo.get(1).temperature_c


async def test_get_unknown_forecast_is_no_content(client):
    res = await client.get("/weatherforecast/999")
    assert res.status_code == 204
    assert res.content == b""


async def test_get_by_summary_filters(client, repo):
    summary = repo.get(1).summary
    res = await client.get(f"/weatherforecast/summary/{summary}")
    assert res.status_code == 200
    forecasts = res.json()["data"]["forecasts"]
    assert forecasts
    assert all(f["summary"] == summary for f in forecasts)


async def test_get_by_unknown_summary_is_empty_list(client):
    res = await client.get("/weatherforecast/summary/Tropical")
    assert res.status_code == 200
    assert res.json() == {"data": {"forecasts": []}}


async def test_create_forecast(client, repo):
    res = await client.post(
        "/weatherforecast", json={"temperatureC": 20, "summary": "Mild"},
    )
    assert res.status_code == 201
    assert LOCATION.match(res.headers["location"])
    created = res.json()
    assert "data" not in created
    assert created["id"] == 51
    assert created["temperatureF"] == 32 + int(20 / 0.5556)
    assert repo.exists(51)


async def test_create_too_hot_is_422(client):
    res = await client.post("/weatherforecast", json={"temperatureC": 50})
    assert res.status_code == 422
    assert res.text == "Temperature is too high."
    assert "location" not in res.headers


async def test_rejected_create_stores_nothing(client, repo):
    res = await client.post("/weatherforecast", json={"temperatureC": 50})
    assert res.status_code == 422
    assert len(repo.get_all()) == 50
    assert not repo.exists(51)


async def test_create_too_cold_is_422(client):
    res = await client.post("/weatherforecast", json={"temperatureC": -40})
    assert res.status_code == 422
    assert res.text == "Temperature is too low."


async def test_create_with_malformed_body_is_400(client):
    res = await client.post("/weatherforecast", json={"temperatureC": "hot"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_update_forecast(client, repo):
    res = await client.put(
        "/weatherforecast", json={"id": 2, "temperatureC": 12, "summary": "Cool"},
    )
    assert res.status_code == 202
    assert res.json()["data"]["forecast"]["summary"] == "Cool"
    assert repo.get(2).temperature_c == 12


async def test_update_failing_validation_is_422(client):
    res = await client.put("/weatherforecast", json={"id": 2, "temperatureC": 41})
    assert res.status_code == 422
    assert res.text == "Temperature is too high."


async def test_rejected_update_leaves_record_unchanged(client, repo):
    before = repo.get(2)
    res = await client.put("/weatherforecast", json={"id": 2, "temperatureC": 41})
    assert res.status_code == 422
    assert repo.get(2) == before


async def test_update_unknown_id_is_400(client):
    res = await client.put("/weatherforecast", json={"id": 999, "temperatureC": 10})
    assert res.status_code == 400
    assert res.text == "Cannot process. ID 999 does not exist"


async def test_update_negative_id_is_400(client):
    res = await client.put("/weatherforecast", json={"id": -1, "temperatureC": 10})
    assert res.status_code == 400


async def test_update_summary(client, repo):
    res = await client.patch("/weatherforecast/summary/3/Balmy")
    assert res.status_code == 202
    assert res.json()["data"]["forecast"]["summary"] == "Balmy"
    assert repo.get(3).summary == "Balmy"


async def test_blank_summary_is_422_and_not_written(client, repo):
    before = repo.get(3).summary
    res = await client.patch("/weatherforecast/summary/3/%20%20")
    assert res.status_code == 422
    assert res.text == "Summary content cannot be empty or whitespace."
    assert repo.get(3).summary == before


async def test_update_summary_unknown_id_is_400(client):
    res = await client.patch("/weatherforecast/summary/999/Balmy")
    assert res.status_code == 400
    assert res.text == "Cannot process. ID 999 does not exist"


async def test_delete_forecast(client, repo):
    res = await client.delete("/weatherforecast/1")
    assert res.status_code == 202
    assert res.json() is True
    assert not repo.exists(1)
    assert (await client.get("/weatherforecast/1")).status_code == 204


async def test_delete_unknown_id_is_400(client):
    res = await client.delete("/weatherforecast/999")
    assert res.status_code == 400
    assert res.text == "Cannot process. ID 999 does not exist"
