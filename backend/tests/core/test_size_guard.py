"""Size Guard — verifies outbound payload measurement and limit enforcement.

Tests:
    - None passes with size 0
    - Size is the compact JSON byte length, null fields excluded
    - Oversize payloads raise PayloadTooLargeError with the exact client message
    - Unencodable payloads raise EncodingFailureError (500), not 413
"""

import pytest

from restful_service.core.errors import EncodingFailureError, PayloadTooLargeError
from restful_service.core.size_guard import check_payload_size, measure_payload
from restful_service.schemas.forecast import WeatherForecast


def test_none_measures_zero():
    assert measure_payload(None) == 0
    assert check_payload_size(None, 0) == 0


def test_measures_compact_json_bytes():
    assert measure_payload({"a": 1}) == len(b'{"a":1}')


def test_null_fields_are_not_counted():
    assert measure_payload({"a": None}) == len(b"{}")


def test_counts_utf8_bytes_not_characters():
    assert measure_payload("é") == len('"é"'.encode())


def test_measures_pydantic_models_by_alias():
    forecast = WeatherForecast(id=1, temperature_c=10)
    assert measure_payload(forecast) > measure_payload({"id": 1})


def test_payload_at_limit_passes():
    payload = {"text": "x" * 10}
    size = measure_payload(payload)
    assert check_payload_size(payload, size) == size


def test_oversize_payload_rejected_with_exact_message():
    payload = {"text": "x" * 4989}
    assert measure_payload(payload) == 5000
    with pytest.raises(PayloadTooLargeError) as exc:
        check_payload_size(payload, 1000)
    assert exc.value.http_status == 413
    assert exc.value.message == "Payload size exceeds the allowed limit of 1000 bytes."
    assert exc.value.actual_bytes == 5000


def test_unencodable_payload_is_encoding_failure():
    with pytest.raises(EncodingFailureError) as exc:
        measure_payload({"handle": object()})
    assert exc.value.http_status == 500
    assert exc.value.message == "Unable to determine payload size."
