# This test file validates the holiday calendar HTTP client against canned responses.
# It exists so URL building and failure translation stay stable if the upstream service changes.
# A fake session stands in for requests so no test touches the network.

from __future__ import annotations

from typing import Any

import pytest
import requests

from dayuse_pricing.holidays.holiday_source import HolidaySourceClient, HolidaySourceError


class _FakeResponse:
    def __init__(self, *, status_code: int, payload: Any = None, invalid_json: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, raise_error: Exception | None = None) -> None:
        self.response = response
        self.raise_error = raise_error
        self.calls: list[tuple[str, int]] = []

    def get(self, url: str, timeout: int) -> _FakeResponse:
        self.calls.append((url, timeout))
        if self.raise_error is not None:
            raise self.raise_error
        assert self.response is not None
        return self.response


def test_fetch_year_returns_date_to_name_mapping() -> None:
    session = _FakeSession(
        _FakeResponse(status_code=200, payload={"2024-01-01": "New Year's Day", "2024-01-08": "Coming of Age Day"})
    )
    client = HolidaySourceClient(base_url="https://holidays.example.test/api/v1/", timeout_seconds=3, session=session)

    holidays = client.fetch_year(2024)

    assert holidays == {"2024-01-01": "New Year's Day", "2024-01-08": "Coming of Age Day"}
    assert session.calls == [("https://holidays.example.test/api/v1/2024/date.json", 3)]


def test_fetch_year_raises_on_transport_error() -> None:
    session = _FakeSession(raise_error=requests.ConnectionError("connection refused"))
    client = HolidaySourceClient(base_url="https://holidays.example.test/api/v1", session=session)

    with pytest.raises(HolidaySourceError, match="Holiday request failed"):
        client.fetch_year(2024)


def test_fetch_year_raises_on_http_error_status() -> None:
    session = _FakeSession(_FakeResponse(status_code=404, payload={}))
    client = HolidaySourceClient(base_url="https://holidays.example.test/api/v1", session=session)

    with pytest.raises(HolidaySourceError, match="status 404"):
        client.fetch_year(1999)


@pytest.mark.parametrize(
    "response",
    [
        _FakeResponse(status_code=200, invalid_json=True),
        _FakeResponse(status_code=200, payload=["2024-01-01"]),
    ],
)
def test_fetch_year_rejects_unusable_payloads(response: _FakeResponse) -> None:
    client = HolidaySourceClient(base_url="https://holidays.example.test/api/v1", session=_FakeSession(response))

    with pytest.raises(HolidaySourceError):
        client.fetch_year(2024)
