# This file implements the HTTP client for the public-holiday calendar service.
# It exists so the classifier can ask for one year of holidays without knowing request details.
# Transport, status, and payload problems are converted into one clear exception type.
# The classifier decides what to do with that failure; this module never swallows it.

from __future__ import annotations

import logging

import requests

LOGGER = logging.getLogger("holidays")


class HolidaySourceError(RuntimeError):
    """Raised when the holiday calendar cannot be fetched or has an unexpected shape."""


class HolidaySourceClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def year_url(self, year: int) -> str:
        return f"{self.base_url}/{int(year)}/date.json"

    def fetch_year(self, year: int) -> dict[str, str]:
        """Return `{"YYYY-MM-DD": "<holiday name>"}` for one calendar year."""

        url = self.year_url(year)
        try:
            response = self.session.get(url, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise HolidaySourceError(f"Holiday request failed for {url}: {exc}") from exc

        if response.status_code >= 400:
            raise HolidaySourceError(
                f"Holiday request failed with status {response.status_code} for {url}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise HolidaySourceError(f"Holiday source did not return valid JSON for {url}") from exc

        if not isinstance(payload, dict):
            raise HolidaySourceError(f"Unexpected holiday payload shape from {url}")

        holidays = {str(key): str(value) for key, value in payload.items()}
        LOGGER.info("fetched holidays year=%s entries=%s", year, len(holidays))
        return holidays
