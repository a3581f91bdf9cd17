"""Pytest fixtures for deal-sheets tests."""

from typing import Any, Callable

import httpx
import pytest

from deal_sheets.connectors.google_sheets import GoogleSheetsConnector
from deal_sheets.models.raw import RawTable



@pytest.fixture
def sample_values() -> list[list[Any]]:
    """Sheets values payload: header row plus two deals and one blank row."""
    return [
        ["deal_id", "deal_name", "broker_name", "deal_value", "status", "process_days",
         "Enquiry Leads", "Opportunity", "1. Application", "Lost date", "From LifeX?"],
        ["D1", "Acme Refinance", "Jo", "$2,000", "Open", "12", "2025-01-02", "2025-01-05", "", "", "Yes"],
        ["D2", "Birch Purchase", "Sam", "$350,500.75", "Lost", "N/A", "2025-02-01", "", "", "2025-03-01"],
        ["", "", "", "", ""],
    ]


@pytest.fixture
def sample_table(sample_values: list[list[Any]]) -> RawTable:
    return RawTable.from_values(sample_values)


@pytest.fixture
def metadata_payload() -> dict:
    return {
        "sheets": [
            {"properties": {"title": "Deals"}},
            {"properties": {"title": "Archive"}},
        ]
    }


@pytest.fixture
def make_connector() -> Callable[..., GoogleSheetsConnector]:
    """
    Build a connector backed by httpx.MockTransport.
    Pass `handler` for full control, or `values`/`metadata` payloads and
    optional `status` for canned responses. Requests are recorded on
    connector.requests.
    """

    def _make(
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        *,
        values: list[list[Any]] | None = None,
        metadata: dict | None = None,
        status: int = 200,
    ) -> GoogleSheetsConnector:
        requests: list[httpx.Request] = []

        def _default(request: httpx.Request) -> httpx.Response:
            if status != 200:
                return httpx.Response(status, json={"error": {"code": status}})
            if "/values/" in request.url.path:
                return httpx.Response(200, json={"values": values} if values is not None else {})
            return httpx.Response(200, json=metadata if metadata is not None else {"sheets": []})

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return (handler or _default)(request)

        client = httpx.Client(transport=httpx.MockTransport(_record))
        connector = GoogleSheetsConnector(client=client)
        connector.requests = requests  # type: ignore[attr-defined]
        return connector

    return _make
