"""Google Sheets connector using the public Sheets API v4 with an API key.

Two endpoints are used:
1. Metadata: GET /{id}?fields=sheets.properties.title (connection check, sheet names)
2. Values: GET /{id}/values/{range} returning {"values": [[header...], [row...], ...]}

The API key travels as the ``key`` query parameter and is never logged or
stored past the call.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from deal_sheets.connectors.base import BaseConnector, ConnectionCheck
from deal_sheets.errors import (
    AccessDenied,
    DealSheetsError,
    EmptyResult,
    HeadersOnly,
    InvalidIdentifier,
    MissingCredential,
    SpreadsheetNotFound,
    TransportError,
    TransportFailure,
)
from deal_sheets.models.raw import RawTable

from .constants import (
    ACCESS_DENIED_MESSAGE,
    BASE_URL,
    CONNECTION_FAILED_TEMPLATE,
    DEFAULT_RANGE,
    METADATA_FIELDS,
    NOT_FOUND_MESSAGE,
)

logger = logging.getLogger(__name__)


def error_for_status(response: httpx.Response, context: dict[str, Any]) -> TransportError:
    """Map a non-success response to AccessDenied / SpreadsheetNotFound / TransportFailure."""
    status = response.status_code
    context = {**context, "status_code": status}
    if status == 403:
        return AccessDenied(ACCESS_DENIED_MESSAGE, context, status_code=status)
    if status == 404:
        return SpreadsheetNotFound(NOT_FOUND_MESSAGE, context, status_code=status)
    detail = response.reason_phrase or f"HTTP {status}"
    return TransportFailure(CONNECTION_FAILED_TEMPLATE.format(detail=detail), context, status_code=status)


class GoogleSheetsConnector(BaseConnector):
    """
    Connector for Google Sheets shared publicly or with the API key's project.
    One request per operation; no retries.
    """

    source_id = "google_sheets"
    default_range = DEFAULT_RANGE

    DEFAULT_HEADERS = {
        "User-Agent": "deal-sheets/0.1",
        "Accept": "application/json",
    }

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
    ):
        """
        Args:
            client: Optional httpx client (tests pass one with a MockTransport)
            base_url: Override the Sheets API base URL
            timeout: Request timeout in seconds for the default client
        """
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )
        self._base_url = (base_url or BASE_URL).rstrip("/")

    def close(self) -> None:
        self._client.close()

    def _require(self, spreadsheet_id: Optional[str], credential: Optional[str]) -> str:
        if not spreadsheet_id or not spreadsheet_id.strip():
            raise InvalidIdentifier()
        if not credential or not credential.strip():
            raise MissingCredential(context={"spreadsheet_id": spreadsheet_id})
        return spreadsheet_id.strip()

    def _metadata_url(self, spreadsheet_id: str) -> str:
        return f"{self._base_url}/{spreadsheet_id}"

    def _values_url(self, spreadsheet_id: str, range_selector: str) -> str:
        return f"{self._base_url}/{spreadsheet_id}/values/{quote(range_selector, safe='')}"

    def _get_json(self, url: str, params: dict[str, str], context: dict[str, Any]) -> dict:
        """GET and decode JSON, raising a TransportError for any failure."""
        try:
            response = self._client.get(url, params=params)
        except httpx.RequestError as e:
            raise TransportFailure(
                CONNECTION_FAILED_TEMPLATE.format(detail=e),
                context,
            ) from e

        if not response.is_success:
            raise error_for_status(response, context)

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportFailure(
                CONNECTION_FAILED_TEMPLATE.format(detail="response was not JSON"),
                context,
                status_code=response.status_code,
            ) from e
        if not isinstance(payload, dict):
            raise TransportFailure(
                CONNECTION_FAILED_TEMPLATE.format(detail="unexpected response shape"),
                context,
                status_code=response.status_code,
            )
        return payload

    def _get_metadata(self, spreadsheet_id: str, credential: str) -> dict:
        return self._get_json(
            self._metadata_url(spreadsheet_id),
            {"key": credential, "fields": METADATA_FIELDS},
            {"spreadsheet_id": spreadsheet_id},
        )

    def validate(self, spreadsheet_id: Optional[str], credential: str) -> ConnectionCheck:
        """Single metadata request; failures come back on the check."""
        try:
            sheet_id = self._require(spreadsheet_id, credential)
            self._get_metadata(sheet_id, credential)
        except DealSheetsError as e:
            logger.info("%s connection check failed for %s: %s", self.source_id, spreadsheet_id, e)
            return ConnectionCheck.failed(e)
        return ConnectionCheck.ok()

    def fetch_table(
        self,
        spreadsheet_id: Optional[str],
        credential: str,
        range_selector: Optional[str] = None,
    ) -> RawTable:
        """
        Fetch a range as a RawTable. The range ('Sheet1', 'Deals!A1:Z999')
        is passed through as given.
        Raises EmptyResult for no rows, HeadersOnly for a lone header row.
        """
        sheet_id = self._require(spreadsheet_id, credential)
        range_selector = range_selector or self.default_range
        context = {"spreadsheet_id": sheet_id, "range": range_selector}

        payload = self._get_json(
            self._values_url(sheet_id, range_selector),
            {"key": credential},
            context,
        )
        values = payload.get("values") or []
        if not values:
            raise EmptyResult(context=context)
        if len(values) == 1:
            raise HeadersOnly(context=context)

        table = RawTable.from_values(values)
        logger.info(
            "Fetched %d rows x %d columns from %s!%s",
            len(table.rows),
            len(table.headers),
            sheet_id,
            range_selector,
        )
        return table

    def list_table_names(self, spreadsheet_id: Optional[str], credential: str) -> list[str]:
        """Sheet titles in workbook order; [default_range] on any failure."""
        try:
            sheet_id = self._require(spreadsheet_id, credential)
            payload = self._get_metadata(sheet_id, credential)
            titles = [
                (sheet.get("properties") or {}).get("title")
                for sheet in payload.get("sheets") or []
            ]
            titles = [t for t in titles if t]
        except Exception as e:
            logger.warning("Could not list sheet names for %s: %s", spreadsheet_id, e)
            return [self.default_range]
        return titles or [self.default_range]
