"""Pipeline orchestration: locate -> validate -> fetch -> normalize -> filter."""

import logging
from typing import Optional

from deal_sheets.connectors.base import BaseConnector
from deal_sheets.connectors.google_sheets import GoogleSheetsConnector
from deal_sheets.errors import InvalidIdentifier, MissingCredential
from deal_sheets.filtering import DealFilter
from deal_sheets.locator import extract_spreadsheet_id
from deal_sheets.models.deal import Deal
from deal_sheets.models.raw import RawTable
from deal_sheets.normalizer import ensure_unique_ids

logger = logging.getLogger(__name__)


def resolve_source(source: str, credential: str) -> str:
    """
    Locate the spreadsheet ID and check the credential is present.
    Raises InvalidIdentifier or MissingCredential.
    """
    spreadsheet_id = extract_spreadsheet_id(source)
    if not spreadsheet_id:
        raise InvalidIdentifier(context={"source": source})
    if not credential or not credential.strip():
        raise MissingCredential(context={"spreadsheet_id": spreadsheet_id})
    return spreadsheet_id


def deals_from_table(connector: BaseConnector, table: RawTable, spreadsheet_id: str = "") -> list[Deal]:
    """Normalize a fetched table, drop sheet artifacts, then make ids unique."""
    candidates = connector.normalize(table)
    deals = ensure_unique_ids(DealFilter().filter_passed(candidates))
    logger.info(
        "Loaded %d deals from %s:%s (%d rows, %d filtered out)",
        len(deals),
        connector.source_id,
        spreadsheet_id or "table",
        len(table.rows),
        len(candidates) - len(deals),
    )
    return deals


def load_deals(
    source: str,
    credential: str,
    range_selector: Optional[str] = None,
    *,
    connector: Optional[BaseConnector] = None,
) -> list[Deal]:
    """
    Run the full load for one spreadsheet and return the filtered deals.

    source: bare spreadsheet ID or any supported Sheets URL
    credential: API key, passed through to the connector
    range_selector: sheet name or A1 range, passed through uninterpreted;
        None or blank uses the connector's default_range
    Raises a DealSheetsError subclass on the first failing stage.
    """
    spreadsheet_id = resolve_source(source, credential)
    connector = connector or GoogleSheetsConnector()

    connector.validate(spreadsheet_id, credential).raise_for_error()
    table = connector.fetch_table(spreadsheet_id, credential, range_selector)
    return deals_from_table(connector, table, spreadsheet_id)
