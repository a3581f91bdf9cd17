#!/usr/bin/env python3
"""Quick live test of the connection check + values fetch against a real sheet.

Run:
  DEAL_SHEETS_API_KEY=... poetry run python scripts/check_sheet_live.py <sheet id or URL>
  DEAL_SHEETS_API_KEY=... poetry run python scripts/check_sheet_live.py <sheet> 'Deals!A1:Z200'
"""

import sys

from deal_sheets.config import LoadSettings
from deal_sheets.connectors.google_sheets import GoogleSheetsConnector
from deal_sheets.errors import DealSheetsError
from deal_sheets.locator import extract_spreadsheet_id
from deal_sheets.pipeline import load_deals


def main() -> None:
    settings = LoadSettings.from_env()
    source = sys.argv[1] if len(sys.argv) > 1 else settings.spreadsheet
    range_selector = sys.argv[2] if len(sys.argv) > 2 else settings.range
    if not source:
        raise SystemExit("Pass a sheet ID/URL or set DEAL_SHEETS_SPREADSHEET")

    connector = GoogleSheetsConnector(base_url=settings.base_url)
    print(f"Sheets: {connector.list_table_names(extract_spreadsheet_id(source), settings.api_key or '')}")
    try:
        deals = load_deals(source, settings.api_key or "", range_selector, connector=connector)
    except DealSheetsError as e:
        print(f"\n⚠️ Load failed: {e}")
        return

    print(f"Got {len(deals)} deals")
    for i, d in enumerate(deals[:5], 1):
        print(f"  {i}. [{d.status}] {d.deal_name} ({d.broker_name}) value={d.deal_value:,.2f}")
    print("\n✅ Check + fetch flow succeeded.")


if __name__ == "__main__":
    main()
