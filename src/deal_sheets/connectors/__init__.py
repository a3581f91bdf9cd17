"""Source connectors for deal tables."""

from deal_sheets.connectors.base import BaseConnector, ConnectionCheck
from deal_sheets.connectors.google_sheets import GoogleSheetsConnector

__all__ = ["BaseConnector", "ConnectionCheck", "GoogleSheetsConnector"]
