"""Google Sheets API v4 connector."""

from .connector import GoogleSheetsConnector

__all__ = ["GoogleSheetsConnector"]
