"""Load deal records from Google Sheets into typed, analytics-ready records."""

__version__ = "0.1.0"
