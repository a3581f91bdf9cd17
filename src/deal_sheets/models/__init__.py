"""Data models for raw sheet tables and normalized deals."""

from deal_sheets.models.deal import Deal
from deal_sheets.models.raw import RawTable

__all__ = ["Deal", "RawTable"]
