"""Abstract base class for tabular deal sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from deal_sheets.errors import DealSheetsError
from deal_sheets.filtering import DealFilter
from deal_sheets.models.deal import Deal
from deal_sheets.models.raw import RawTable
from deal_sheets.normalizer import ensure_unique_ids, normalize_table


@dataclass
class ConnectionCheck:
    """Outcome of a lightweight access check against a source."""

    valid: bool
    reason: Optional[str] = None
    error: Optional[DealSheetsError] = None

    @classmethod
    def ok(cls) -> "ConnectionCheck":
        return cls(valid=True)

    @classmethod
    def failed(cls, error: DealSheetsError) -> "ConnectionCheck":
        return cls(valid=False, reason=str(error), error=error)

    def raise_for_error(self) -> None:
        """Re-raise the underlying error when the check failed."""
        if self.error is not None:
            raise self.error


class BaseConnector(ABC):
    """
    Standard interface for deal table sources.
    Connectors implement validate, fetch_table and list_table_names;
    normalization and filtering are shared.
    """

    source_id: str = ""
    default_range: str = "Sheet1"

    @abstractmethod
    def validate(self, spreadsheet_id: Optional[str], credential: str) -> ConnectionCheck:
        """
        Check that the source exists and is readable. Never raises for
        transport outcomes; the failure is reported on the returned check.
        """
        pass

    @abstractmethod
    def fetch_table(
        self,
        spreadsheet_id: Optional[str],
        credential: str,
        range_selector: Optional[str] = None,
    ) -> RawTable:
        """
        Fetch the header row and data rows for one range. None or blank
        selects default_range.
        """
        pass

    @abstractmethod
    def list_table_names(self, spreadsheet_id: Optional[str], credential: str) -> list[str]:
        """
        List sheet names; falls back to the default range on any failure.
        """
        pass

    def normalize(self, table: RawTable) -> list[Deal]:
        """Convert a raw table to candidate deals."""
        return normalize_table(table)

    def fetch_deals(
        self,
        spreadsheet_id: Optional[str],
        credential: str,
        range_selector: Optional[str] = None,
    ) -> list[Deal]:
        """
        Fetch, normalize and filter in one step (no connection check).
        """
        table = self.fetch_table(spreadsheet_id, credential, range_selector)
        return ensure_unique_ids(DealFilter().filter_passed(self.normalize(table)))
