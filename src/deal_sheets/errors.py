"""
Exceptions raised while loading deals from a spreadsheet.

Every error is terminal for the current load attempt; retry policy belongs
to the caller. ``str(error)`` is the human-readable reason to show a user.
Row-level coercion problems are never raised (see ``deal_sheets.normalizer``).
"""

from typing import Any


class DealSheetsError(Exception):
    """Base exception for all deal-sheets errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Input errors
# =============================================================================


class InvalidIdentifier(DealSheetsError):
    """The spreadsheet ID or URL could not be resolved."""

    def __init__(self, message: str = "Invalid spreadsheet ID or URL", context: dict[str, Any] | None = None):
        super().__init__(message, context)


class MissingCredential(DealSheetsError):
    """No API key was supplied."""

    def __init__(self, message: str = "API key is required", context: dict[str, Any] | None = None):
        super().__init__(message, context)


# =============================================================================
# Transport errors
# =============================================================================


class TransportError(DealSheetsError):
    """Base class for non-success responses from the Sheets API."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, context)
        self.status_code = status_code


class AccessDenied(TransportError):
    """403: sheet is private or the key is invalid."""


class SpreadsheetNotFound(TransportError):
    """404: no spreadsheet (or range) with that ID."""


class TransportFailure(TransportError):
    """Any other non-success status or a network error."""


# =============================================================================
# Result errors
# =============================================================================


class EmptyResult(DealSheetsError):
    """The requested range returned no rows at all."""

    def __init__(self, message: str = "No data found in the specified range", context: dict[str, Any] | None = None):
        super().__init__(message, context)


class HeadersOnly(DealSheetsError):
    """The requested range returned a header row and nothing else."""

    def __init__(self, message: str = "Sheet contains headers but no data rows", context: dict[str, Any] | None = None):
        super().__init__(message, context)


class NoDeals(DealSheetsError):
    """Every data row was filtered out as a sheet artifact."""

    def __init__(self, message: str = "No valid deals found in the sheet", context: dict[str, Any] | None = None):
        super().__init__(message, context)


class LoadSuperseded(DealSheetsError):
    """A newer load started (or the caller cancelled) before this one finished."""

    def __init__(self, message: str = "Load superseded by a newer request", context: dict[str, Any] | None = None):
        super().__init__(message, context)
