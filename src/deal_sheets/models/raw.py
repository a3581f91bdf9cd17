"""Raw table representation before normalization."""

from typing import Any

from pydantic import BaseModel, Field


class RawTable(BaseModel):
    """
    Header row plus data rows as returned by the Sheets values endpoint.
    Rows may be shorter than the header row (trailing empty cells are omitted).
    """

    headers: list[str] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)

    @classmethod
    def from_values(cls, values: list[list[Any]]) -> "RawTable":
        """Split a ``values`` array into header row and data rows."""
        if not values:
            return cls()
        header_row, *rows = values
        headers = ["" if h is None else str(h) for h in header_row]
        return cls(headers=headers, rows=[list(r) for r in rows])
