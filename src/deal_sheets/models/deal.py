"""Canonical deal record."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from deal_sheets.constants import (
    DEFAULT_BROKER_NAME,
    DEFAULT_DEAL_NAME,
    DEFAULT_STATUS,
    KNOWN_FIELDS,
    LOST_COLUMNS,
    PIPELINE_STAGES,
)


def _filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


class Deal(BaseModel):
    """
    One deal row after normalization.

    Known columns are typed fields; every other sheet column (pipeline stages,
    settlement years, loss tracking, source flags) is carried in ``extra``
    keyed by its header, with ``None`` for empty cells.
    """

    model_config = ConfigDict(frozen=True)

    deal_id: str = Field(..., min_length=1, description="Sheet ID or DEAL-<ms>-<row>")
    deal_name: str = DEFAULT_DEAL_NAME
    broker_name: str = DEFAULT_BROKER_NAME
    status: str = DEFAULT_STATUS
    deal_value: float = Field(default=0.0, ge=0, allow_inf_nan=False)

    created_time: Optional[str] = None
    process_days: Optional[int] = Field(default=None, ge=0)
    latest_date: Optional[str] = None
    new_lead: Optional[str] = None

    extra: dict[str, Any] = Field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        """Flat header -> value mapping; same key set for every deal in a load."""
        record = {name: getattr(self, name) for name in KNOWN_FIELDS}
        record.update(self.extra)
        return record

    def stage_dates(self) -> dict[str, Any]:
        """Filled pipeline stage columns, in pipeline order."""
        return {
            stage: self.extra[stage]
            for stage in PIPELINE_STAGES
            if _filled(self.extra.get(stage))
        }

    def current_stage(self) -> Optional[str]:
        """Furthest pipeline stage with a date, or None."""
        stages = list(self.stage_dates())
        return stages[-1] if stages else None

    def is_lost(self) -> bool:
        return any(_filled(self.extra.get(col)) for col in LOST_COLUMNS)
