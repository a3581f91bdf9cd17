"""
Row normalization: raw sheet cells -> typed Deal records.

Coercion is deliberately lenient. A cell that cannot be parsed degrades to
the field default instead of failing the load; rows that end up as nothing
but defaults are dropped later by ``deal_sheets.filtering``.
"""

import logging
import math
import re
import time
from datetime import datetime
from typing import Any, Optional

from deal_sheets.constants import (
    BROKER_NAME,
    CREATED_TIME,
    DEAL_ID,
    DEAL_NAME,
    DEAL_VALUE,
    DEFAULT_BROKER_NAME,
    DEFAULT_DEAL_NAME,
    DEFAULT_STATUS,
    KNOWN_FIELDS,
    LATEST_DATE,
    NEW_LEAD,
    PROCESS_DAYS,
    STATUS,
    SYNTHETIC_ID_PREFIX,
)
from deal_sheets.models.deal import Deal
from deal_sheets.models.raw import RawTable

logger = logging.getLogger(__name__)

# Leading numeric prefix, so "1200.50 AUD" -> 1200.5 and "12 days" -> 12
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")
_CURRENCY_CHARS = re.compile(r"[$,]")

_OPTIONAL_TEXT_FIELDS = (CREATED_TIME, LATEST_DATE, NEW_LEAD)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def coerce_deal_value(value: Any) -> float:
    """
    Parse a deal value cell. Text has '$' and ',' stripped before parsing;
    numbers are used as-is. Unparseable, NaN, infinite or negative -> 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        match = _FLOAT_PREFIX.match(_CURRENCY_CHARS.sub("", value))
        if not match:
            return 0.0
        number = float(match.group(0))
    else:
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_process_days(value: Any) -> Optional[int]:
    """Parse a process_days cell. Unparseable or negative -> None, never 0."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        days = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        days = int(value)
    elif isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if not match:
            return None
        days = int(match.group(0))
    else:
        return None
    return days if days >= 0 else None


def map_row(headers: list[str], row: list[Any]) -> dict[str, Any]:
    """
    Key a row's cells by header name. Missing trailing cells become None;
    cells past the last header are ignored; blank headers are skipped.
    """
    mapped: dict[str, Any] = {}
    for col_index, header in enumerate(headers):
        name = (header or "").strip()
        if not name:
            continue
        mapped[name] = row[col_index] if col_index < len(row) else None
    return mapped


def coerce_fields(mapped: dict[str, Any]) -> dict[str, Any]:
    """Apply per-field coercion; fields without a rule pass through unchanged."""
    coerced = dict(mapped)
    if DEAL_VALUE in coerced:
        coerced[DEAL_VALUE] = coerce_deal_value(coerced[DEAL_VALUE])
    if PROCESS_DAYS in coerced:
        coerced[PROCESS_DAYS] = coerce_process_days(coerced[PROCESS_DAYS])
    return coerced


def synthesize_deal_id(stamp_ms: int, row_index: int) -> str:
    return f"{SYNTHETIC_ID_PREFIX}-{stamp_ms}-{row_index}"


def _text_or_default(value: Any, default: str) -> str:
    return default if _is_blank(value) else str(value)


def build_deal(fields: dict[str, Any], deal_id: str) -> Deal:
    """Split coerced fields into typed Deal fields plus the open column map."""
    extra = {k: v for k, v in fields.items() if k not in KNOWN_FIELDS}
    optional_text = {
        name: None if fields.get(name) is None else str(fields[name])
        for name in _OPTIONAL_TEXT_FIELDS
    }
    return Deal(
        deal_id=deal_id,
        deal_name=_text_or_default(fields.get(DEAL_NAME), DEFAULT_DEAL_NAME),
        broker_name=_text_or_default(fields.get(BROKER_NAME), DEFAULT_BROKER_NAME),
        status=_text_or_default(fields.get(STATUS), DEFAULT_STATUS),
        deal_value=fields.get(DEAL_VALUE) or 0.0,
        process_days=fields.get(PROCESS_DAYS),
        extra=extra,
        **optional_text,
    )


def normalize_table(table: RawTable, *, now: Optional[datetime] = None) -> list[Deal]:
    """
    Convert every data row to a candidate Deal, preserving row order.

    Blank deal_id cells get DEAL-<epoch ms>-<row index>; the timestamp is taken
    once per call so ids stay distinct through row index alone. Repeated
    explicit ids are left as-is here; see ensure_unique_ids.
    """
    stamp_ms = int(now.timestamp() * 1000) if now else int(time.time() * 1000)
    deals: list[Deal] = []
    synthesized = 0

    for row_index, row in enumerate(table.rows):
        fields = coerce_fields(map_row(table.headers, row))

        raw_id = fields.get(DEAL_ID)
        if _is_blank(raw_id):
            deal_id = synthesize_deal_id(stamp_ms, row_index)
            synthesized += 1
        else:
            deal_id = str(raw_id).strip()
        deals.append(build_deal(fields, deal_id))

    if synthesized:
        logger.debug("Synthesized deal_id for %d of %d rows", synthesized, len(deals))
    return deals


def ensure_unique_ids(deals: list[Deal]) -> list[Deal]:
    """
    Make deal_ids unique within a result. The first deal keeps its id; later
    repeats get -2, -3, ... Run this on filtered deals so a dropped artifact
    row never claims an id ahead of a real deal.
    """
    seen_ids: set[str] = set()
    counts: dict[str, int] = {}
    unique: list[Deal] = []
    for deal in deals:
        deal_id = deal.deal_id
        while deal_id in seen_ids:
            counts[deal.deal_id] = counts.get(deal.deal_id, 1) + 1
            deal_id = f"{deal.deal_id}-{counts[deal.deal_id]}"
        if deal_id != deal.deal_id:
            logger.warning("Duplicate deal_id %r renamed to %r", deal.deal_id, deal_id)
            deal = deal.model_copy(update={"deal_id": deal_id})
        seen_ids.add(deal_id)
        unique.append(deal)
    return unique
