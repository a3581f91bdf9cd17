"""Resolve a user-supplied spreadsheet ID or URL to the canonical ID."""

import re
from typing import Optional

# Checked in order; first match wins.
ID_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"id=([a-zA-Z0-9_-]+)"),
)


def extract_spreadsheet_id(value: Optional[str]) -> Optional[str]:
    """
    Extract the spreadsheet ID from a bare ID or a Google Sheets URL.

    Input with no '/' and no '?' is taken as the ID itself (trimmed).
    Otherwise tries /spreadsheets/d/<id>, /d/<id>, then id=<id>.
    Returns None when nothing matches.
    """
    if value is None:
        return None
    if "/" not in value and "?" not in value:
        return value.strip() or None
    for pattern in ID_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return None
