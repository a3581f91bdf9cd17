"""Google Sheets API constants."""

BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"
DEFAULT_RANGE = "Sheet1"

# Metadata request returns only sheet titles
METADATA_FIELDS = "sheets.properties.title"

# User-facing reasons for transport outcomes
ACCESS_DENIED_MESSAGE = "Access denied — check sharing settings and credential validity"
NOT_FOUND_MESSAGE = "Spreadsheet not found"
CONNECTION_FAILED_TEMPLATE = "Connection failed: {detail}"
