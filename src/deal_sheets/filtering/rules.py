"""Filter rules: each returns (passed, explanation, rule_id)."""

from deal_sheets.constants import DEFAULT_DEAL_NAME
from deal_sheets.models.deal import Deal


def apply_identity_rule(deal: Deal) -> tuple[bool, str, str]:
    """A deal must carry a non-empty deal_id."""
    if not deal.deal_id.strip():
        return False, "Excluded: empty deal_id", "identity"
    return True, f"Has deal_id {deal.deal_id}", "identity"


def apply_content_rule(deal: Deal) -> tuple[bool, str, str]:
    """
    Sheet artifact check: keep when the name is not the default OR the value
    is positive. A row with neither is a blank or formatting row.
    """
    if deal.deal_name != DEFAULT_DEAL_NAME:
        return True, f"Named deal: {deal.deal_name}", "content"
    if deal.deal_value > 0:
        return True, f"Unnamed but valued at {deal.deal_value:g}", "content"
    return False, "Excluded: default name and zero value (sheet artifact)", "content"
