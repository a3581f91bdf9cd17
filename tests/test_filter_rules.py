"""Unit tests for filter rules."""

from deal_sheets.filtering.rules import apply_content_rule, apply_identity_rule
from deal_sheets.models.deal import Deal


def _make_deal(**kwargs) -> Deal:
    """Minimal deal for testing."""
    defaults = {"deal_id": "DEAL-1700000000000-0"}
    defaults.update(kwargs)
    return Deal(**defaults)


class TestIdentityRule:
    """Tests for apply_identity_rule."""

    def test_has_id_passes(self) -> None:
        passed, exp, rule_id = apply_identity_rule(_make_deal(deal_id="D1"))
        assert passed is True
        assert "D1" in exp
        assert rule_id == "identity"

    def test_whitespace_id_fails(self) -> None:
        passed, exp, _ = apply_identity_rule(_make_deal(deal_id="   "))
        assert passed is False
        assert exp.startswith("Excluded:")


class TestContentRule:
    """Tests for apply_content_rule."""

    def test_default_name_zero_value_fails(self) -> None:
        passed, exp, rule_id = apply_content_rule(_make_deal())
        assert passed is False
        assert "sheet artifact" in exp
        assert rule_id == "content"

    def test_default_name_positive_value_passes(self) -> None:
        passed, _, _ = apply_content_rule(_make_deal(deal_value=5))
        assert passed is True

    def test_real_name_zero_value_passes(self) -> None:
        passed, exp, _ = apply_content_rule(_make_deal(deal_name="Acme"))
        assert passed is True
        assert "Acme" in exp

    def test_literal_default_name_is_treated_as_artifact(self) -> None:
        """A row literally named 'Unnamed Deal' with no value is dropped too."""
        passed, _, _ = apply_content_rule(_make_deal(deal_id="D9", deal_name="Unnamed Deal"))
        assert passed is False
