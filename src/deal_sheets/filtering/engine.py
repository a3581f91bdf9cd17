"""Filter engine that drops degenerate rows, with an explanation trail."""

import logging
from typing import Callable, Optional

from pydantic import BaseModel, Field

from deal_sheets.models.deal import Deal

from .rules import apply_content_rule, apply_identity_rule

logger = logging.getLogger(__name__)


class FilterResult(BaseModel):
    """Result of running one candidate deal through the filter rules."""

    passed: bool = Field(..., description="All rules passed")
    explanations: list[str] = Field(default_factory=list)
    deal: Deal = Field(..., description="The candidate that was filtered")
    excluded_by_rule: Optional[str] = Field(
        default=None,
        description="First rule that excluded (identity|content)",
    )


RuleFn = Callable[[Deal], tuple[bool, str, str]]


class DealFilter:
    """
    Applies the post-normalization rules to candidate deals.
    Every rule must pass for a deal to be kept.
    """

    def __init__(self, rules: Optional[list[RuleFn]] = None):
        self._rules: list[RuleFn] = rules or [
            apply_identity_rule,
            apply_content_rule,
        ]

    def filter(self, deal: Deal) -> FilterResult:
        """Apply all rules and return FilterResult with explanation trail."""
        explanations: list[str] = []
        all_passed = True
        excluded_by: Optional[str] = None

        for rule_fn in self._rules:
            passed, explanation, rule_id = rule_fn(deal)
            explanations.append(explanation)
            if not passed:
                all_passed = False
                if excluded_by is None:
                    excluded_by = rule_id

        return FilterResult(
            passed=all_passed,
            explanations=explanations,
            deal=deal,
            excluded_by_rule=excluded_by,
        )

    def filter_many(self, deals: list[Deal]) -> list[FilterResult]:
        """Filter every candidate; returns one result per deal, in order."""
        return [self.filter(d) for d in deals]

    def filter_passed(self, deals: list[Deal]) -> list[Deal]:
        """Return only the deals that passed, preserving order."""
        results = self.filter_many(deals)
        passed = [r.deal for r in results if r.passed]
        dropped = len(results) - len(passed)
        if dropped:
            logger.debug("Dropped %d of %d candidate rows", dropped, len(results))
        return passed
