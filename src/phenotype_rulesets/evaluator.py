"""RuleEvaluator — walks the ordered phenotype decision tables.

Two tables exist, both first-match-wins:

  - **type rules**: match on whether each criterion is elevated
  - **subtype rules**: AND-ed predicates over symptom signal counts

Returns the matching rule, or ``None`` when no rule matched so the caller
can apply the table's fallback.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from phenotype_rulesets.models.rules import (
    SignalPredicate,
    SubtypeRule,
    TypeRule,
)
from phenotype_rulesets.models.scoring import ScoringCriteria

logger = logging.getLogger(__name__)


class RuleEvaluator:
    """Evaluates decision-table rules against criteria or signal counts."""

    def first_type_rule(
        self, rules: Sequence[TypeRule], criteria: ScoringCriteria
    ) -> TypeRule | None:
        for rule in rules:
            if rule.matches(criteria):
                return rule
        return None

    def first_subtype_rule(
        self, rules: Sequence[SubtypeRule], counts: Mapping[str, int]
    ) -> SubtypeRule | None:
        """Evaluate subtype rules in order; first rule whose predicates all pass wins."""
        for rule in rules:
            if all(self._eval_predicate(pred, counts) for pred in rule.when):
                return rule
        return None

    # ------------------------------------------------------------------
    # Predicate evaluation
    # ------------------------------------------------------------------

    def _eval_predicate(self, pred: SignalPredicate, counts: Mapping[str, int]) -> bool:
        """Evaluate a single predicate; an absent signal counts as 0."""
        return self._compare(pred.op, counts.get(pred.signal, 0), pred.value)

    @staticmethod
    def _compare(op: str, count: int, value: int) -> bool:
        if op == "eq":
            return count == value
        if op == "ne":
            return count != value
        if op == "lt":
            return count < value
        if op == "le":
            return count <= value
        if op == "gt":
            return count > value
        if op == "ge":
            return count >= value

        logger.warning("Unknown predicate operator: %s", op)
        return False
