"""CriteriaScorer — reduces raw answers to one level per criterion.

For each criterion (AE, PCO, OD) exactly one branch applies:

  - **diagnosed override**: the criterion's diagnosed question is ``yes``,
    level is high and the symptom answers are not consulted
  - **symptom count**: yes-count among the criterion's symptom questions,
    mapped through the rule's ordered thresholds (fallback ``none``)

Only the literal string ``"yes"`` counts.  Missing keys, ``no``,
``unknown``, dropdown strings, and non-string values are all not-yes, so
any answers mapping scores without error.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from phenotype_rulesets.models.rules import CriterionRule
from phenotype_rulesets.models.scoring import (
    CriterionOutcome,
    DiagnosedOverride,
    ScoringCriteria,
    SymptomCount,
)
from phenotype_rulesets.ruleset import RulesetStore

logger = logging.getLogger(__name__)


def is_yes(answers: Mapping[str, object], qid: str) -> bool:
    return answers.get(qid) == "yes"


def count_yes(answers: Mapping[str, object], qids: Iterable[str]) -> int:
    """Number of *qids* answered exactly ``"yes"``."""
    return sum(1 for qid in qids if is_yes(answers, qid))


class CriteriaScorer:
    """Scores answers against the criterion rules of a loaded store."""

    def __init__(self, store: RulesetStore) -> None:
        self._store = store

    def evaluate(
        self, rule: CriterionRule, answers: Mapping[str, object]
    ) -> CriterionOutcome:
        """Resolve a single criterion to its branch outcome."""
        if is_yes(answers, rule.diagnosed_qid):
            return DiagnosedOverride(criterion=rule.criterion, qid=rule.diagnosed_qid)

        yes_count = count_yes(answers, rule.symptom_qids)
        return SymptomCount(
            criterion=rule.criterion,
            yes_count=yes_count,
            total=len(rule.symptom_qids),
            result_level=rule.level_for_count(yes_count),
        )

    def outcomes(self, answers: Mapping[str, object]) -> dict[str, CriterionOutcome]:
        """Branch outcome for every criterion, keyed by criterion."""
        return {
            criterion: self.evaluate(rule, answers)
            for criterion, rule in self._store.criterion_rules.items()
        }

    def score(self, answers: Mapping[str, object]) -> ScoringCriteria:
        """Map answers to ``ScoringCriteria``."""
        outcomes = self.outcomes(answers)
        for outcome in outcomes.values():
            if outcome.branch == "diagnosed":
                logger.debug("%s: diagnosed override via %s", outcome.criterion, outcome.qid)
            else:
                logger.debug(
                    "%s: %d/%d symptoms -> %s",
                    outcome.criterion,
                    outcome.yes_count,
                    outcome.total,
                    outcome.level.value,
                )
        return ScoringCriteria(**{c: o.level for c, o in outcomes.items()})
