"""PhenotypeClassifier — criteria and symptom counts to type and subtype.

Primary type (four-cluster model):

  1. fewer than ``min_elevated`` (2) elevated criteria → ``unclear``
  2. the ordered type rules, first match wins:
     type-a (all three), type-b (AE+OD), type-c (AE+PCO), type-d (PCO+OD)
  3. no rule matched → the table fallback (``unclear``)

Step 3 cannot be reached with the shipped table, since rules 2 cover every
combination of two or three elevated criteria.  It stays so that an edited
table degrades to ``unclear`` instead of failing.

Secondary subtype is computed from raw answers, independently of the
primary type:

  - ``period``    yes-count over the period signal qids
  - ``metabolic`` yes-count over the metabolic signal qids
  - ``total``     sum of all signals

The two results are never reconciled with each other.
"""

from __future__ import annotations

import logging
from typing import Mapping

from phenotype_rulesets.evaluator import RuleEvaluator
from phenotype_rulesets.models.phenotype import (
    PhenotypeResult,
    PhenotypeSubtype,
    PhenotypeType,
)
from phenotype_rulesets.models.rules import TOTAL_SIGNAL, TypeRule
from phenotype_rulesets.models.scoring import ScoringCriteria
from phenotype_rulesets.ruleset import RulesetStore
from phenotype_rulesets.scorer import count_yes

logger = logging.getLogger(__name__)


class PhenotypeClassifier:
    """Applies the type and subtype tables of a loaded store."""

    def __init__(self, store: RulesetStore, evaluator: RuleEvaluator | None = None) -> None:
        self._store = store
        self._evaluator = evaluator or RuleEvaluator()

    # ------------------------------------------------------------------
    # Primary type
    # ------------------------------------------------------------------

    def match_type_rule(self, criteria: ScoringCriteria) -> TypeRule | None:
        """Rule that decides the type, or None for the precondition/fallback paths."""
        table = self._store.type_table
        if len(criteria.elevated()) < table.min_elevated:
            return None
        return self._evaluator.first_type_rule(table.rules, criteria)

    def classify_type(self, criteria: ScoringCriteria) -> PhenotypeType:
        table = self._store.type_table
        elevated = criteria.elevated()
        if len(elevated) < table.min_elevated:
            logger.debug("type: %d elevated (%s) < %d", len(elevated), elevated, table.min_elevated)
            return PhenotypeType.UNCLEAR

        rule = self._evaluator.first_type_rule(table.rules, criteria)
        if rule is None:
            logger.warning("type: no rule matched elevated=%s, using fallback", elevated)
            return table.fallback

        logger.debug("type: rule '%s' -> %s", rule.name, rule.then.value)
        return rule.then

    # ------------------------------------------------------------------
    # Subtype
    # ------------------------------------------------------------------

    def signal_counts(self, answers: Mapping[str, object]) -> dict[str, int]:
        counts = {
            signal.name: count_yes(answers, signal.qids)
            for signal in self._store.signals
        }
        counts[TOTAL_SIGNAL] = sum(counts.values())
        return counts

    def classify_subtype(self, answers: Mapping[str, object]) -> PhenotypeSubtype:
        table = self._store.subtype_table
        counts = self.signal_counts(answers)
        rule = self._evaluator.first_subtype_rule(table.rules, counts)
        if rule is None:
            logger.debug("subtype: no rule matched counts=%s", counts)
            return table.fallback

        logger.debug("subtype: rule '%s' -> %s (counts=%s)", rule.name, rule.then.value, counts)
        return rule.then

    # ------------------------------------------------------------------
    # Combined
    # ------------------------------------------------------------------

    def classify(
        self, criteria: ScoringCriteria, answers: Mapping[str, object]
    ) -> PhenotypeResult:
        return PhenotypeResult(
            type=self.classify_type(criteria),
            subtype=self.classify_subtype(answers),
            criteria=criteria,
        )
