"""PhenotypeEngine — single entry point from answers to a rendered-ready result.

The engine composes the three stages:

  1. ``CriteriaScorer``       answers → ScoringCriteria
  2. ``PhenotypeClassifier``  criteria (+ answers) → PhenotypeResult
  3. ``to_metrics``           criteria → PCOSMetrics

Every call recomputes from scratch.  The caller owns the answers mapping,
mutates it on each form change and calls :meth:`PhenotypeEngine.assess`
again; the engine keeps no state between calls and never mutates its input.
"""

from __future__ import annotations

import logging
from typing import Mapping

from phenotype_rulesets.classifier import PhenotypeClassifier
from phenotype_rulesets.constants import TOGGLE_VALUES
from phenotype_rulesets.models.phenotype import (
    Assessment,
    PhenotypeResult,
    PhenotypeSubtype,
    PhenotypeType,
)
from phenotype_rulesets.models.question import Answers
from phenotype_rulesets.models.scoring import PCOSMetrics, ScoringCriteria
from phenotype_rulesets.projection import to_metrics
from phenotype_rulesets.ruleset import RulesetStore
from phenotype_rulesets.scorer import CriteriaScorer

logger = logging.getLogger(__name__)


# Display labels for every type and subtype value.  These mirror
# v1/const/phenotypes.yaml so callers without a loaded store can still
# label a result.
PHENOTYPE_LABELS: dict[str, str] = {
    "unclear": "Unclear - Not enough data",
    "type-a": "Type A: Androgen excess, ovulatory dysfunction and polycystic ovaries",
    "type-b": "Type B: Androgen excess and ovulatory dysfunction",
    "type-c": "Type C: Androgen excess and polycystic ovaries",
    "type-d": "Type D: Ovulatory dysfunction and polycystic ovaries",
    "reproductive": "Reproductive Phenotype",
    "metabolic": "Metabolic Phenotype",
    "mixed": "Mixed Phenotype",
}


def get_phenotype_label(value: PhenotypeType | PhenotypeSubtype | str) -> str:
    """Human-readable label for a type or subtype value.

    Raises:
        KeyError: if *value* is not one of the eight type/subtype values.
    """
    return PHENOTYPE_LABELS[getattr(value, "value", value)]


class PhenotypeEngine:
    """Stateless orchestrator over a loaded :class:`RulesetStore`."""

    def __init__(self, store: RulesetStore) -> None:
        self._store = store
        self.scorer = CriteriaScorer(store)
        self.classifier = PhenotypeClassifier(store)

    @property
    def store(self) -> RulesetStore:
        return self._store

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def score(self, answers: Mapping[str, object]) -> ScoringCriteria:
        return self.scorer.score(answers)

    def classify(self, answers: Mapping[str, object]) -> PhenotypeResult:
        return self.classifier.classify(self.score(answers), answers)

    def metrics(self, answers: Mapping[str, object]) -> PCOSMetrics:
        return to_metrics(self.score(answers))

    def assess(self, answers: Mapping[str, object]) -> Assessment:
        """Score, classify and project *answers* in one pass."""
        criteria = self.score(answers)
        result = self.classifier.classify(criteria, answers)
        assessment = Assessment(
            result=result,
            metrics=to_metrics(criteria),
            type_label=self.label(result.type),
            subtype_label=self.label(result.subtype),
        )
        logger.debug(
            "assess: criteria=%s type=%s subtype=%s",
            criteria.model_dump(mode="json"),
            result.type.value,
            result.subtype.value,
        )
        return assessment

    # ------------------------------------------------------------------
    # Helpers for form collaborators
    # ------------------------------------------------------------------

    def label(self, value: PhenotypeType | PhenotypeSubtype | str) -> str:
        """Label from the loaded content, falling back to the built-in table."""
        key = getattr(value, "value", value)
        if key in self._store.phenotypes:
            return self._store.get_label(key)
        return get_phenotype_label(key)

    def initial_answers(self) -> Answers:
        """A fresh form: every toggle ``unknown``, every dropdown empty."""
        return {q.id: q.blank_answer() for q in self._store.questions}

    def validate_answers(self, answers: Mapping[str, object]) -> list[str]:
        """Describe answers a form should flag; never raises.

        Reports unknown question ids, toggle answers outside yes/no/unknown,
        and dropdown answers that are not one of the question's options.
        Scoring ignores all of these anyway.
        """
        problems: list[str] = []
        for qid, value in answers.items():
            if not self._store.has_question(qid):
                problems.append(f"unknown question id '{qid}'")
                continue
            q = self._store.get_question(qid)
            if q.is_toggle:
                if not isinstance(value, str) or value not in TOGGLE_VALUES:
                    problems.append(f"{qid}: toggle answer must be yes/no/unknown, got {value!r}")
            elif value not in ("", None) and value not in (q.options or []):
                problems.append(f"{qid}: {value!r} is not an option")
        return problems
