"""Rule-table models mirroring ``v1/rules/criteria.yaml`` and ``v1/rules/phenotype.yaml``.

  Criteria (criteria.yaml):
    - CountThreshold: minimum yes-count and the level it yields
    - CriterionRule: diagnosed override qid, symptom qids, ordered thresholds

  Phenotype (phenotype.yaml):
    - TypeRule / TypeTable: primary-type decision table over elevated criteria
    - SymptomSignal: a named yes-count over a qid set
    - SignalPredicate / SubtypeRule / SubtypeTable: subtype decision table

Every table is evaluated top to bottom, first match wins.
"""

from __future__ import annotations

from typing import Dict, List, Literal

from pydantic import BaseModel, Field, model_validator

from .phenotype import PhenotypeSubtype, PhenotypeType
from .scoring import CriteriaLevel, Criterion, ScoringCriteria

# Name of the derived signal holding the sum of all declared signals.
TOTAL_SIGNAL = "total"


# --- Criteria ---

class CountThreshold(BaseModel):
    """``level`` applies when the yes-count is at least ``min_yes``."""

    min_yes: int = Field(ge=1)
    level: CriteriaLevel


class CriterionRule(BaseModel):
    """Scoring rule for one criterion."""

    criterion: Criterion
    diagnosed_qid: str
    symptom_qids: List[str]
    thresholds: List[CountThreshold]

    @model_validator(mode="after")
    def _chk(self):
        if len(set(self.symptom_qids)) != len(self.symptom_qids):
            raise ValueError(f"{self.criterion}: duplicate symptom qids")
        if self.diagnosed_qid in self.symptom_qids:
            raise ValueError(f"{self.criterion}: diagnosed qid listed as a symptom")
        mins = [t.min_yes for t in self.thresholds]
        if mins != sorted(mins, reverse=True) or len(set(mins)) != len(mins):
            raise ValueError(f"{self.criterion}: thresholds must be strictly descending")
        if mins and mins[0] > len(self.symptom_qids):
            raise ValueError(
                f"{self.criterion}: threshold {mins[0]} exceeds "
                f"{len(self.symptom_qids)} symptom qids"
            )
        return self

    def level_for_count(self, yes_count: int) -> CriteriaLevel:
        """First threshold the count reaches; ``none`` if it reaches none."""
        for threshold in self.thresholds:
            if yes_count >= threshold.min_yes:
                return threshold.level
        return CriteriaLevel.NONE


# --- Primary type ---

class TypeRule(BaseModel):
    """Fires when every listed criterion has the required elevation state."""

    name: str
    when: Dict[Criterion, Literal["elevated", "not_elevated"]]
    then: PhenotypeType

    def matches(self, criteria: ScoringCriteria) -> bool:
        for criterion, state in self.when.items():
            elevated = criteria.level(criterion).is_elevated
            if elevated != (state == "elevated"):
                return False
        return True


class TypeTable(BaseModel):
    min_elevated: int = Field(2, ge=0, le=3)
    fallback: PhenotypeType = PhenotypeType.UNCLEAR
    rules: List[TypeRule]


# --- Subtype ---

class SymptomSignal(BaseModel):
    name: str
    qids: List[str]


class SignalPredicate(BaseModel):
    """Compare a signal's yes-count against ``value``."""

    signal: str
    op: Literal["eq", "ne", "lt", "le", "gt", "ge"]
    value: int


class SubtypeRule(BaseModel):
    """Fires when ALL predicates in ``when`` hold."""

    name: str
    when: List[SignalPredicate]
    then: PhenotypeSubtype


class SubtypeTable(BaseModel):
    fallback: PhenotypeSubtype = PhenotypeSubtype.UNCLEAR
    signals: List[SymptomSignal]
    rules: List[SubtypeRule]

    @model_validator(mode="after")
    def _chk(self):
        names = [s.name for s in self.signals]
        if TOTAL_SIGNAL in names:
            raise ValueError(f"signal name '{TOTAL_SIGNAL}' is reserved")
        known = set(names) | {TOTAL_SIGNAL}
        for rule in self.rules:
            for pred in rule.when:
                if pred.signal not in known:
                    raise ValueError(
                        f"subtype rule '{rule.name}' references unknown signal '{pred.signal}'"
                    )
        return self
