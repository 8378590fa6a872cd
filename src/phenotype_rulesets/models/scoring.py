"""Criterion levels and the scorer's output models.

``CriteriaLevel`` is ordinal: none < low < medium < high.  A criterion is
*elevated* when its level is medium or high.

Each criterion is scored through exactly one of two branches, modelled as a
discriminated union on ``branch``:

  - DiagnosedOverride: the "diagnosed" question was answered yes, level is high
  - SymptomCount: yes-count among the symptom questions, mapped via thresholds
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Criterion = Literal["ae", "pco", "od"]

# Upper bound of a chart metric.
MAX_METRIC = 10


class CriteriaLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Position in the ordinal scale (none=0 .. high=3)."""
        return _LEVEL_RANK[self]

    @property
    def is_elevated(self) -> bool:
        return self in (CriteriaLevel.MEDIUM, CriteriaLevel.HIGH)


_LEVEL_RANK: dict[CriteriaLevel, int] = {
    CriteriaLevel.NONE: 0,
    CriteriaLevel.LOW: 1,
    CriteriaLevel.MEDIUM: 2,
    CriteriaLevel.HIGH: 3,
}


class ScoringCriteria(BaseModel):
    """One level per criterion; always regenerated from the answers."""

    model_config = ConfigDict(frozen=True)

    ae: CriteriaLevel = CriteriaLevel.NONE
    pco: CriteriaLevel = CriteriaLevel.NONE
    od: CriteriaLevel = CriteriaLevel.NONE

    def level(self, criterion: Criterion) -> CriteriaLevel:
        return getattr(self, criterion)

    def elevated(self) -> list[str]:
        """Criteria whose level is medium or high, in ae/pco/od order."""
        return [c for c in ("ae", "pco", "od") if self.level(c).is_elevated]


class DiagnosedOverride(BaseModel):
    """The criterion's diagnosed question was answered yes."""

    model_config = ConfigDict(frozen=True)

    branch: Literal["diagnosed"] = "diagnosed"
    criterion: Criterion
    qid: str

    @property
    def level(self) -> CriteriaLevel:
        return CriteriaLevel.HIGH


class SymptomCount(BaseModel):
    """Level derived from the number of yes answers among the symptom questions."""

    model_config = ConfigDict(frozen=True)

    branch: Literal["symptoms"] = "symptoms"
    criterion: Criterion
    yes_count: int = Field(ge=0)
    total: int = Field(ge=0)
    result_level: CriteriaLevel

    @property
    def level(self) -> CriteriaLevel:
        return self.result_level


CriterionOutcome = Annotated[
    Union[DiagnosedOverride, SymptomCount],
    Field(discriminator="branch"),
]


class PCOSMetrics(BaseModel):
    """0-10 projection of ``ScoringCriteria`` for the radial chart.

    Serialises with camelCase aliases (``androgenExcess`` ...) when dumped
    with ``by_alias=True``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    androgen_excess: int = Field(0, ge=0, le=MAX_METRIC, alias="androgenExcess")
    polycystic_ovaries: int = Field(0, ge=0, le=MAX_METRIC, alias="polycysticOvaries")
    ovulatory_dysfunction: int = Field(0, ge=0, le=MAX_METRIC, alias="ovulatoryDysfunction")

    def as_tuple(self) -> tuple[int, int, int]:
        """Values in chart axis order: AE, PCO, OD."""
        return (self.androgen_excess, self.polycystic_ovaries, self.ovulatory_dysfunction)

    @property
    def is_empty(self) -> bool:
        return not any(self.as_tuple())
