"""Numeric projection of criterion levels for the radial chart.

The mapping is level → representative score only (high 10, medium 6,
low 3, none 0).  Scores are a display convenience and are never turned back
into levels for classification.
"""

from phenotype_rulesets.constants import LEVEL_SCORES
from phenotype_rulesets.models.scoring import CriteriaLevel, PCOSMetrics, ScoringCriteria


def level_to_score(level: CriteriaLevel | str) -> int:
    return LEVEL_SCORES[CriteriaLevel(level)]


def to_metrics(criteria: ScoringCriteria) -> PCOSMetrics:
    return PCOSMetrics(
        androgen_excess=level_to_score(criteria.ae),
        polycystic_ovaries=level_to_score(criteria.pco),
        ovulatory_dysfunction=level_to_score(criteria.od),
    )
