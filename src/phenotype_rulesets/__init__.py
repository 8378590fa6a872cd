"""phenotype_rulesets — rule-based PCOS phenotype scoring SDK.

Public API:
    PhenotypeEngine      — answers → Assessment (criteria, type, subtype, metrics)
    RulesetStore         — loads YAML rulesets into typed models with lookup helpers
    CriteriaScorer       — answers → ScoringCriteria (AE / PCO / OD levels)
    PhenotypeClassifier  — criteria + answers → PhenotypeResult
    ChartRenderer        — PCOSMetrics → radial chart SVG
    get_phenotype_label  — display label for a type/subtype value

Result models:
    ScoringCriteria   — one CriteriaLevel per criterion
    PhenotypeResult   — type, subtype, criteria
    PCOSMetrics       — 0-10 projection of the criteria
    Assessment        — result + metrics + labels
"""

from phenotype_rulesets.chart import ChartRenderer, chart_geometry
from phenotype_rulesets.classifier import PhenotypeClassifier
from phenotype_rulesets.config import Settings, load_settings
from phenotype_rulesets.engine import PhenotypeEngine, get_phenotype_label
from phenotype_rulesets.models import (
    Answers,
    Assessment,
    CriteriaLevel,
    PCOSMetrics,
    PhenotypeResult,
    PhenotypeSubtype,
    PhenotypeType,
    Question,
    ScoringCriteria,
)
from phenotype_rulesets.projection import level_to_score, to_metrics
from phenotype_rulesets.ruleset import RulesetError, RulesetStore
from phenotype_rulesets.scorer import CriteriaScorer

__all__ = [
    # Engine & store
    "PhenotypeEngine",
    "RulesetStore",
    "RulesetError",
    "CriteriaScorer",
    "PhenotypeClassifier",
    # Projection & chart
    "level_to_score",
    "to_metrics",
    "ChartRenderer",
    "chart_geometry",
    "get_phenotype_label",
    # Config
    "Settings",
    "load_settings",
    # Models
    "Answers",
    "Assessment",
    "CriteriaLevel",
    "PCOSMetrics",
    "PhenotypeResult",
    "PhenotypeSubtype",
    "PhenotypeType",
    "Question",
    "ScoringCriteria",
]
