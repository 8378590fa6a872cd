"""Public model re-exports for phenotype_rulesets.

Consumers should import from ``phenotype_rulesets.models`` rather than
reaching into sub-modules directly.
"""

# --- Questions ---
from phenotype_rulesets.models.question import (
    Answers,
    AnswerValue,
    Question,
    QuestionCategory,
    QuestionCategoryId,
    QuestionType,
)

# --- Scoring ---
from phenotype_rulesets.models.scoring import (
    CriteriaLevel,
    Criterion,
    CriterionOutcome,
    DiagnosedOverride,
    PCOSMetrics,
    ScoringCriteria,
    SymptomCount,
)

# --- Phenotype ---
from phenotype_rulesets.models.phenotype import (
    Assessment,
    FeatureDefinition,
    PhenotypeContent,
    PhenotypeResult,
    PhenotypeSubtype,
    PhenotypeType,
)

# --- Rule tables ---
from phenotype_rulesets.models.rules import (
    TOTAL_SIGNAL,
    CountThreshold,
    CriterionRule,
    SignalPredicate,
    SubtypeRule,
    SubtypeTable,
    SymptomSignal,
    TypeRule,
    TypeTable,
)

__all__ = [
    # Questions
    "Answers",
    "AnswerValue",
    "Question",
    "QuestionCategory",
    "QuestionCategoryId",
    "QuestionType",
    # Scoring
    "CriteriaLevel",
    "Criterion",
    "CriterionOutcome",
    "DiagnosedOverride",
    "PCOSMetrics",
    "ScoringCriteria",
    "SymptomCount",
    # Phenotype
    "Assessment",
    "FeatureDefinition",
    "PhenotypeContent",
    "PhenotypeResult",
    "PhenotypeSubtype",
    "PhenotypeType",
    # Rules
    "TOTAL_SIGNAL",
    "CountThreshold",
    "CriterionRule",
    "SignalPredicate",
    "SubtypeRule",
    "SubtypeTable",
    "SymptomSignal",
    "TypeRule",
    "TypeTable",
]
