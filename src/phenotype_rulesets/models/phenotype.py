"""Phenotype classification results and their display content."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict

from .scoring import PCOSMetrics, ScoringCriteria


class PhenotypeType(str, Enum):
    """Primary four-cluster type."""

    TYPE_A = "type-a"
    TYPE_B = "type-b"
    TYPE_C = "type-c"
    TYPE_D = "type-d"
    UNCLEAR = "unclear"


class PhenotypeSubtype(str, Enum):
    """Secondary classification, independent of the primary type."""

    REPRODUCTIVE = "reproductive"
    METABOLIC = "metabolic"
    MIXED = "mixed"
    UNCLEAR = "unclear"


class PhenotypeResult(BaseModel):
    """Type and subtype are computed from different signals and may disagree."""

    model_config = ConfigDict(frozen=True)

    type: PhenotypeType
    subtype: PhenotypeSubtype
    criteria: ScoringCriteria


class Assessment(BaseModel):
    """Everything a rendering collaborator needs for one answer set."""

    model_config = ConfigDict(frozen=True)

    result: PhenotypeResult
    metrics: PCOSMetrics
    type_label: str
    subtype_label: str


# --- Display content (v1/const/phenotypes.yaml, v1/const/features.yaml) ---

class PhenotypeContent(BaseModel):
    """Label and explanatory copy for one type or subtype value."""

    id: str
    label: str
    title: str
    description: str
    prevalence: str = ""
    assessment: str = ""
    # ids into features.yaml
    features: List[str] = []


class FeatureDefinition(BaseModel):
    """Acronym definition (AE, OD, PCO, LH, ...)."""

    id: str
    title: str
    content: str
