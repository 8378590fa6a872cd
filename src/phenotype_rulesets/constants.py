"""Phenotype constants shared across the SDK.

These values are referenced by the projection, chart, and engine.  The rule
tables themselves live in the YAML files under ``v1/``; the values here are
fixed display conventions that the rule data does not describe.
"""

from phenotype_rulesets.models.scoring import CriteriaLevel

# Criteria in chart axis order.
CRITERIA: tuple[str, ...] = ("ae", "pco", "od")

# Human-readable criterion names for tables and chart labels.
CRITERION_NAMES: dict[str, str] = {
    "ae": "Androgen Excess",
    "pco": "Polycystic Ovaries",
    "od": "Ovulatory Dysfunction",
}

# Representative 0-10 score for each level (radial chart only).
LEVEL_SCORES: dict[CriteriaLevel, int] = {
    CriteriaLevel.HIGH: 10,
    CriteriaLevel.MEDIUM: 6,
    CriteriaLevel.LOW: 3,
    CriteriaLevel.NONE: 0,
}

TOGGLE_VALUES: frozenset[str] = frozenset({"yes", "no", "unknown"})

# Shown in place of a label while the result is still "unclear".
PENDING_TYPE_MESSAGE = "Keep answering questions to determine your PCOS type"
PENDING_SUBTYPE_MESSAGE = "Complete more questions to see your alternative classification"

DISCLAIMER = (
    "This is an assessment based on your responses, not a medical diagnosis. "
    "Please consult with a healthcare professional for proper diagnosis and treatment."
)

# ---------------------------------------------------------------------------
# Radial chart geometry, expressed relative to the canvas size
# ---------------------------------------------------------------------------

DEFAULT_CHART_SIZE = 400
# max radius = 0.4 * size (160 on the default 400px canvas)
MAX_RADIUS_RATIO = 0.4
# labels sit this far outside the outer ring (40 on the default canvas)
LABEL_OFFSET_RATIO = 0.1

# Axis angles in degrees for AE, PCO, OD.
AXIS_ANGLES: tuple[int, ...] = (90, 210, 330)

# Background rings as fractions of the max radius.
RING_FRACTIONS: tuple[tuple[str, float], ...] = (
    ("Low", 0.33),
    ("Med", 0.66),
    ("High", 1.0),
)

# (fill, stroke) per type/subtype value.
CHART_PALETTE: dict[str, tuple[str, str]] = {
    "unclear": ("hsl(0 0% 85%)", "hsl(0 0% 70%)"),
    "type-a": ("hsl(280 65% 60% / 0.3)", "hsl(280 65% 60%)"),
    "type-b": ("hsl(340 75% 55% / 0.3)", "hsl(340 75% 55%)"),
    "type-c": ("hsl(200 70% 50% / 0.3)", "hsl(200 70% 50%)"),
    "type-d": ("hsl(160 60% 50% / 0.3)", "hsl(160 60% 50%)"),
    "reproductive": ("hsl(340 75% 55% / 0.3)", "hsl(340 75% 55%)"),
    "metabolic": ("hsl(45 85% 55% / 0.3)", "hsl(45 85% 55%)"),
    "mixed": ("hsl(280 65% 60% / 0.3)", "hsl(280 65% 60%)"),
}
