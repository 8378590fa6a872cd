"""Radial chart — geometry and SVG rendering for ``PCOSMetrics``.

Three axes, 120° apart, carry AE (90°), PCO (210°) and OD (330°).  Each
metric (0-10) becomes a radius on its axis; the three points form the
triangle that is drawn over three background rings (Low, Med, High).

Radius bands, as fractions of the max radius R:

    0         → 0
    (0, 3]    → 0.33 .. 0.50
    (3, 6]    → 0.50 .. 0.75
    (6, 10]   → 0.75 .. 1.00

so an elevated level (medium 6, high 10) always lands beyond 0.5·R and a
non-elevated one (none 0, low 3) never does.

:func:`chart_geometry` is pure; :class:`ChartRenderer` feeds its output to
the Jinja2 template in ``template/radial_chart.svg.jinja2``.
"""

from __future__ import annotations

import math
from pathlib import Path

import jinja2
from pydantic import BaseModel

from phenotype_rulesets.constants import (
    AXIS_ANGLES,
    CHART_PALETTE,
    CRITERIA,
    CRITERION_NAMES,
    DEFAULT_CHART_SIZE,
    LABEL_OFFSET_RATIO,
    MAX_RADIUS_RATIO,
    RING_FRACTIONS,
)
from phenotype_rulesets.models.scoring import CriteriaLevel, PCOSMetrics


class ChartPoint(BaseModel):
    criterion: str
    value: int
    band: CriteriaLevel
    radius: float
    x: float
    y: float


class ChartRing(BaseModel):
    label: str
    radius: float


class ChartLabel(BaseModel):
    text: str
    x: float
    y: float


class ChartGeometry(BaseModel):
    """Everything needed to draw the chart, in canvas coordinates."""

    size: int
    center: float
    max_radius: float
    points: list[ChartPoint]
    path: str
    rings: list[ChartRing]
    axis_ends: list[tuple[float, float]]
    labels: list[ChartLabel]
    fill: str
    stroke: str
    show_question_mark: bool


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

def value_to_radius(value: float, max_radius: float) -> float:
    """Map a 0-10 metric to a radius on ``[0, max_radius]``."""
    if value <= 0:
        return 0.0
    if value <= 3:
        return max_radius * (0.33 + (value / 3) * 0.17)
    if value <= 6:
        return max_radius * (0.50 + ((value - 3) / 3) * 0.25)
    return max_radius * (0.75 + ((value - 6) / 4) * 0.25)


def ring_band(value: float) -> CriteriaLevel:
    """Ring band a metric falls in; used for point annotations only."""
    if value <= 0:
        return CriteriaLevel.NONE
    if value <= 3:
        return CriteriaLevel.LOW
    if value <= 6:
        return CriteriaLevel.MEDIUM
    return CriteriaLevel.HIGH


def polar(center: float, radius: float, angle_deg: float) -> tuple[float, float]:
    rad = math.radians(angle_deg)
    return (center + radius * math.cos(rad), center + radius * math.sin(rad))


def _fmt(v: float) -> str:
    return f"{v:.2f}"


def triangle_path(points: list[ChartPoint]) -> str:
    """SVG path ``M x y L x y L x y Z`` through the three points."""
    if len(points) != 3:
        return ""
    a, b, c = points
    return (
        f"M {_fmt(a.x)} {_fmt(a.y)} "
        f"L {_fmt(b.x)} {_fmt(b.y)} "
        f"L {_fmt(c.x)} {_fmt(c.y)} Z"
    )


def chart_geometry(
    metrics: PCOSMetrics,
    kind: str = "unclear",
    size: int = DEFAULT_CHART_SIZE,
) -> ChartGeometry:
    """Compute the chart for *metrics*, coloured for *kind* (a type or subtype value)."""
    center = size / 2
    max_radius = size * MAX_RADIUS_RATIO
    label_radius = max_radius + size * LABEL_OFFSET_RATIO

    points: list[ChartPoint] = []
    for criterion, angle, value in zip(CRITERIA, AXIS_ANGLES, metrics.as_tuple()):
        radius = value_to_radius(value, max_radius)
        x, y = polar(center, radius, angle)
        points.append(
            ChartPoint(
                criterion=criterion,
                value=value,
                band=ring_band(value),
                radius=radius,
                x=x,
                y=y,
            )
        )

    labels = []
    for criterion, angle in zip(CRITERIA, AXIS_ANGLES):
        x, y = polar(center, label_radius, angle)
        labels.append(ChartLabel(text=CRITERION_NAMES[criterion], x=x, y=y))

    kind = getattr(kind, "value", kind)
    fill, stroke = CHART_PALETTE.get(kind, CHART_PALETTE["unclear"])

    return ChartGeometry(
        size=size,
        center=center,
        max_radius=max_radius,
        points=points,
        path=triangle_path(points),
        rings=[ChartRing(label=name, radius=max_radius * frac) for name, frac in RING_FRACTIONS],
        axis_ends=[polar(center, max_radius, angle) for angle in AXIS_ANGLES],
        labels=labels,
        fill=fill,
        stroke=stroke,
        show_question_mark=metrics.is_empty,
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class ChartRenderer:
    """Jinja2-based SVG renderer for the radial chart.

    Args:
        template_dir: optional override for the template directory.
            Defaults to ``template/`` sibling of this module.
        size: canvas edge length in px.
    """

    TEMPLATE_NAME = "radial_chart.svg.jinja2"

    def __init__(self, template_dir: Path | None = None, size: int = DEFAULT_CHART_SIZE) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "template"
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=True,
        )
        self._env.filters["px"] = _fmt
        self._size = size

    def render(self, metrics: PCOSMetrics, kind: str = "unclear") -> str:
        geometry = chart_geometry(metrics, kind, size=self._size)
        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(chart=geometry)

    def write(self, path: Path | str, metrics: PCOSMetrics, kind: str = "unclear") -> Path:
        path = Path(path)
        path.write_text(self.render(metrics, kind), encoding="utf-8")
        return path
