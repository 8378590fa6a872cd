"""Rich renderables for catalog listings and assessment results."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from phenotype_rulesets.constants import (
    CRITERION_NAMES,
    DISCLAIMER,
    PENDING_SUBTYPE_MESSAGE,
    PENDING_TYPE_MESSAGE,
)
from phenotype_rulesets.models.phenotype import Assessment
from phenotype_rulesets.models.question import Question
from phenotype_rulesets.ruleset import RulesetStore

_LEVEL_STYLES = {
    "none": "dim",
    "low": "yellow",
    "medium": "dark_orange",
    "high": "bold red",
}


def questions_table(questions: list[Question], answers: dict[str, str] | None = None) -> Table:
    table = Table(title="Questionnaire", show_lines=False)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Category")
    table.add_column("Type")
    table.add_column("Question")
    if answers is not None:
        table.add_column("Answer")

    for q in questions:
        row = [q.id, q.category, q.type, q.title]
        if answers is not None:
            row.append(answers.get(q.id, q.blank_answer()) or "-")
        table.add_row(*row)
    return table


def criteria_table(assessment: Assessment) -> Table:
    """Scoring breakdown: level and chart score per criterion."""
    criteria = assessment.result.criteria
    scores = dict(zip(("ae", "pco", "od"), assessment.metrics.as_tuple()))

    table = Table(title="Scoring Breakdown")
    table.add_column("Criterion")
    table.add_column("Level")
    table.add_column("Score", justify="right")
    for key, name in CRITERION_NAMES.items():
        level = criteria.level(key).value
        table.add_row(
            f"{name} ({key.upper()})",
            Text(level.upper(), style=_LEVEL_STYLES[level]),
            str(scores[key]),
        )
    return table


def result_panel(assessment: Assessment, store: RulesetStore | None = None) -> Panel:
    """Type, subtype and (when a store is given) their explanatory copy."""
    result = assessment.result
    lines: list = []

    type_text = assessment.type_label if result.type.value != "unclear" else PENDING_TYPE_MESSAGE
    subtype_text = (
        assessment.subtype_label if result.subtype.value != "unclear" else PENDING_SUBTYPE_MESSAGE
    )
    lines.append(Text.assemble(("Four-Cluster Model: ", "bold"), type_text))
    lines.append(Text.assemble(("Alternative Classification: ", "bold"), subtype_text))

    if store is not None:
        for value in (result.type.value, result.subtype.value):
            if value == "unclear":
                continue
            content = store.get_content(value)
            lines.append(Text(""))
            lines.append(Text(content.title, style="bold"))
            lines.append(Text(content.description))
            if content.prevalence:
                lines.append(Text(content.prevalence, style="italic"))

    lines.append(Text(""))
    lines.append(Text(f"* {DISCLAIMER}", style="dim italic"))
    return Panel(Group(*lines), title="Your PCOS Profile")


def assessment_group(assessment: Assessment, store: RulesetStore | None = None) -> Group:
    return Group(result_panel(assessment, store), criteria_table(assessment))
