"""Console front end and ``phenotype-cli`` entry point.

Sub-commands::

    # List the questionnaire (optionally one category)
    phenotype-cli questions --category period

    # Assess answers from a YAML/JSON mapping and/or flags
    phenotype-cli assess --answers answers.yaml --answer 2cii=yes --svg chart.svg

    # Machine-readable output
    phenotype-cli assess --answers answers.yaml --json

    # Walk the questionnaire category by category, re-scoring after each answer
    phenotype-cli interactive --svg chart.svg
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.prompt import Prompt

from phenotype_rulesets.chart import ChartRenderer
from phenotype_rulesets.config import Settings, load_settings
from phenotype_rulesets.engine import PhenotypeEngine
from phenotype_rulesets.models.question import Answers, Question
from phenotype_rulesets.ruleset import RulesetStore, load_yaml

from phenotype_cli.errors import EXIT_OK, handle_error
from phenotype_cli.render import assessment_group, questions_table

logger = logging.getLogger(__name__)

_TOGGLE_SHORTCUTS = {"y": "yes", "n": "no", "u": "unknown"}


# ------------------------------------------------------------------
# Answer input
# ------------------------------------------------------------------

def normalize_answer(value: Any) -> str:
    """Coerce a raw file value to an answer string.

    YAML reads bare ``yes``/``no`` as booleans, so those are mapped back;
    ``null`` becomes ``unknown``.
    """
    if value is True:
        return "yes"
    if value is False:
        return "no"
    if value is None:
        return "unknown"
    return str(value)


def load_answers_file(path: Path | str) -> Answers:
    """Read a ``{qid: answer}`` mapping from a YAML or JSON file."""
    raw = load_yaml(path)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping of question id to answer")
    return {str(qid): normalize_answer(value) for qid, value in raw.items()}


def parse_answer_flags(pairs: list[str] | None) -> Answers:
    """Parse repeated ``--answer QID=VALUE`` flags."""
    answers: Answers = {}
    for pair in pairs or []:
        qid, sep, value = pair.partition("=")
        if not sep or not qid.strip():
            raise ValueError(f"--answer expects QID=VALUE, got {pair!r}")
        answers[qid.strip()] = value.strip()
    return answers


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------

def cmd_questions(args: argparse.Namespace, engine: PhenotypeEngine, console: Console) -> int:
    store = engine.store
    questions = store.questions
    if args.category:
        questions = store.questions_by_category()[args.category]
    console.print(questions_table(questions))
    return EXIT_OK


def cmd_assess(args: argparse.Namespace, engine: PhenotypeEngine, console: Console, settings: Settings) -> int:
    answers = engine.initial_answers()
    if args.answers:
        answers.update(load_answers_file(args.answers))
    answers.update(parse_answer_flags(args.answer))

    for problem in engine.validate_answers(answers):
        logger.warning("answer ignored by scoring: %s", problem)

    assessment = engine.assess(answers)

    if args.json:
        payload = assessment.model_dump(mode="json", by_alias=True)
        console.print_json(json.dumps(payload))
    else:
        console.print(assessment_group(assessment, engine.store))

    if args.svg:
        _write_chart(args.svg, assessment, settings, console)
    return EXIT_OK


def cmd_interactive(args: argparse.Namespace, engine: PhenotypeEngine, console: Console, settings: Settings) -> int:
    """Prompt every question and re-assess after each category."""
    store = engine.store
    answers = engine.initial_answers()
    grouped = store.questions_by_category()

    for step, category in enumerate(store.categories, start=1):
        console.rule(f"Step {step} of {len(store.categories)}")
        console.print(f"[bold]{category.title}[/bold]")
        for q in grouped[category.id]:
            answers[q.id] = _ask(q, console)

        assessment = engine.assess(answers)
        console.print(assessment_group(assessment, store))

    console.print(questions_table(store.questions, answers))
    if args.svg:
        _write_chart(args.svg, engine.assess(answers), settings, console)
    return EXIT_OK


def _ask(q: Question, console: Console) -> str:
    if q.description:
        console.print(f"[dim]{q.description}[/dim]")

    if q.is_toggle:
        choice = Prompt.ask(
            f"{q.title} [y/n/u]",
            choices=list(_TOGGLE_SHORTCUTS),
            default="u",
            show_choices=False,
            console=console,
        )
        return _TOGGLE_SHORTCUTS[choice]

    for i, option in enumerate(q.options or [], start=1):
        console.print(f"  {i}. {option}")
    choice = Prompt.ask(
        f"{q.title} (number, blank to skip)",
        choices=[""] + [str(i) for i in range(1, len(q.options or []) + 1)],
        default="",
        show_choices=False,
        console=console,
    )
    return q.options[int(choice) - 1] if choice else ""


def _write_chart(path: str, assessment, settings: Settings, console: Console) -> None:
    renderer = ChartRenderer(size=settings.chart_size)
    out = renderer.write(path, assessment.metrics, assessment.result.type)
    logger.info("chart written to %s", out)
    console.print(f"Chart written to [cyan]{out}[/cyan]")


# ------------------------------------------------------------------
# Parser & entry point
# ------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phenotype-cli",
        description="Classify questionnaire answers into a PCOS phenotype.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--ruleset-dir",
        default=None,
        help="Ruleset directory (default: PHENOTYPE_RULESET_DIR or v1/ under the repo root)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_questions = sub.add_parser("questions", help="List the questionnaire")
    p_questions.add_argument(
        "--category",
        choices=["physical", "period", "skin", "diagnosis", "family"],
        help="Only show one category",
    )

    p_assess = sub.add_parser("assess", help="Score a set of answers")
    p_assess.add_argument("--answers", help="YAML/JSON file mapping question id to answer")
    p_assess.add_argument(
        "--answer",
        action="append",
        metavar="QID=VALUE",
        help="Single answer; repeatable, overrides --answers",
    )
    p_assess.add_argument("--json", action="store_true", help="Print the assessment as JSON")
    p_assess.add_argument("--svg", help="Write the radial chart to this path")

    p_interactive = sub.add_parser("interactive", help="Answer the questionnaire interactively")
    p_interactive.add_argument("--svg", help="Write the final radial chart to this path")

    return parser


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Run the CLI and return its exit code."""
    args = build_parser().parse_args(argv)
    console = console or Console()

    try:
        settings = load_settings()
        logging.basicConfig(
            level=getattr(logging, settings.log_level, logging.INFO),
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )

        store = RulesetStore(ruleset_dir=args.ruleset_dir or settings.ruleset_dir)
        store.load()
        engine = PhenotypeEngine(store)

        if args.command == "questions":
            return cmd_questions(args, engine, console)
        if args.command == "assess":
            return cmd_assess(args, engine, console, settings)
        return cmd_interactive(args, engine, console, settings)
    except Exception as exc:
        return handle_error(exc, console)


def cli() -> None:
    """Console-script entry point: ``phenotype-cli``."""
    sys.exit(main())
