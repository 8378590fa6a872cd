"""RulesetStore — loads all YAML rulesets from ``v1/`` into typed models.

This is the single source of truth for rule data at runtime.  The store is
loaded once at startup and provides lookup by question id, category, and
type/subtype value.

Usage::

    store = RulesetStore()          # defaults to v1/ relative to repo root
    store.load()                    # parse and cross-check all YAML files

    q = store.get_question("2cii")
    ae_rule = store.criterion_rules["ae"]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from phenotype_rulesets.models.phenotype import (
    FeatureDefinition,
    PhenotypeContent,
    PhenotypeSubtype,
    PhenotypeType,
)
from phenotype_rulesets.models.question import Question, QuestionCategory
from phenotype_rulesets.models.rules import (
    CriterionRule,
    SubtypeRule,
    SubtypeTable,
    SymptomSignal,
    TypeRule,
    TypeTable,
)

logger = logging.getLogger(__name__)

_CRITERIA = ("ae", "pco", "od")


class RulesetError(ValueError):
    """Rule data is inconsistent (unknown qid, missing criterion, ...).

    Raised only while loading; a loaded store never produces it.
    """


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def find_repo_root(start: Optional[Path] = None) -> Path:
    """Walk upwards from *start* to find the repo root (dir with pyproject.toml or .git).

    Falls back to cwd if no marker is found.
    """
    p = (start or Path(__file__).resolve()).parent
    for parent in [p, *p.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent
    return Path.cwd()


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# RulesetStore
# ---------------------------------------------------------------------------

class RulesetStore:
    """Loads all YAML from ``v1/`` and provides typed lookup.

    Attributes populated after :meth:`load`:

        questions        — list[Question] in presentation order
        categories       — list[QuestionCategory] in presentation order
        phenotypes       — dict[value, PhenotypeContent] (types and subtypes)
        features         — dict[id, FeatureDefinition]
        criterion_rules  — dict[criterion, CriterionRule]
        type_table       — TypeTable
        subtype_table    — SubtypeTable
    """

    def __init__(self, ruleset_dir: str | Path | None = None) -> None:
        if ruleset_dir is None:
            ruleset_dir = find_repo_root() / "v1"
        self._base = Path(ruleset_dir)
        self._reset()

    def _reset(self) -> None:
        # Populated by load()
        self.questions: list[Question] = []
        self.categories: list[QuestionCategory] = []
        self.phenotypes: dict[str, PhenotypeContent] = {}
        self.features: dict[str, FeatureDefinition] = {}
        self.criterion_rules: dict[str, CriterionRule] = {}
        self.type_table: TypeTable | None = None
        self.subtype_table: SubtypeTable | None = None

        self._questions_by_id: dict[str, Question] = {}

    @property
    def base_dir(self) -> Path:
        return self._base

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse all YAML files under the ruleset directory into typed models.

        Call this at startup.  Raises ``FileNotFoundError`` if expected
        YAML files are missing and ``RulesetError`` if the rules reference
        questions, criteria, or content that do not exist.
        Calling it again discards the loaded data and re-reads every file.
        """
        self._reset()
        self._load_constants()
        self._load_criteria()
        self._load_phenotype_tables()
        self._check_references()
        logger.info(
            "RulesetStore loaded: %d questions, %d categories, %d criteria, "
            "%d type rules, %d subtype rules",
            len(self.questions),
            len(self.categories),
            len(self.criterion_rules),
            len(self.type_table.rules),
            len(self.subtype_table.rules),
        )

    def _load_constants(self) -> None:
        """Load v1/const/*.yaml into typed model lists/dicts."""
        const_dir = self._base / "const"

        for raw in load_yaml(const_dir / "categories.yaml"):
            self.categories.append(QuestionCategory(**raw))

        # Questions — order preserved, ids must be unique
        for raw in load_yaml(const_dir / "questions.yaml"):
            q = Question(**raw)
            if q.id in self._questions_by_id:
                raise RulesetError(f"Duplicate question id '{q.id}'")
            self.questions.append(q)
            self._questions_by_id[q.id] = q

        for raw in load_yaml(const_dir / "phenotypes.yaml"):
            content = PhenotypeContent(**raw)
            self.phenotypes[content.id] = content

        for raw in load_yaml(const_dir / "features.yaml"):
            feature = FeatureDefinition(**raw)
            self.features[feature.id] = feature

    def _load_criteria(self) -> None:
        """Load v1/rules/criteria.yaml, keyed by criterion."""
        for raw in load_yaml(self._base / "rules" / "criteria.yaml"):
            rule = CriterionRule(**raw)
            if rule.criterion in self.criterion_rules:
                raise RulesetError(f"Criterion '{rule.criterion}' defined twice")
            self.criterion_rules[rule.criterion] = rule

        missing = [c for c in _CRITERIA if c not in self.criterion_rules]
        if missing:
            raise RulesetError(f"criteria.yaml is missing criteria: {missing}")

    def _load_phenotype_tables(self) -> None:
        """Load v1/rules/phenotype.yaml into the type and subtype tables."""
        raw = load_yaml(self._base / "rules" / "phenotype.yaml")
        self.type_table = TypeTable(**raw["type"])
        self.subtype_table = SubtypeTable(**raw["subtype"])

    def _check_references(self) -> None:
        """Every qid used by a rule must be a toggle question in the catalog.

        Scoring compares answers to ``"yes"``, so a rule pointing at a
        dropdown or a missing id would silently never fire.
        """
        referenced: list[tuple[str, str]] = []
        for rule in self.criterion_rules.values():
            referenced.append((f"criterion '{rule.criterion}'", rule.diagnosed_qid))
            referenced.extend(
                (f"criterion '{rule.criterion}'", qid) for qid in rule.symptom_qids
            )
        for signal in self.subtype_table.signals:
            referenced.extend((f"signal '{signal.name}'", qid) for qid in signal.qids)

        for owner, qid in referenced:
            q = self._questions_by_id.get(qid)
            if q is None:
                raise RulesetError(f"{owner} references unknown question '{qid}'")
            if not q.is_toggle:
                raise RulesetError(f"{owner} references non-toggle question '{qid}'")

        category_ids = [c.id for c in self.categories]
        for q in self.questions:
            if q.category not in category_ids:
                raise RulesetError(f"Question '{q.id}' has undeclared category '{q.category}'")

        # Every type/subtype value needs display content
        values = {t.value for t in PhenotypeType} | {s.value for s in PhenotypeSubtype}
        missing = sorted(values - set(self.phenotypes))
        if missing:
            raise RulesetError(f"phenotypes.yaml is missing content for: {missing}")
        for content in self.phenotypes.values():
            for feature_id in content.features:
                if feature_id not in self.features:
                    raise RulesetError(
                        f"Phenotype '{content.id}' references unknown feature '{feature_id}'"
                    )

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def get_question(self, qid: str) -> Question:
        """Look up a catalog question by id.

        Raises:
            KeyError: if the qid is not in the catalog.
        """
        return self._questions_by_id[qid]

    def has_question(self, qid: str) -> bool:
        return qid in self._questions_by_id

    def questions_by_category(self) -> dict[str, list[Question]]:
        """Return {category_id: [Question, ...]} in category order."""
        grouped: dict[str, list[Question]] = {c.id: [] for c in self.categories}
        for q in self.questions:
            grouped[q.category].append(q)
        return grouped

    @property
    def min_elevated(self) -> int:
        """Elevated criteria needed before any type rule applies."""
        return self.type_table.min_elevated

    @property
    def type_rules(self) -> list[TypeRule]:
        return self.type_table.rules

    @property
    def signals(self) -> list[SymptomSignal]:
        return self.subtype_table.signals

    @property
    def subtype_rules(self) -> list[SubtypeRule]:
        return self.subtype_table.rules

    def get_content(self, value: str) -> PhenotypeContent:
        """Return display content for a type or subtype value.

        Raises:
            KeyError: if the value has no content entry.
        """
        return self.phenotypes[value]

    def get_label(self, value: str) -> str:
        """Display label for a type or subtype value (e.g. ``"Mixed Phenotype"``)."""
        return self.phenotypes[value].label

    def get_feature(self, feature_id: str) -> FeatureDefinition:
        return self.features[feature_id]
