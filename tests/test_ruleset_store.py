"""RulesetStore loading, lookup, and reference-check tests.

Validates that RulesetStore loads all YAML rulesets from v1/ correctly,
that the rule qid sets are preserved verbatim, and that authoring errors
in the rule files are rejected at load time.

Expected counts (from v1/const/ and v1/rules/):
    29 questions, 5 categories, 8 phenotype content entries,
    7 feature definitions, 3 criteria, 4 type rules, 3 subtype rules
"""

import shutil

import pytest
import yaml

from phenotype_rulesets.models.phenotype import PhenotypeSubtype, PhenotypeType
from phenotype_rulesets.models.scoring import CriteriaLevel
from phenotype_rulesets.ruleset import RulesetError, RulesetStore, find_repo_root

from conftest import (
    AE_DIAGNOSED,
    AE_IDS,
    METABOLIC_IDS,
    OD_DIAGNOSED,
    OD_IDS,
    PCO_DIAGNOSED,
    PCO_IDS,
    PERIOD_IDS,
)


# =====================================================================
# Loading tests — verify all reference data loads with correct counts
# =====================================================================


def test_store_loads_all_questions(store):
    """All 29 questions load in catalog order with unique ids."""
    assert len(store.questions) == 29
    ids = [q.id for q in store.questions]
    assert len(set(ids)) == 29
    assert ids[0] == "1i"
    assert ids[-1] == "2cxii"


def test_store_loads_categories_in_order(store):
    assert [c.id for c in store.categories] == [
        "physical", "period", "skin", "diagnosis", "family",
    ]
    for category in store.categories:
        assert category.title, f"Category {category.id} missing title"


def test_questions_by_category_counts(store):
    grouped = store.questions_by_category()
    assert list(grouped) == ["physical", "period", "skin", "diagnosis", "family"]
    assert {k: len(v) for k, v in grouped.items()} == {
        "physical": 6,
        "period": 4,
        "skin": 7,
        "diagnosis": 6,
        "family": 6,
    }


def test_only_dropdown_is_diagnosis_date(store):
    dropdowns = [q for q in store.questions if q.type == "dropdown"]
    assert [q.id for q in dropdowns] == ["2cvi"]
    assert dropdowns[0].options[0] == "Not yet formally diagnosed"
    assert len(dropdowns[0].options) == 6


def test_store_loads_content_for_every_value(store):
    values = {t.value for t in PhenotypeType} | {s.value for s in PhenotypeSubtype}
    assert set(store.phenotypes) == values
    assert len(store.features) == 7


# =====================================================================
# Rule tables — literal qid sets and thresholds
# =====================================================================


class TestCriterionRules:

    def test_ae_rule(self, store):
        rule = store.criterion_rules["ae"]
        assert rule.diagnosed_qid == AE_DIAGNOSED
        assert rule.symptom_qids == AE_IDS
        assert [(t.min_yes, t.level) for t in rule.thresholds] == [
            (6, CriteriaLevel.MEDIUM),
            (3, CriteriaLevel.LOW),
        ]

    def test_pco_rule(self, store):
        rule = store.criterion_rules["pco"]
        assert rule.diagnosed_qid == PCO_DIAGNOSED
        assert rule.symptom_qids == PCO_IDS

    def test_od_rule(self, store):
        rule = store.criterion_rules["od"]
        assert rule.diagnosed_qid == OD_DIAGNOSED
        assert rule.symptom_qids == OD_IDS

    def test_pco_and_od_sets_do_not_overlap(self, store):
        pco = set(store.criterion_rules["pco"].symptom_qids)
        od = set(store.criterion_rules["od"].symptom_qids)
        assert pco.isdisjoint(od)


def test_type_table_order(store):
    table = store.type_table
    assert table.min_elevated == 2
    assert table.fallback == PhenotypeType.UNCLEAR
    assert [r.then for r in table.rules] == [
        PhenotypeType.TYPE_A,
        PhenotypeType.TYPE_B,
        PhenotypeType.TYPE_C,
        PhenotypeType.TYPE_D,
    ]


def test_subtype_signals(store):
    signals = {s.name: s.qids for s in store.signals}
    assert signals == {"period": PERIOD_IDS, "metabolic": METABOLIC_IDS}
    assert [r.then for r in store.subtype_table.rules] == [
        PhenotypeSubtype.REPRODUCTIVE,
        PhenotypeSubtype.METABOLIC,
        PhenotypeSubtype.MIXED,
    ]


def test_rule_table_shortcuts(store):
    assert store.min_elevated == store.type_table.min_elevated == 2
    assert store.type_rules == store.type_table.rules
    assert [r.name for r in store.type_rules] == ["all_three", "ae_od", "ae_pco", "pco_od"]
    assert store.subtype_rules == store.subtype_table.rules
    assert [r.then for r in store.subtype_rules][-1] == PhenotypeSubtype.MIXED


# =====================================================================
# Lookup helpers
# =====================================================================


def test_get_question(store):
    q = store.get_question("2cii")
    assert q.category == "diagnosis"
    assert q.is_toggle


def test_get_question_unknown_raises(store):
    with pytest.raises(KeyError):
        store.get_question("9z")


def test_get_label(store):
    assert store.get_label("mixed") == "Mixed Phenotype"
    assert store.get_label("type-a") == (
        "Type A: Androgen excess, ovulatory dysfunction and polycystic ovaries"
    )


def test_content_features_resolve(store):
    content = store.get_content("type-b")
    assert content.features == ["ae", "od"]
    assert store.get_feature("ae").title == "What is AE?"


def test_find_repo_root_has_ruleset():
    assert (find_repo_root() / "v1" / "rules" / "criteria.yaml").exists()


# =====================================================================
# Authoring errors — detected while loading
# =====================================================================


@pytest.fixture
def ruleset_copy(tmp_path):
    """Writable copy of v1/ for corrupting individual files."""
    dst = tmp_path / "v1"
    shutil.copytree(find_repo_root() / "v1", dst)
    return dst


def _edit_yaml(path, mutate):
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    mutate(data)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def test_copy_loads_cleanly(ruleset_copy):
    s = RulesetStore(ruleset_dir=ruleset_copy)
    s.load()
    assert len(s.questions) == 29


def test_reload_replaces_contents(ruleset_copy):
    s = RulesetStore(ruleset_dir=ruleset_copy)
    s.load()
    s.load()
    assert len(s.questions) == 29
    assert len(s.categories) == 5
    assert len(s.type_rules) == 4

    def mutate(data):
        data["subtype"]["rules"] = data["subtype"]["rules"][:2]

    _edit_yaml(ruleset_copy / "rules" / "phenotype.yaml", mutate)
    s.load()
    assert len(s.subtype_rules) == 2
    assert len(s.questions) == 29


def test_unknown_symptom_qid_rejected(ruleset_copy):
    def mutate(rules):
        rules[0]["symptom_qids"][0] = "9z"

    _edit_yaml(ruleset_copy / "rules" / "criteria.yaml", mutate)
    with pytest.raises(RulesetError, match="unknown question '9z'"):
        RulesetStore(ruleset_dir=ruleset_copy).load()


def test_dropdown_qid_rejected(ruleset_copy):
    def mutate(rules):
        rules[1]["diagnosed_qid"] = "2cvi"

    _edit_yaml(ruleset_copy / "rules" / "criteria.yaml", mutate)
    with pytest.raises(RulesetError, match="non-toggle"):
        RulesetStore(ruleset_dir=ruleset_copy).load()


def test_missing_criterion_rejected(ruleset_copy):
    _edit_yaml(ruleset_copy / "rules" / "criteria.yaml", lambda rules: rules.pop())
    with pytest.raises(RulesetError, match="missing criteria"):
        RulesetStore(ruleset_dir=ruleset_copy).load()


def test_unknown_signal_qid_rejected(ruleset_copy):
    def mutate(tables):
        tables["subtype"]["signals"][1]["qids"].append("1zz")

    _edit_yaml(ruleset_copy / "rules" / "phenotype.yaml", mutate)
    with pytest.raises(RulesetError, match="signal 'metabolic'"):
        RulesetStore(ruleset_dir=ruleset_copy).load()


def test_missing_content_rejected(ruleset_copy):
    def mutate(entries):
        entries[:] = [e for e in entries if e["id"] != "mixed"]

    _edit_yaml(ruleset_copy / "const" / "phenotypes.yaml", mutate)
    with pytest.raises(RulesetError, match="mixed"):
        RulesetStore(ruleset_dir=ruleset_copy).load()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        RulesetStore(ruleset_dir=tmp_path).load()
