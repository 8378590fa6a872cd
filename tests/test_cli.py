"""phenotype-cli front end — commands, answer input and exit codes.

Each test drives ``main()`` with an argv list and a recording rich Console,
so output is asserted on text rather than captured stdout.
"""

import json

import pytest
from rich.console import Console

from phenotype_cli import app
from phenotype_cli.app import load_answers_file, main, normalize_answer, parse_answer_flags
from phenotype_cli.errors import exit_code_for
from phenotype_rulesets.constants import PENDING_SUBTYPE_MESSAGE, PENDING_TYPE_MESSAGE
from phenotype_rulesets.ruleset import RulesetError


@pytest.fixture
def console():
    return Console(record=True, width=300, color_system=None)


def run(argv, console):
    code = main(argv, console=console)
    return code, console.export_text()


# ------------------------------------------------------------------
# Answer input helpers
# ------------------------------------------------------------------


class TestAnswerInput:

    @pytest.mark.parametrize(
        "raw, expected",
        [(True, "yes"), (False, "no"), (None, "unknown"), ("unknown", "unknown"), (3, "3")],
    )
    def test_normalize_answer(self, raw, expected):
        assert normalize_answer(raw) == expected

    def test_yaml_bare_booleans(self, tmp_path):
        path = tmp_path / "answers.yaml"
        path.write_text('"2cii": yes\n"1i": no\n"1ii": ~\n"2cvi": Within last 12 months\n')
        assert load_answers_file(path) == {
            "2cii": "yes",
            "1i": "no",
            "1ii": "unknown",
            "2cvi": "Within last 12 months",
        }

    def test_empty_file(self, tmp_path):
        path = tmp_path / "answers.yaml"
        path.write_text("")
        assert load_answers_file(path) == {}

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "answers.yaml"
        path.write_text("- 1i\n- 1ii\n")
        with pytest.raises(ValueError):
            load_answers_file(path)

    def test_parse_answer_flags(self):
        assert parse_answer_flags(["2cii=yes", " 1i = no "]) == {"2cii": "yes", "1i": "no"}
        assert parse_answer_flags(None) == {}

    def test_parse_answer_flags_requires_equals(self):
        with pytest.raises(ValueError):
            parse_answer_flags(["2cii"])


def test_exit_codes():
    assert exit_code_for(FileNotFoundError("x")) == 2
    assert exit_code_for(RulesetError("x")) == 3
    assert exit_code_for(ValueError("x")) == 3
    assert exit_code_for(KeyError("x")) == 4
    assert exit_code_for(RuntimeError("x")) == 1


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------


def test_questions(console):
    code, out = run(["questions"], console)
    assert code == 0
    assert "Questionnaire" in out
    assert "2cvi" in out
    assert "1xvii" in out


def test_questions_single_category(console):
    code, out = run(["questions", "--category", "family"], console)
    assert code == 0
    assert "2cvii" in out
    assert "1xvii" not in out


def test_assess_flags(console):
    code, out = run(
        ["assess", "--answer", "2cii=yes", "--answer", "2ciii=yes"],
        console,
    )
    assert code == 0
    assert "Type C: Androgen excess and polycystic ovaries" in out
    assert "Scoring Breakdown" in out


def test_assess_pending_messages(console):
    code, out = run(["assess"], console)
    assert code == 0
    assert PENDING_TYPE_MESSAGE in out
    assert PENDING_SUBTYPE_MESSAGE in out
    assert "Your PCOS Profile" in out
    assert "Scoring Breakdown" in out


def test_assess_json(console, tmp_path):
    path = tmp_path / "answers.yaml"
    path.write_text('"2cii": yes\n"1i": yes\n"1ii": yes\n"1iii": yes\n')
    code, out = run(["assess", "--answers", str(path), "--json"], console)
    assert code == 0

    payload = json.loads(out)
    assert payload["result"]["type"] == "type-c"
    assert payload["result"]["criteria"] == {"ae": "high", "pco": "medium", "od": "none"}
    assert payload["metrics"] == {
        "androgenExcess": 10,
        "polycysticOvaries": 6,
        "ovulatoryDysfunction": 0,
    }
    assert payload["type_label"] == "Type C: Androgen excess and polycystic ovaries"


def test_answer_flag_overrides_file(console, tmp_path):
    path = tmp_path / "answers.yaml"
    path.write_text('"2cii": yes\n"2ciii": yes\n')
    code, out = run(
        ["assess", "--answers", str(path), "--answer", "2ciii=no", "--json"],
        console,
    )
    assert code == 0
    assert json.loads(out)["result"]["type"] == "unclear"


def test_assess_writes_svg(console, tmp_path):
    svg = tmp_path / "chart.svg"
    code, out = run(
        ["assess", "--answer", "2cii=yes", "--answer", "2civ=yes", "--svg", str(svg)],
        console,
    )
    assert code == 0
    assert "Chart written to" in out
    text = svg.read_text(encoding="utf-8")
    assert text.startswith("<svg")
    assert "hsl(" in text


def test_missing_answers_file(console, tmp_path):
    code, out = run(["assess", "--answers", str(tmp_path / "nope.yaml")], console)
    assert code == 2
    assert "File not found" in out


def test_bad_answer_flag(console):
    code, out = run(["assess", "--answer", "2cii"], console)
    assert code == 3
    assert "Invalid input" in out


def test_missing_ruleset_dir(console, tmp_path):
    code, _ = run(["--ruleset-dir", str(tmp_path / "missing"), "questions"], console)
    assert code == 2


def test_ruleset_dir_from_env(console, tmp_path, monkeypatch):
    monkeypatch.setenv("PHENOTYPE_RULESET_DIR", str(tmp_path))
    code, _ = run(["questions"], console)
    assert code == 2


def test_invalid_answer_values_still_assess(console):
    code, out = run(["assess", "--answer", "1i=maybe", "--answer", "9z=yes", "--json"], console)
    assert code == 0
    assert json.loads(out)["result"]["type"] == "unclear"


# ------------------------------------------------------------------
# Interactive
# ------------------------------------------------------------------


def test_interactive_all_yes(console, tmp_path, monkeypatch):
    asked = []

    def fake_ask(prompt, *, choices=None, **kwargs):
        asked.append(prompt)
        return "y" if "y" in choices else "1"

    monkeypatch.setattr(app.Prompt, "ask", fake_ask)
    svg = tmp_path / "chart.svg"

    code, out = run(["interactive", "--svg", str(svg)], console)

    assert code == 0
    assert len(asked) == 29
    assert "Step 5 of 5" in out
    assert "Answer" in out
    assert "Type A: Androgen excess, ovulatory dysfunction and polycystic ovaries" in out
    assert "Mixed Phenotype" in out
    assert svg.exists()


def test_interactive_all_unknown(console, monkeypatch):
    def fake_ask(prompt, *, choices=None, default=None, **kwargs):
        return default

    monkeypatch.setattr(app.Prompt, "ask", fake_ask)

    code, out = run(["interactive"], console)

    assert code == 0
    assert "Type A" not in out
    assert "Mixed Phenotype" not in out
