import pytest

from phenotype_rulesets.engine import PhenotypeEngine
from phenotype_rulesets.ruleset import RulesetStore

# Literal rule qid sets (must match v1/rules/*.yaml).
AE_IDS = ["1vi", "1xi", "1xii", "1xiii", "1xiv", "1xv", "1xvi", "1xvii"]
PCO_IDS = ["1i", "1ii", "1iii"]
OD_IDS = ["1vii", "1viii", "1ix", "1x"]
PERIOD_IDS = ["1vii", "1viii", "1ix"]
METABOLIC_IDS = ["1iv", "1v"]

AE_DIAGNOSED = "2cii"
PCO_DIAGNOSED = "2ciii"
OD_DIAGNOSED = "2civ"


def answers_with(yes=(), no=(), **extra):
    """Build an answers dict: listed qids yes/no, plus any explicit extras."""
    answers = {qid: "no" for qid in no}
    answers.update({qid: "yes" for qid in yes})
    answers.update(extra)
    return answers


@pytest.fixture(scope="session")
def store():
    """Load the full RulesetStore once for the entire test session."""
    s = RulesetStore()
    s.load()
    return s


@pytest.fixture(scope="session")
def engine(store):
    return PhenotypeEngine(store)
