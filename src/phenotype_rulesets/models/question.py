"""Questionnaire catalog models.

The catalog is static reference data loaded from ``v1/const/questions.yaml``.
Two question types exist:

  - toggle: answered with ``yes`` / ``no`` / ``unknown``; the only type the
    scoring rules read
  - dropdown: a single choice from ``options``; kept for record-keeping and
    never scored

Answers are a plain ``dict[str, str]`` keyed by question id.  A missing key
is equivalent to ``unknown`` (toggle) or an empty string (dropdown).
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator

AnswerValue = Literal["yes", "no", "unknown"]

QuestionCategoryId = Literal["physical", "period", "skin", "diagnosis", "family"]

QuestionType = Literal["toggle", "dropdown"]

# question id -> AnswerValue for toggles, or the selected option for dropdowns
Answers = Dict[str, str]


class QuestionCategory(BaseModel):
    """A group of questions presented together, with its prompt title."""

    model_config = ConfigDict(frozen=True)

    id: QuestionCategoryId
    title: str


class Question(BaseModel):
    """A single catalog entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    category: QuestionCategoryId
    type: QuestionType
    options: Optional[List[str]] = None

    @model_validator(mode="after")
    def _chk(self):
        if self.type == "dropdown" and not self.options:
            raise ValueError(f"dropdown question {self.id} needs at least one option")
        if self.type == "toggle" and self.options:
            raise ValueError(f"toggle question {self.id} must not declare options")
        return self

    @property
    def is_toggle(self) -> bool:
        return self.type == "toggle"

    def blank_answer(self) -> str:
        """Answer value a fresh form starts with for this question."""
        return "unknown" if self.is_toggle else ""
