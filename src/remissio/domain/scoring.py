"""
domain.scoring - PUCAI questionnaire, mood and meal scales.

The PUCAI question set, the points per answer and the category thresholds
are data (remissio/data/pucai.json). This module only loads and applies
them; nothing here hard-codes a weight.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from remissio.domain.exceptions import ValidationError

PUCAI_TABLE = Path(__file__).resolve().parent.parent / "data" / "pucai.json"


@dataclass(frozen=True)
class PucaiOption:
    value: int
    label: str
    points: int


@dataclass(frozen=True)
class PucaiQuestion:
    id: str
    question: str
    description: str
    options: tuple[PucaiOption, ...]

    def option(self, value: int) -> Optional[PucaiOption]:
        return next((o for o in self.options if o.value == value), None)


@dataclass(frozen=True)
class PucaiCategory:
    """Disease-activity band. below=None marks the open-ended top band."""
    name: str
    label: str
    color: str
    below: Optional[int] = None


@dataclass(frozen=True)
class Questionnaire:
    """The full PUCAI table: ordered questions plus ascending categories."""
    questions: tuple[PucaiQuestion, ...]
    categories: tuple[PucaiCategory, ...]

    @property
    def question_ids(self) -> list[str]:
        return [q.id for q in self.questions]

    def validate(self, answers: Mapping[str, int]) -> None:
        """Every question answered, with one of its own option values."""
        missing = [q.id for q in self.questions if q.id not in answers]
        if missing:
            raise ValidationError(
                f"Please answer all questions (missing: {', '.join(missing)})."
            )
        unknown = set(answers) - set(self.question_ids)
        if unknown:
            raise ValidationError(f"Unknown questions: {', '.join(sorted(unknown))}.")
        for q in self.questions:
            if q.option(answers[q.id]) is None:
                allowed = ", ".join(str(o.value) for o in q.options)
                raise ValidationError(
                    f"Invalid answer {answers[q.id]!r} for '{q.id}' (allowed: {allowed})."
                )

    def score(self, answers: Mapping[str, int]) -> int:
        """Sum of points for the chosen options; unanswered questions add 0."""
        total = 0
        for q in self.questions:
            opt = q.option(answers.get(q.id, -1))
            total += opt.points if opt else 0
        return total

    def category(self, score: int) -> PucaiCategory:
        for cat in self.categories:
            if cat.below is None or score < cat.below:
                return cat
        return self.categories[-1]


def parse_questionnaire(raw: Mapping) -> Questionnaire:
    """Build a Questionnaire from the JSON layout of pucai.json."""
    questions = tuple(
        PucaiQuestion(
            id=q["id"],
            question=q["question"],
            description=q.get("description", ""),
            options=tuple(
                PucaiOption(value=int(o["value"]), label=o["label"], points=int(o["points"]))
                for o in q["options"]
            ),
        )
        for q in raw["questions"]
    )
    categories = tuple(
        PucaiCategory(
            name=c["name"], label=c["label"], color=c.get("color", ""), below=c.get("below"),
        )
        for c in raw["categories"]
    )
    if not questions or not categories:
        raise ValidationError("PUCAI table needs at least one question and one category.")
    return Questionnaire(questions=questions, categories=categories)


def load_questionnaire(path: Optional[Path] = None) -> Questionnaire:
    """Load the PUCAI table, by default the one bundled in remissio/data."""
    with open(path or PUCAI_TABLE, "r", encoding="utf-8") as f:
        return parse_questionnaire(json.load(f))


# ---------------------------------------------------------------------------
# Mood and meal scales
# ---------------------------------------------------------------------------

MOOD_MIN = 1
MOOD_MAX = 5

MOOD_LABELS = {
    1: "Very bad",
    2: "Bad",
    3: "Neutral",
    4: "Good",
    5: "Very good",
}

MOOD_EMOJIS = {
    1: "😢",
    2: "😞",
    3: "😐",
    4: "😊",
    5: "😄",
}

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


def mood_label(amount: int) -> str:
    return MOOD_LABELS.get(amount, "Unknown")


def mood_emoji(amount: int) -> str:
    return MOOD_EMOJIS.get(amount, MOOD_EMOJIS[3])
