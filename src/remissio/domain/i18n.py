"""
domain.i18n - Interface text in the supported languages.

All strings live in remissio/data/i18n.json, one flat table per language
code. A key missing from a table falls back to English, then to the key
itself, so a partial translation never breaks output.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from remissio.domain.models import Language
from remissio.domain.scoring import PucaiCategory, PucaiOption, PucaiQuestion

logger = logging.getLogger(__name__)

I18N_TABLE = Path(__file__).resolve().parent.parent / "data" / "i18n.json"

FALLBACK_LANGUAGE = Language.EN


@dataclass(frozen=True)
class Translator:
    """Looks up interface text for one language."""
    language: Language
    strings: Mapping[str, str]
    fallback: Mapping[str, str]

    def t(self, key: str, **values: Any) -> str:
        text = self.strings.get(key)
        if text is None:
            text = self.fallback.get(key, key)
        return text.format(**values) if values else text

    def mood(self, amount: Optional[int]) -> str:
        return self.t(f"mood.{amount}")

    def meal_type(self, meal_type: Optional[str]) -> str:
        if not meal_type:
            return ""
        key = f"meal_type.{meal_type}"
        return self.t(key) if key in self.strings or key in self.fallback else meal_type

    def category(self, category: PucaiCategory) -> str:
        return self.strings.get(f"category.{category.name}", category.label)

    def question(self, question: PucaiQuestion) -> str:
        return self.strings.get(f"pucai.{question.id}", question.question)

    def description(self, question: PucaiQuestion) -> str:
        return self.strings.get(f"pucai.{question.id}.description", question.description)

    def option(self, question: PucaiQuestion, option: PucaiOption) -> str:
        return self.strings.get(f"pucai.{question.id}.{option.value}", option.label)


def load_tables(path: Optional[Path] = None) -> dict[str, dict[str, str]]:
    with open(path or I18N_TABLE, "r", encoding="utf-8") as f:
        return json.load(f)


def get_translator(
    language: Language | str,
    tables: Optional[Mapping[str, Mapping[str, str]]] = None,
) -> Translator:
    """Translator for a language code; unknown codes get English."""
    tables = tables if tables is not None else load_tables()
    try:
        lang = Language(language)
    except ValueError:
        logger.warning("Unknown language '%s', using '%s'", language, FALLBACK_LANGUAGE.value)
        lang = FALLBACK_LANGUAGE
    fallback = tables.get(FALLBACK_LANGUAGE.value, {})
    return Translator(language=lang, strings=tables.get(lang.value, fallback), fallback=fallback)
