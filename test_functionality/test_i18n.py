"""
Interface text lookup: fallbacks, PUCAI labels and language resolution.
"""

import logging

import pytest

from remissio.domain.i18n import get_translator, load_tables
from remissio.domain.models import Language
from remissio.domain.scoring import load_questionnaire


@pytest.fixture(scope="module")
def tables():
    return load_tables()


@pytest.fixture(scope="module")
def questionnaire():
    return load_questionnaire()


def test_every_language_has_the_english_keys(tables):
    english = set(tables["en"])
    for lang in Language:
        assert set(tables[lang.value]) == english, lang


def test_lookup_and_formatting(tables):
    de = get_translator("de", tables)

    assert de.language is Language.DE
    assert de.t("current_mood") == "Aktuelle Stimmung"
    assert de.t("timeline_title", days=3) == "Letzte 3 Tage"
    assert de.mood(4) == "Gut"


def test_missing_key_falls_back_to_english_then_key():
    tables = {"en": {"hello": "Hello", "bye": "Bye"}, "fr": {"hello": "Bonjour"}}
    fr = get_translator("fr", tables)

    assert fr.t("hello") == "Bonjour"
    assert fr.t("bye") == "Bye"
    assert fr.t("nope") == "nope"


def test_unknown_language_uses_english(tables, caplog):
    with caplog.at_level(logging.WARNING):
        tr = get_translator("xx", tables)

    assert tr.language is Language.EN
    assert tr.t("current_mood") == "Current Mood"
    assert "Unknown language 'xx'" in caplog.text


def test_pucai_labels(tables, questionnaire):
    q = questionnaire.questions[0]
    de = get_translator("de", tables)

    assert de.question(q) == "Bauchschmerzen"
    assert de.option(q, q.option(0)) == "Keine Schmerzen"
    assert de.category(questionnaire.category(0)) == "Remission"
    assert get_translator("en", tables).option(q, q.option(1)) == "Pain can be ignored"


def test_pucai_labels_fall_back_to_table_text(questionnaire):
    q = questionnaire.questions[0]
    bare = get_translator("de", {"en": {}, "de": {}})

    assert bare.question(q) == q.question
    assert bare.description(q) == q.description
    assert bare.category(questionnaire.category(80)).startswith("Severe")


def test_meal_type_labels(tables):
    es = get_translator("es", tables)

    assert es.meal_type("lunch") == "Almuerzo"
    assert es.meal_type("brunch") == "brunch"
    assert es.meal_type(None) == ""


def test_factory_uses_profile_language_over_default(factory, user):
    assert factory.create_translator().language is Language.DE
    assert factory.create_translator(user).language is Language.DE

    factory.create_profile_service().set_language(user, "fr")

    assert factory.create_translator(user).language is Language.FR
    assert factory.create_translator().language is Language.DE
