"""
Application services wired through ServiceFactory on an in-memory store.
"""

import logging

import pytest

from conftest import pucai_answers
from remissio.application.dto import (
    MealEntry,
    MoodEntry,
    OnboardingRequest,
    ProfileUpdate,
    SignInRequest,
    SignUpRequest,
)
from remissio.domain.entities import Meal
from remissio.domain.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotSignedInError,
    ValidationError,
)
from remissio.factory import ServiceFactory
from remissio.infrastructure.config import Settings


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("email", ["", "not-an-email", "a@b", "@example.com"])
def test_sign_up_rejects_bad_email(factory, email):
    with pytest.raises(ValidationError):
        factory.create_authentication_service().sign_up(SignUpRequest(email=email, password="pw"))


def test_sign_up_requires_password(factory):
    with pytest.raises(ValidationError, match="Password"):
        factory.create_authentication_service().sign_up(
            SignUpRequest(email="a@example.com", password="")
        )


def test_sign_up_blank_name_is_none(factory):
    user = factory.create_authentication_service().sign_up(
        SignUpRequest(email=" a@example.com ", password="pw", name="   ")
    )

    assert user.email == "a@example.com"
    assert user.name is None


def test_duplicate_and_bad_credentials_raise(factory, user):
    auth = factory.create_authentication_service()

    with pytest.raises(DuplicateEmailError):
        auth.sign_up(SignUpRequest(email="alex@example.com", password="x"))

    auth.sign_out()
    with pytest.raises(InvalidCredentialsError):
        auth.sign_in(SignInRequest(email="alex@example.com", password="nope"))
    with pytest.raises(NotSignedInError):
        auth.require_user()

    assert auth.sign_in(SignInRequest(email="alex@example.com", password="secret1")) == user
    assert auth.require_user() == user


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

def test_new_profile_is_not_onboarded(factory, user):
    profile = factory.create_profile_service().get_profile(user)

    assert profile.id == user.id
    assert profile.onboarding_completed is False


def test_complete_onboarding(factory, user):
    service = factory.create_profile_service()

    profile = service.complete_onboarding(
        user, OnboardingRequest(age=31, year_of_diagnosis=2019, current_medication="Mesalazine"),
    )

    assert profile.onboarding_completed is True
    assert profile.age == 31
    assert profile.name == "Alex"
    assert service.get_profile(user) == profile


@pytest.mark.parametrize("age,year", [(0, 2019), (150, 2019), (30, 1899), (30, 2025)])
def test_onboarding_validation(factory, user, age, year):
    with pytest.raises(ValidationError):
        factory.create_profile_service().complete_onboarding(
            user, OnboardingRequest(age=age, year_of_diagnosis=year),
        )


def test_update_profile_pushes_name_to_account(factory, user):
    profile = factory.create_profile_service().update_profile(
        user, ProfileUpdate(name="Alexandra", weight=61.5, language="en"),
    )

    assert profile.name == "Alexandra"
    assert profile.weight == 61.5
    assert profile.language == "en"
    assert profile.age is None
    assert factory.create_authentication_service().current_user().name == "Alexandra"


def test_update_profile_rejects_unknown_language(factory, user):
    with pytest.raises(ValidationError, match="Unsupported language"):
        factory.create_profile_service().update_profile(user, ProfileUpdate(language="xx"))


def test_set_language(factory, user):
    assert factory.create_profile_service().set_language(user, "fr").language == "fr"


# ---------------------------------------------------------------------------
# Tracking
# ---------------------------------------------------------------------------

def test_symptom_record_stores_answers_and_sum(factory, user, clock):
    service = factory.create_symptom_service()

    pucai = service.record(user, pucai_answers(stomachache=3, texture=1, level_of_activity=2))

    assert pucai.id
    assert pucai.sum == 15 + 5 + 10
    assert pucai.texture == 1
    assert pucai.created_at == "2024-05-10T09:30:00.000Z"
    assert service.category(pucai.sum).name == "mild"

    clock.advance(hours=1)
    later = service.record(user, pucai_answers())
    assert service.latest(user) == later
    assert [p.sum for p in service.history(user)] == [0, 30]


def test_symptom_record_rejects_incomplete_answers(factory, user):
    service = factory.create_symptom_service()

    with pytest.raises(ValidationError):
        service.record(user, {"stomachache": 1})
    assert service.latest(user) is None


@pytest.mark.parametrize("amount", [0, 6, True, 2.5])
def test_mood_rejects_out_of_scale(factory, user, amount):
    with pytest.raises(ValidationError):
        factory.create_mood_service().record(user, MoodEntry(amount=amount))


def test_mood_latest(factory, user, clock):
    service = factory.create_mood_service()
    service.record(user, MoodEntry(amount=2))
    clock.advance(minutes=1)
    service.record(user, MoodEntry(amount=4, notes="better"))

    latest = service.latest(user)

    assert latest.amount == 4
    assert latest.notes == "better"


def test_meal_requires_name_and_time(factory, user):
    service = factory.create_meal_service()

    with pytest.raises(ValidationError):
        service.record(user, MealEntry(name=" ", time="08:00"))
    with pytest.raises(ValidationError):
        service.record(user, MealEntry(name="Toast", time=""))


def test_today_meals_only_current_user_and_day(factory, user, clock):
    meals = factory.create_meal_service()
    auth = factory.create_authentication_service()

    clock.set("2024-05-09T23:59:00")
    meals.record(user, MealEntry(name="Late snack", time="23:59", type="snack"))
    clock.set("2024-05-10T00:00:00")
    meals.record(user, MealEntry(name="Porridge", time="00:00", type="breakfast"))
    clock.set("2024-05-10T20:00:00")
    meals.record(user, MealEntry(name="Tea", time="20:00"))

    other = auth.sign_up(SignUpRequest(email="sam@example.com", password="pw"))
    meals.record(other, MealEntry(name="Pizza", time="12:00"))

    clock.set("2024-05-10T12:00:00")
    assert sorted(m.name for m in meals.today(user)) == ["Porridge", "Tea"]
    assert [m.name for m in meals.today(other)] == ["Pizza"]


def test_meal_image_url(factory, user):
    service = factory.create_meal_service()

    with_image = service.record(user, MealEntry(name="Salad", time="12:30", image_url="meals/salad.jpg"))
    without = service.record(user, MealEntry(name="Soup", time="19:00"))

    assert service.image_url(with_image) == "meals/salad.jpg"
    assert service.image_url(without) is None
    with pytest.raises(ValidationError):
        service.image_url(Meal(image_url="meals/x.jpg"), expires_in=0)


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def test_storage_context_is_shared_and_logged(store, clock, caplog):
    f = ServiceFactory(Settings(storage_backend="memory"), store=store, clock=clock)
    f.initialize()
    with caplog.at_level(logging.INFO, logger="remissio.factory"):
        first = f.create_storage_context()
        second = f.create_storage_context()

    assert first is second
    assert caplog.text.count(first.context_id) == 1
    assert "MemoryKeyValueStore" in caplog.text
