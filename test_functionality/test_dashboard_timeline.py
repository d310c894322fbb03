"""
Dashboard summary and the day-by-day timeline.
"""

import pytest

from conftest import pucai_answers
from remissio.application.dto import MealEntry, MoodEntry, OnboardingRequest
from remissio.domain.exceptions import OnboardingRequiredError, ValidationError


@pytest.fixture
def onboarded(factory, user):
    factory.create_profile_service().complete_onboarding(
        user, OnboardingRequest(age=28, year_of_diagnosis=2020),
    )
    return user


def test_dashboard_requires_onboarding(factory, user):
    with pytest.raises(OnboardingRequiredError):
        factory.create_dashboard_service().summary(user)


def test_empty_dashboard(factory, onboarded):
    summary = factory.create_dashboard_service().summary(onboarded)

    assert summary.profile.onboarding_completed is True
    assert summary.latest_pucai is None
    assert summary.pucai_category is None
    assert summary.today_meals == []
    assert summary.latest_mood is None
    assert summary.mood_label is None


def test_dashboard_shows_latest_entries(factory, onboarded, clock):
    symptoms = factory.create_symptom_service()
    meals = factory.create_meal_service()
    moods = factory.create_mood_service()

    clock.set("2024-05-09T18:00:00")
    meals.record(onboarded, MealEntry(name="Yesterday's dinner", time="18:00"))
    moods.record(onboarded, MoodEntry(amount=1))
    clock.set("2024-05-10T08:00:00")
    symptoms.record(onboarded, pucai_answers(rectal_bleeding=2))
    meals.record(onboarded, MealEntry(name="Oatmeal", time="08:00", type="breakfast"))
    moods.record(onboarded, MoodEntry(amount=4))

    summary = factory.create_dashboard_service().summary(onboarded)

    assert summary.latest_pucai.sum == 20
    assert summary.pucai_category.name == "mild"
    assert [m.name for m in summary.today_meals] == ["Oatmeal"]
    assert summary.latest_mood.amount == 4
    assert summary.mood_label == "Good"
    assert summary.mood_emoji == "😊"


def test_timeline_three_days(factory, user, clock):
    symptoms = factory.create_symptom_service()
    meals = factory.create_meal_service()
    moods = factory.create_mood_service()

    clock.set("2024-05-08T08:00:00")
    symptoms.record(user, pucai_answers(stomachache=2, rectal_bleeding=1))
    clock.set("2024-05-08T20:00:00")
    symptoms.record(user, pucai_answers(stomachache=1))
    clock.set("2024-05-09T12:00:00")
    moods.record(user, MoodEntry(amount=2))
    meals.record(user, MealEntry(name="Rice", time="12:00"))
    clock.set("2024-05-10T07:00:00")
    moods.record(user, MoodEntry(amount=4))
    meals.record(user, MealEntry(name="Toast", time="07:00"))
    meals.record(user, MealEntry(name="Banana", time="07:05"))
    clock.set("2024-05-01T12:00:00")
    meals.record(user, MealEntry(name="Outside the window", time="12:00"))

    clock.set("2024-05-10T09:30:00")
    timeline = factory.create_timeline_service().build(user, days=3)

    assert timeline.days == 3
    assert [(p.date, p.pucai, p.mood, p.meals) for p in timeline.points] == [
        ("2024-05-08", 5, None, 0),
        ("2024-05-09", None, 2, 1),
        ("2024-05-10", None, 4, 2),
    ]
    avg = timeline.averages
    assert avg.avg_pucai == 5.0
    assert avg.avg_mood == 3.0
    assert avg.total_meals == 3
    assert avg.avg_meals_per_day == 1.0


def test_timeline_without_data(factory, user):
    timeline = factory.create_timeline_service().build(user)

    assert len(timeline.points) == 7
    assert timeline.points[-1].date == "2024-05-10"
    assert timeline.averages.avg_pucai is None
    assert timeline.averages.avg_mood is None
    assert timeline.averages.avg_meals_per_day == 0.0


def test_timeline_rejects_empty_window(factory, user):
    with pytest.raises(ValidationError):
        factory.create_timeline_service().build(user, days=0)
