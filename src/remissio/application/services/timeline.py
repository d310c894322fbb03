"""
application.services.timeline - Day-by-day history over a window of days.

For each UTC day in the window (oldest first) the point holds the latest
PUCAI sum and mood recorded that day and the number of meals. Averages
skip days without a value; meals per day divides by the full window.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from remissio.application.context import StorageContext
from remissio.application.dto import Timeline, TimelineAverages, TimelinePoint
from remissio.application.services.meals import MealService
from remissio.application.services.mood import MoodService
from remissio.application.services.symptoms import SymptomService
from remissio.domain.entities import User
from remissio.domain.exceptions import ValidationError
from remissio.domain.timestamps import day_of, to_iso


class TimelineService:
    def __init__(
        self,
        client: StorageContext,
        symptoms: SymptomService,
        meals: MealService,
        moods: MoodService,
    ):
        self._clock = client.clock
        self._symptoms = symptoms
        self._meals = meals
        self._moods = moods

    def build(self, user: User, days: int = 7) -> Timeline:
        if days <= 0:
            raise ValidationError("days must be positive.")

        today = self._clock()
        dates = [to_iso(today - timedelta(days=i))[:10] for i in range(days - 1, -1, -1)]

        # history() is newest first, so setdefault keeps each day's latest.
        pucai_by_day: dict[str, int] = {}
        for p in self._symptoms.history(user):
            pucai_by_day.setdefault(day_of(p.created_at), p.sum)
        mood_by_day: dict[str, int] = {}
        for m in self._moods.history(user):
            mood_by_day.setdefault(day_of(m.created_at), m.amount)
        meals_by_day: dict[str, int] = {}
        for meal in self._meals.history(user):
            day = day_of(meal.created_at)
            meals_by_day[day] = meals_by_day.get(day, 0) + 1

        points = [
            TimelinePoint(
                date=d,
                pucai=pucai_by_day.get(d),
                mood=mood_by_day.get(d),
                meals=meals_by_day.get(d, 0),
            )
            for d in dates
        ]
        return Timeline(days=days, points=points, averages=_averages(points, days))


def _mean(values: list[int]) -> Optional[float]:
    return round(sum(values) / len(values), 1) if values else None


def _averages(points: list[TimelinePoint], days: int) -> TimelineAverages:
    total_meals = sum(p.meals for p in points)
    return TimelineAverages(
        avg_pucai=_mean([p.pucai for p in points if p.pucai is not None]),
        avg_mood=_mean([p.mood for p in points if p.mood is not None]),
        total_meals=total_meals,
        avg_meals_per_day=round(total_meals / days, 1),
    )
