"""
application.services.dashboard - Landing view for a signed-in user.

Gathers the latest PUCAI score, today's meals and the latest mood.
Refuses to build a summary until the profile has completed onboarding.
"""

from __future__ import annotations

import logging

from remissio.application.dto import DashboardSummary
from remissio.application.services.meals import MealService
from remissio.application.services.mood import MoodService
from remissio.application.services.profile import ProfileService
from remissio.application.services.symptoms import SymptomService
from remissio.domain.entities import User
from remissio.domain.exceptions import OnboardingRequiredError
from remissio.domain.scoring import mood_emoji, mood_label

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(
        self,
        profiles: ProfileService,
        symptoms: SymptomService,
        meals: MealService,
        moods: MoodService,
    ):
        self._profiles = profiles
        self._symptoms = symptoms
        self._meals = meals
        self._moods = moods

    def summary(self, user: User) -> DashboardSummary:
        profile = self._profiles.find_profile(user)
        if profile is None or not profile.onboarding_completed:
            raise OnboardingRequiredError("Please complete onboarding first.")

        latest_pucai = self._symptoms.latest(user)
        latest_mood = self._moods.latest(user)
        summary = DashboardSummary(
            profile=profile,
            latest_pucai=latest_pucai,
            pucai_category=(
                self._symptoms.category(latest_pucai.sum) if latest_pucai else None
            ),
            today_meals=self._meals.today(user),
            latest_mood=latest_mood,
            mood_label=mood_label(latest_mood.amount) if latest_mood else None,
            mood_emoji=mood_emoji(latest_mood.amount) if latest_mood else None,
        )
        logger.debug(
            "Dashboard for %s: pucai=%s meals_today=%d mood=%s",
            user.id,
            latest_pucai.sum if latest_pucai else None,
            len(summary.today_meals),
            latest_mood.amount if latest_mood else None,
        )
        return summary
