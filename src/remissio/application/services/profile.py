"""
application.services.profile - Onboarding and profile management.

A Profile is created (un-onboarded) at sign-up. Onboarding fills in the
minimum medical details and flips onboarding_completed; the dashboard
refuses to render until it has. Later edits go through update_profile().
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Optional

from remissio.application.context import StorageContext
from remissio.application.dto import OnboardingRequest, ProfileUpdate
from remissio.domain.entities import Profile, User
from remissio.domain.exceptions import NotFoundError, ValidationError
from remissio.domain.models import Collection, Column, Language

logger = logging.getLogger(__name__)

EARLIEST_DIAGNOSIS_YEAR = 1900


class ProfileService:
    """Reads and writes the profiles collection for the signed-in user."""

    def __init__(self, client: StorageContext):
        self._db = client.db
        self._auth = client.auth
        self._clock = client.clock

    def get_profile(self, user: User) -> Profile:
        record = self._db.select_one(Collection.PROFILES, Column.ID, user.id).unwrap()
        return Profile.from_record(record)

    def find_profile(self, user: User) -> Optional[Profile]:
        """Like get_profile() but returns None instead of raising NotFoundError."""
        try:
            return self.get_profile(user)
        except NotFoundError:
            return None

    def complete_onboarding(self, user: User, request: OnboardingRequest) -> Profile:
        self._validate_age(request.age)
        self._validate_diagnosis_year(request.year_of_diagnosis)

        record = self._db.upsert(Collection.PROFILES, {
            "id": user.id,
            "email": user.email,
            "age": request.age,
            "year_of_diagnosis": request.year_of_diagnosis,
            "current_medication": request.current_medication,
            "notes": request.notes,
            "onboarding_completed": True,
        }).unwrap()
        logger.info("User %s completed onboarding", user.id)
        return Profile.from_record(record)

    def update_profile(self, user: User, update: ProfileUpdate) -> Profile:
        """Upsert the given fields; a new name is also pushed to the account."""
        patch: dict[str, Any] = {k: v for k, v in asdict(update).items() if v is not None}
        if "age" in patch:
            self._validate_age(patch["age"])
        if "year_of_diagnosis" in patch:
            self._validate_diagnosis_year(patch["year_of_diagnosis"])
        if "weight" in patch and patch["weight"] <= 0:
            raise ValidationError("Weight must be positive.")
        if "height_in_cm" in patch and patch["height_in_cm"] <= 0:
            raise ValidationError("Height must be positive.")
        if "language" in patch:
            patch["language"] = self._parse_language(patch["language"]).value

        if "name" in patch:
            self._auth.update_user({"name": patch["name"]}).unwrap()

        record = self._db.upsert(
            Collection.PROFILES, {"id": user.id, "email": user.email, **patch},
        ).unwrap()
        logger.debug("Updated profile %s fields: %s", user.id, sorted(patch))
        return Profile.from_record(record)

    def set_language(self, user: User, language: str) -> Profile:
        lang = self._parse_language(language)
        record = self._db.update(
            Collection.PROFILES, {"language": lang.value}, Column.ID, user.id,
        ).unwrap()
        if record is None:
            raise NotFoundError(f"No profile for user {user.id}.")
        return Profile.from_record(record)

    # ------------------------------------------------------------------

    @staticmethod
    def _parse_language(value: str) -> Language:
        try:
            return Language(value)
        except ValueError:
            allowed = ", ".join(lang.value for lang in Language)
            raise ValidationError(f"Unsupported language '{value}' (choose {allowed}).") from None

    @staticmethod
    def _validate_age(age: int) -> None:
        if not 0 < age < 150:
            raise ValidationError("Age must be between 1 and 149.")

    def _validate_diagnosis_year(self, year: int) -> None:
        current_year = self._clock().year
        if not EARLIEST_DIAGNOSIS_YEAR <= year <= current_year:
            raise ValidationError(
                f"Year of diagnosis must be between {EARLIEST_DIAGNOSIS_YEAR} and {current_year}."
            )
