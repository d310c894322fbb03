"""
application.services.meals - Meal log.

"Today" is the current UTC calendar day, selected with an inclusive
created_at range from YYYY-MM-DD to YYYY-MM-DDT23:59:59. The bounds are
compared as strings, like the stored ISO timestamps.
"""

from __future__ import annotations

import logging
from typing import Optional

from remissio.application.context import StorageContext
from remissio.application.dto import MealEntry
from remissio.domain.entities import Meal, User
from remissio.domain.exceptions import ValidationError
from remissio.domain.models import Collection, Column
from remissio.domain.timestamps import to_iso

logger = logging.getLogger(__name__)

MEAL_IMAGE_BUCKET = "meal-images"


class MealService:
    def __init__(self, client: StorageContext):
        self._db = client.db
        self._storage = client.storage
        self._clock = client.clock

    def record(self, user: User, entry: MealEntry) -> Meal:
        if not entry.name.strip():
            raise ValidationError("Meal name is required.")
        if not entry.time.strip():
            raise ValidationError("Meal time is required.")

        meal = Meal(
            user_id=user.id,
            name=entry.name.strip(),
            time=entry.time.strip(),
            type=entry.type or None,
            ingredients=entry.ingredients,
            notes=entry.notes or None,
            image_url=entry.image_url or None,
            created_at=to_iso(self._clock()),
        )
        stored = self._db.insert(Collection.MEALS, [meal.to_record()]).unwrap()
        logger.info("Saved meal '%s' for user %s", meal.name, user.id)
        return Meal.from_record(stored[0])

    def today(self, user: User) -> list[Meal]:
        day = to_iso(self._clock())[:10]
        records = self._db.select_range(
            Collection.MEALS, Column.USER_ID, user.id,
            Column.CREATED_AT, day,
            Column.CREATED_AT, f"{day}T23:59:59",
        ).unwrap()
        return [Meal.from_record(r) for r in records]

    def history(self, user: User) -> list[Meal]:
        records = self._db.select(
            Collection.MEALS, Column.USER_ID, user.id, order_by=Column.CREATED_AT,
        ).unwrap()
        return [Meal.from_record(r) for r in records]

    def image_url(self, meal: Meal, expires_in: int = 3600) -> Optional[str]:
        if not meal.image_url:
            return None
        result = self._storage.create_signed_url(MEAL_IMAGE_BUCKET, meal.image_url, expires_in)
        return result.unwrap()["signed_url"]
