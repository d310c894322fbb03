"""
application.services.mood - Mood ratings (1 = very bad .. 5 = very good).
"""

from __future__ import annotations

import logging
from typing import Optional

from remissio.application.context import StorageContext
from remissio.application.dto import MoodEntry
from remissio.domain.entities import Mood, User
from remissio.domain.exceptions import ValidationError
from remissio.domain.models import Collection, Column
from remissio.domain.scoring import MOOD_MAX, MOOD_MIN
from remissio.domain.timestamps import to_iso

logger = logging.getLogger(__name__)


class MoodService:
    def __init__(self, client: StorageContext):
        self._db = client.db
        self._clock = client.clock

    def record(self, user: User, entry: MoodEntry) -> Mood:
        if isinstance(entry.amount, bool) or not isinstance(entry.amount, int):
            raise ValidationError("Mood must be a whole number.")
        if not MOOD_MIN <= entry.amount <= MOOD_MAX:
            raise ValidationError(f"Mood must be between {MOOD_MIN} and {MOOD_MAX}.")

        mood = Mood(
            user_id=user.id,
            amount=entry.amount,
            notes=entry.notes or None,
            created_at=to_iso(self._clock()),
        )
        stored = self._db.insert(Collection.MOODS, [mood.to_record()]).unwrap()
        logger.info("Saved mood %d for user %s", entry.amount, user.id)
        return Mood.from_record(stored[0])

    def latest(self, user: User) -> Optional[Mood]:
        records = self._db.select(
            Collection.MOODS, Column.USER_ID, user.id,
            order_by=Column.CREATED_AT, ascending=False, limit=1,
        ).unwrap()
        return Mood.from_record(records[0]) if records else None

    def history(self, user: User) -> list[Mood]:
        records = self._db.select(
            Collection.MOODS, Column.USER_ID, user.id, order_by=Column.CREATED_AT,
        ).unwrap()
        return [Mood.from_record(r) for r in records]
