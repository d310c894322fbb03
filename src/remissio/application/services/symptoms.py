"""
application.services.symptoms - PUCAI questionnaire submissions.

Answers are option values per question id; points and the total come from
the Questionnaire table, never from this module.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from remissio.application.context import StorageContext
from remissio.domain.entities import Pucai, User
from remissio.domain.models import Collection, Column
from remissio.domain.scoring import PucaiCategory, Questionnaire, load_questionnaire
from remissio.domain.timestamps import to_iso

logger = logging.getLogger(__name__)


class SymptomService:
    """Records and reads PUCAI scores."""

    def __init__(self, client: StorageContext, questionnaire: Optional[Questionnaire] = None):
        self._db = client.db
        self._clock = client.clock
        self.questionnaire = questionnaire or load_questionnaire()

    def record(self, user: User, answers: Mapping[str, int]) -> Pucai:
        """Validate a complete answer set, score it and store one Pucai."""
        self.questionnaire.validate(answers)
        pucai = Pucai(
            user_id=user.id,
            sum=self.questionnaire.score(answers),
            created_at=to_iso(self._clock()),
            **{qid: answers[qid] for qid in self.questionnaire.question_ids},
        )
        stored = self._db.insert(Collection.PUCAIS, [pucai.to_record()]).unwrap()
        logger.info("Saved PUCAI score %d for user %s", pucai.sum, user.id)
        return Pucai.from_record(stored[0])

    def latest(self, user: User) -> Optional[Pucai]:
        records = self._db.select(
            Collection.PUCAIS, Column.USER_ID, user.id,
            order_by=Column.CREATED_AT, ascending=False, limit=1,
        ).unwrap()
        return Pucai.from_record(records[0]) if records else None

    def history(self, user: User) -> list[Pucai]:
        """All scores for the user, newest first."""
        records = self._db.select(
            Collection.PUCAIS, Column.USER_ID, user.id, order_by=Column.CREATED_AT,
        ).unwrap()
        return [Pucai.from_record(r) for r in records]

    def category(self, score: int) -> PucaiCategory:
        return self.questionnaire.category(score)
