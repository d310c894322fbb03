"""
domain.entities - Persistence-aware types (have IDs, timestamps).

One dataclass per collection. Records are stored as untyped JSON objects;
from_record() / to_record() translate between that layout and these types.

Identifiers and timestamps are assigned by the local database on insert,
not by the entities themselves. An empty id or created_at means "not yet
stored" and is left out of to_record() so the database fills it in.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Optional

_ASSIGNED_ON_INSERT = ("id", "created_at", "updated_at")


def _from_record(cls, record: dict[str, Any]):
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in record.items() if k in known})


def _to_record(entity) -> dict[str, Any]:
    record = asdict(entity)
    for key in _ASSIGNED_ON_INSERT:
        if key in record and not record[key]:
            del record[key]
    return record


@dataclass
class User:
    """Account identity. Persisted as {id, email, user_metadata: {name}}."""
    id: str = ""
    email: str = ""
    name: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> User:
        metadata = record.get("user_metadata") or {}
        return cls(
            id=record.get("id", ""),
            email=record.get("email", ""),
            name=metadata.get("name"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "user_metadata": {"name": self.name},
        }


@dataclass
class Profile:
    """Demographic and medical details; id matches the owning User."""
    id: str = ""
    email: str = ""
    name: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    age: Optional[int] = None
    weight: Optional[float] = None
    height_in_cm: Optional[int] = None
    year_of_diagnosis: Optional[int] = None
    current_medication: Optional[str] = None
    notes: Optional[str] = None
    language: Optional[str] = None
    onboarding_completed: bool = False
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Profile:
        return _from_record(cls, record)

    def to_record(self) -> dict[str, Any]:
        return _to_record(self)


@dataclass
class Pucai:
    """Paediatric Ulcerative Colitis Activity Index entry."""
    id: str = ""
    user_id: str = ""
    stomachache: int = 0
    rectal_bleeding: int = 0
    texture: int = 0
    frequency: int = 0
    nightly_bowel_movements: int = 0
    level_of_activity: int = 0
    sum: int = 0
    created_at: str = ""

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Pucai:
        return _from_record(cls, record)

    def to_record(self) -> dict[str, Any]:
        return _to_record(self)


@dataclass
class Mood:
    """Mood rating from 1 (very bad) to 5 (very good)."""
    id: str = ""
    user_id: str = ""
    amount: int = 0
    notes: Optional[str] = None
    created_at: str = ""

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Mood:
        return _from_record(cls, record)

    def to_record(self) -> dict[str, Any]:
        return _to_record(self)


@dataclass
class Meal:
    """A logged meal. time is the wall-clock string the user entered."""
    id: str = ""
    user_id: str = ""
    name: str = ""
    time: str = ""
    type: Optional[str] = None
    ingredients: str = ""
    notes: Optional[str] = None
    image_url: Optional[str] = None
    created_at: str = ""

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Meal:
        return _from_record(cls, record)

    def to_record(self) -> dict[str, Any]:
        return _to_record(self)
