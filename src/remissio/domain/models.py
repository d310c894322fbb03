"""
domain.models - Value objects for the storage shim.

Immutable containers and enums with no dependencies on infrastructure:
    - Collection / Column  → the persisted collections and the fields
                             that may be filtered or sorted on
    - Result               → the uniform (data, error) pair every shim
                             operation returns
    - Language             → supported interface languages
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from remissio.domain.exceptions import DomainError, ValidationError

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Collections and columns
# ---------------------------------------------------------------------------

class Collection(str, Enum):
    """Named collections, each persisted as one JSON array under its own key."""
    USERS = "users"
    CURRENT_USER = "current_user"
    PROFILES = "profiles"
    PUCAIS = "pucais"
    MOODS = "moods"
    MEALS = "meals"


class Column(str, Enum):
    """Fields that may appear in an equality, range or ordering predicate."""
    ID = "id"
    USER_ID = "user_id"
    EMAIL = "email"
    NAME = "name"
    TYPE = "type"
    TIME = "time"
    AMOUNT = "amount"
    SUM = "sum"
    LANGUAGE = "language"
    ONBOARDING_COMPLETED = "onboarding_completed"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


_COMMON = frozenset({Column.ID, Column.CREATED_AT, Column.UPDATED_AT})

COLLECTION_COLUMNS: dict[Collection, frozenset[Column]] = {
    Collection.USERS: _COMMON | {Column.EMAIL},
    Collection.CURRENT_USER: _COMMON | {Column.EMAIL},
    Collection.PROFILES: _COMMON | {
        Column.EMAIL, Column.NAME, Column.LANGUAGE, Column.ONBOARDING_COMPLETED,
    },
    Collection.PUCAIS: _COMMON | {Column.USER_ID, Column.SUM},
    Collection.MOODS: _COMMON | {Column.USER_ID, Column.AMOUNT},
    Collection.MEALS: _COMMON | {Column.USER_ID, Column.NAME, Column.TYPE, Column.TIME},
}


def resolve_collection(name: Collection | str) -> Collection:
    """Coerce *name* to a Collection, raising ValidationError if unknown."""
    try:
        return Collection(name)
    except ValueError:
        raise ValidationError(f"Unknown collection '{name}'.") from None


def resolve_column(collection: Collection, name: Column | str) -> Column:
    """Coerce *name* to a Column allowed on *collection*."""
    try:
        column = Column(name)
    except ValueError:
        raise ValidationError(f"Unknown column '{name}'.") from None
    if column not in COLLECTION_COLUMNS[collection]:
        raise ValidationError(
            f"Column '{column.value}' cannot be queried on '{collection.value}'."
        )
    return column


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a shim operation: either data or an error, never raised."""
    data: Optional[T] = None
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Optional[T]:
        """Return data, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.data

    @classmethod
    def success(cls, data: Optional[T] = None) -> Result[T]:
        return cls(data=data)

    @classmethod
    def failure(cls, error: DomainError, data: Optional[T] = None) -> Result[T]:
        return cls(data=data, error=error)


# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------

class Language(str, Enum):
    """Interface languages a profile can select."""
    DE = "de"
    EN = "en"
    ES = "es"
    FR = "fr"
    ZH = "zh"

    @property
    def display_name(self) -> str:
        return _LANGUAGE_NAMES[self]


_LANGUAGE_NAMES = {
    Language.DE: "Deutsch",
    Language.EN: "English",
    Language.ES: "Español",
    Language.FR: "Français",
    Language.ZH: "中文",
}
