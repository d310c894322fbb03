"""
application.dto - Data Transfer Objects for service input/output.

These are the structured requests services accept and the results they
return to callers (the CLI adapter, tests).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from remissio.domain.entities import Meal, Mood, Profile, Pucai
from remissio.domain.scoring import PucaiCategory


@dataclass(frozen=True)
class SignUpRequest:
    """Input for account creation."""
    email: str
    password: str
    name: str = ""


@dataclass(frozen=True)
class SignInRequest:
    """Input for sign-in."""
    email: str
    password: str


@dataclass(frozen=True)
class OnboardingRequest:
    """First-run questionnaire: the minimum the dashboard needs."""
    age: int
    year_of_diagnosis: int
    current_medication: str = ""
    notes: str = ""


@dataclass(frozen=True)
class ProfileUpdate:
    """Editable profile fields. None leaves a field as it is."""
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


@dataclass(frozen=True)
class MoodEntry:
    amount: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class MealEntry:
    name: str
    time: str
    type: Optional[str] = None
    ingredients: str = ""
    notes: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the dashboard shows for one user."""
    profile: Profile
    latest_pucai: Optional[Pucai] = None
    pucai_category: Optional[PucaiCategory] = None
    today_meals: list[Meal] = field(default_factory=list)
    latest_mood: Optional[Mood] = None
    mood_label: Optional[str] = None
    mood_emoji: Optional[str] = None


@dataclass(frozen=True)
class TimelinePoint:
    """One UTC day: latest PUCAI sum and mood that day, and the meal count."""
    date: str
    pucai: Optional[int] = None
    mood: Optional[int] = None
    meals: int = 0


@dataclass(frozen=True)
class TimelineAverages:
    avg_pucai: Optional[float]
    avg_mood: Optional[float]
    total_meals: int
    avg_meals_per_day: float


@dataclass(frozen=True)
class Timeline:
    days: int
    points: list[TimelinePoint]
    averages: TimelineAverages
