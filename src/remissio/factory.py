"""
factory - Composition root for Remissio.

ALL dependency wiring happens here. No other module constructs its own
dependencies. Adapters (CLI, tests) call this factory to get fully
configured services.

Usage:
    from remissio.factory import ServiceFactory
    from remissio.infrastructure.config import Settings

    config = Settings.from_env()
    factory = ServiceFactory(config)
    factory.initialize()  # one-time startup

    auth = factory.create_authentication_service()
    user = auth.require_user()
    summary = factory.create_dashboard_service().summary(user)
"""

from __future__ import annotations

import logging
from typing import Optional

from remissio.application.context import StorageContext
from remissio.application.services.authentication import AuthenticationService
from remissio.application.services.dashboard import DashboardService
from remissio.application.services.meals import MealService
from remissio.application.services.mood import MoodService
from remissio.application.services.profile import ProfileService
from remissio.application.services.symptoms import SymptomService
from remissio.application.services.timeline import TimelineService
from remissio.domain.entities import User
from remissio.domain.i18n import Translator, get_translator, load_tables
from remissio.domain.ports import Clock, KeyValueStore
from remissio.domain.scoring import Questionnaire, load_questionnaire
from remissio.domain.timestamps import utc_now
from remissio.infrastructure.config import Settings
from remissio.infrastructure.storage.kv_store import MemoryKeyValueStore, SQLiteKeyValueStore
from remissio.infrastructure.storage.local_auth import LocalAuth
from remissio.infrastructure.storage.local_db import LocalDatabase
from remissio.infrastructure.storage.migrations import run_migrations
from remissio.infrastructure.storage.object_storage import ObjectStorage

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Composition root: wires all dependencies together.

    Call initialize() once at startup, then create services as needed.
    A store can be passed in directly (tests); otherwise the configured
    backend is built.
    """

    def __init__(
        self,
        config: Settings,
        store: Optional[KeyValueStore] = None,
        clock: Clock = utc_now,
        questionnaire: Optional[Questionnaire] = None,
    ):
        self._config = config
        self._store = store if store is not None else self._build_store(config)
        self._clock = clock
        self._questionnaire = questionnaire
        self._translations: Optional[dict[str, dict[str, str]]] = None
        self._context: Optional[StorageContext] = None
        self._initialized = False

    @property
    def config(self) -> Settings:
        return self._config

    @staticmethod
    def _build_store(config: Settings) -> KeyValueStore:
        if config.storage_backend == "memory":
            return MemoryKeyValueStore()
        return SQLiteKeyValueStore(config.db_file)

    def initialize(self) -> None:
        """One-time startup: create the storage schema, load the PUCAI and text tables."""
        if self._initialized:
            return
        if isinstance(self._store, SQLiteKeyValueStore):
            run_migrations(self._store)
        if self._questionnaire is None:
            self._questionnaire = load_questionnaire()
        self._translations = load_tables()
        self._initialized = True
        logger.info("ServiceFactory initialized (%s backend)", type(self._store).__name__)

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("ServiceFactory.initialize() must be called first.")

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def create_storage_context(self) -> StorageContext:
        """The shared StorageContext (one per factory)."""
        self._ensure_initialized()
        if self._context is None:
            db = LocalDatabase(self._store, clock=self._clock)
            self._context = StorageContext(
                db=db,
                auth=LocalAuth(db),
                storage=ObjectStorage(),
                clock=self._clock,
            )
            logger.info(
                "Storage context %s over %s", self._context.context_id, type(self._store).__name__,
            )
        return self._context

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def create_authentication_service(self) -> AuthenticationService:
        return AuthenticationService(self.create_storage_context())

    def create_profile_service(self) -> ProfileService:
        return ProfileService(self.create_storage_context())

    def create_symptom_service(self) -> SymptomService:
        return SymptomService(self.create_storage_context(), self._questionnaire)

    def create_mood_service(self) -> MoodService:
        return MoodService(self.create_storage_context())

    def create_meal_service(self) -> MealService:
        return MealService(self.create_storage_context())

    def create_dashboard_service(self) -> DashboardService:
        return DashboardService(
            profiles=self.create_profile_service(),
            symptoms=self.create_symptom_service(),
            meals=self.create_meal_service(),
            moods=self.create_mood_service(),
        )

    def create_timeline_service(self) -> TimelineService:
        return TimelineService(
            self.create_storage_context(),
            symptoms=self.create_symptom_service(),
            meals=self.create_meal_service(),
            moods=self.create_mood_service(),
        )

    # ------------------------------------------------------------------
    # Interface text
    # ------------------------------------------------------------------

    def create_translator(self, user: Optional[User] = None) -> Translator:
        """Translator in the user's profile language, else the configured default."""
        self._ensure_initialized()
        language = None
        if user is not None:
            profile = self.create_profile_service().find_profile(user)
            language = profile.language if profile else None
        return get_translator(language or self._config.default_language, self._translations)
