"""
infrastructure.storage.local_auth - Signed-in/signed-out state over local storage.

Two states: signed-out (no current_user key) and signed-in (current_user
holds a one-element array with the user, password stripped). Accounts live
in the users collection with their plaintext password; sign-in is an exact
email + password match. Like LocalDatabase, every operation returns a
Result instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from remissio.domain.entities import Profile, User
from remissio.domain.exceptions import (
    DomainError,
    DuplicateEmailError,
    InvalidCredentialsError,
    RepositoryError,
)
from remissio.domain.models import Collection, Result
from remissio.infrastructure.storage.local_db import LocalDatabase

logger = logging.getLogger(__name__)


class LocalAuth:
    """Sign-up, sign-in, sign-out and current-user access."""

    def __init__(self, db: LocalDatabase):
        self._db = db

    def get_user(self) -> Result[User]:
        """Current user, or data=None when signed out. Never transitions state."""
        try:
            return Result.success(self._current_record_user())
        except Exception as exc:
            return self._unexpected("get_user", exc)

    def sign_in(self, email: str, password: str) -> Result[User]:
        try:
            users = self._db.read_records(Collection.USERS)
            match = next(
                (u for u in users if u.get("email") == email and u.get("password") == password),
                None,
            )
            if match is None:
                logger.info("Sign-in failed for '%s'", email)
                return Result.failure(InvalidCredentialsError("Invalid login credentials."))

            public = _without_password(match)
            self._db.write_collection(Collection.CURRENT_USER, [public])
            logger.info("User %s signed in", public.get("id"))
            return Result.success(User.from_record(public))
        except Exception as exc:
            return self._unexpected("sign_in", exc)

    def sign_up(self, email: str, password: str, name: Optional[str] = None) -> Result[User]:
        """Create the account, sign it in and create an un-onboarded Profile."""
        try:
            users = self._db.read_collection(Collection.USERS)
            if any(isinstance(u, dict) and u.get("email") == email for u in users):
                return Result.failure(DuplicateEmailError(f"Email '{email}' is already registered."))

            user = User(id=self._db.generate_id(), email=email, name=name)
            stored = {**user.to_record(), "password": password}
            users.append(stored)
            self._db.write_collection(Collection.USERS, users)
            self._db.write_collection(Collection.CURRENT_USER, [user.to_record()])

            now = self._db.now_iso()
            profile = Profile(
                id=user.id,
                email=email,
                name=name,
                onboarding_completed=False,
                created_at=now,
                updated_at=now,
            )
            profiles = self._db.read_collection(Collection.PROFILES)
            profiles.append(profile.to_record())
            self._db.write_collection(Collection.PROFILES, profiles)

            logger.info("Registered user %s with email '%s'", user.id, email)
            return Result.success(user)
        except Exception as exc:
            return self._unexpected("sign_up", exc)

    def sign_out(self) -> Result[None]:
        try:
            self._db.remove_collection(Collection.CURRENT_USER)
            logger.info("Signed out")
            return Result.success()
        except Exception as exc:
            return self._unexpected("sign_out", exc)

    def update_user(self, metadata: dict[str, Any]) -> Result[User]:
        """Merge metadata into the current user and its users entry.

        No-op (data=None) when signed out.
        """
        try:
            current = self._current_record()
            if current is None:
                logger.debug("update_user called while signed out; ignoring")
                return Result.success(None)

            merged_meta = {**(current.get("user_metadata") or {}), **metadata}
            current["user_metadata"] = merged_meta
            self._db.write_collection(Collection.CURRENT_USER, [current])

            users = self._db.read_collection(Collection.USERS)
            for stored in users:
                if isinstance(stored, dict) and stored.get("id") == current.get("id"):
                    stored["user_metadata"] = merged_meta
                    self._db.write_collection(Collection.USERS, users)
                    break

            return Result.success(User.from_record(current))
        except Exception as exc:
            return self._unexpected("update_user", exc)

    # ------------------------------------------------------------------

    def _current_record(self) -> Optional[dict[str, Any]]:
        records = self._db.read_records(Collection.CURRENT_USER)
        return records[0] if records else None

    def _current_record_user(self) -> Optional[User]:
        record = self._current_record()
        return User.from_record(record) if record else None

    @staticmethod
    def _unexpected(operation: str, exc: Exception) -> Result:
        if isinstance(exc, DomainError):
            return Result.failure(exc)
        logger.exception("Unexpected error in %s", operation)
        return Result.failure(RepositoryError(str(exc) or type(exc).__name__))


def _without_password(record: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in record.items() if k != "password"}
