"""
application.services.authentication - Account creation, sign-in and sign-out.

Thin layer over LocalAuth: validates form input, unwraps Results so
callers get domain exceptions (DuplicateEmailError,
InvalidCredentialsError, NotSignedInError) rather than error values.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from remissio.application.context import StorageContext
from remissio.application.dto import SignInRequest, SignUpRequest
from remissio.domain.entities import User
from remissio.domain.exceptions import NotSignedInError, ValidationError

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r"^[\w\.+-]+@[\w\.-]+\.\w+$")


def validate_email(email: str) -> None:
    if not email:
        raise ValidationError("Email is required.")
    if not EMAIL_REGEX.match(email):
        raise ValidationError("Invalid email format.")


class AuthenticationService:
    """Handles sign-up, sign-in, sign-out and the current user."""

    def __init__(self, client: StorageContext):
        self._auth = client.auth

    def sign_up(self, request: SignUpRequest) -> User:
        email = request.email.strip()
        validate_email(email)
        if not request.password:
            raise ValidationError("Password is required.")
        name = request.name.strip() or None
        return self._auth.sign_up(email, request.password, name).unwrap()

    def sign_in(self, request: SignInRequest) -> User:
        return self._auth.sign_in(request.email.strip(), request.password).unwrap()

    def sign_out(self) -> None:
        self._auth.sign_out().unwrap()

    def current_user(self) -> Optional[User]:
        return self._auth.get_user().unwrap()

    def require_user(self) -> User:
        """Return the current user or raise NotSignedInError."""
        user = self.current_user()
        if user is None:
            raise NotSignedInError("Not signed in.")
        return user

    def update_name(self, name: str) -> User:
        self.require_user()
        user = self._auth.update_user({"name": name}).unwrap()
        logger.debug("Updated display name for user %s", user.id)
        return user
