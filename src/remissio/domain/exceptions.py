"""
domain.exceptions - Custom exception hierarchy for Remissio.

All domain-level errors inherit from DomainError so callers can catch
broad or specific exceptions as needed. The storage shims never raise
these across their boundary; they hand them back inside a Result.
"""


class DomainError(Exception):
    """Base exception for all domain-level errors."""


class NotFoundError(DomainError):
    """Raised when a single-record lookup has no match."""


class ValidationError(DomainError):
    """Raised when input (records, answers, form fields) is malformed."""


class DuplicateEmailError(DomainError):
    """Raised when attempting to sign up with an email that already exists."""


class AuthenticationError(DomainError):
    """Raised when authentication fails."""


class InvalidCredentialsError(AuthenticationError):
    """Raised when no stored user matches the given email and password."""


class NotSignedInError(AuthenticationError):
    """Raised when an operation needs a current user and there is none."""


class StorageCorruptionError(DomainError):
    """Raised when a stored collection is not a JSON array."""


class RepositoryError(DomainError):
    """Raised when a storage operation fails unexpectedly."""


class OnboardingRequiredError(DomainError):
    """Raised when the user's profile has not completed onboarding."""
