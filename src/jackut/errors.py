"""Domain error kinds raised by the Jackut core."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Tag identifying every failure the core can report."""

    VALIDATION = "validation"
    DUPLICATE_USER = "duplicate_user"
    DUPLICATE_COMMUNITY = "duplicate_community"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNKNOWN_USER = "unknown_user"
    UNKNOWN_COMMUNITY = "unknown_community"
    INVALID_SESSION = "invalid_session"
    MISSING_ATTRIBUTE = "missing_attribute"
    SELF_RELATION = "self_relation"
    SELF_MESSAGE = "self_message"
    EXISTING_RELATION = "existing_relation"
    EXISTING_MEMBERSHIP = "existing_membership"
    BLOCKED_RELATION = "blocked_relation"
    EMPTY_QUEUE = "empty_queue"
    PERSISTENCE = "persistence"


class JackutError(Exception):
    """Base exception for domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION
    default_message = "Invalid operation."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(JackutError):
    """Raised when a required field is empty."""

    kind = ErrorKind.VALIDATION


class DuplicateUserError(JackutError):
    """Raised when a login is already registered."""

    kind = ErrorKind.DUPLICATE_USER
    default_message = "An account with this login already exists."


class DuplicateCommunityError(JackutError):
    """Raised when a community name is already taken."""

    kind = ErrorKind.DUPLICATE_COMMUNITY
    default_message = "A community with this name already exists."


class InvalidCredentialsError(JackutError):
    """Raised when login or password do not match at session open."""

    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid login or password."


class UnknownUserError(JackutError):
    """Raised when a login does not refer to a registered user."""

    kind = ErrorKind.UNKNOWN_USER
    default_message = "User not registered."


class UnknownCommunityError(JackutError):
    """Raised when a community name does not exist."""

    kind = ErrorKind.UNKNOWN_COMMUNITY
    default_message = "Community does not exist."


class InvalidSessionError(JackutError):
    """Raised when a session id is not currently bound to a user."""

    kind = ErrorKind.INVALID_SESSION
    default_message = "Invalid session."


class MissingAttributeError(JackutError):
    """Raised when a profile attribute was never set."""

    kind = ErrorKind.MISSING_ATTRIBUTE
    default_message = "Attribute not set."


class SelfRelationError(JackutError):
    """Raised when a user targets themself with a relationship."""

    kind = ErrorKind.SELF_RELATION


class SelfMessageError(JackutError):
    """Raised when a user sends a scrap to themself."""

    kind = ErrorKind.SELF_MESSAGE
    default_message = "User cannot send a scrap to themself."


class ExistingRelationError(JackutError):
    """Raised when the requested relationship already exists."""

    kind = ErrorKind.EXISTING_RELATION


class ExistingMembershipError(JackutError):
    """Raised when a user joins a community they already belong to."""

    kind = ErrorKind.EXISTING_MEMBERSHIP
    default_message = "User is already a member of this community."


class BlockedRelationError(JackutError):
    """Raised when an enemy relation blocks the interaction."""

    kind = ErrorKind.BLOCKED_RELATION


class EmptyQueueError(JackutError):
    """Raised when reading from an empty message queue."""

    kind = ErrorKind.EMPTY_QUEUE
    default_message = "There are no messages."


class PersistenceError(JackutError):
    """Raised when the state file cannot be read or written."""

    kind = ErrorKind.PERSISTENCE
    default_message = "Could not access the data file."


@dataclass(frozen=True)
class Result:
    """Outcome of a core call: either a value or a tagged error."""

    value: Any = None
    error: ErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def attempt(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Result:
    """Call ``func`` and capture domain failures as a ``Result``.

    Only ``JackutError`` is captured; anything else is a bug and propagates.
    """
    try:
        return Result(value=func(*args, **kwargs))
    except JackutError as e:
        return Result(error=e.kind, message=e.message)
