"""Session domain model."""

import uuid
from dataclasses import dataclass, field


def new_session_id() -> str:
    """Generate a random 128-bit session token."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Session:
    """Handle binding a session id to the login of an authenticated user."""

    login: str
    id: str = field(default_factory=new_session_id)
