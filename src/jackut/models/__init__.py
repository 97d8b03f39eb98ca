"""In-memory domain models."""

from jackut.models.community import Community
from jackut.models.session import Session
from jackut.models.user import NAME_ATTRIBUTE, Message, User

__all__ = [
    "Community",
    "Message",
    "NAME_ATTRIBUTE",
    "Session",
    "User",
]
