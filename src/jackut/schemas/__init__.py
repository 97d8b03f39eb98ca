"""Pydantic schemas for state transfer."""

from jackut.schemas.state import (
    CommunityState,
    MessageState,
    SessionState,
    SystemState,
    UserState,
)

__all__ = [
    "CommunityState",
    "MessageState",
    "SessionState",
    "SystemState",
    "UserState",
]
