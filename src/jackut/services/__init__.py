"""Business logic and persistence services."""

from jackut.services.persistence import StateStore
from jackut.services.system import System

__all__ = [
    "StateStore",
    "System",
]
