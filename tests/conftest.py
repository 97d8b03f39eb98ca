"""Pytest fixtures and configuration."""

from pathlib import Path

import pytest

from jackut.api.facade import Facade
from jackut.services.persistence import StateStore
from jackut.services.system import System


@pytest.fixture
def system() -> System:
    """Empty system with no users."""
    return System()


@pytest.fixture
def populated(system: System) -> System:
    """System with three users: alice, bob and carol."""
    system.create_user("alice", "alice-pw", "Alice")
    system.create_user("bob", "bob-pw", "Bob")
    system.create_user("carol", "carol-pw", "Carol")
    return system


@pytest.fixture
def sessions(populated: System) -> dict[str, str]:
    """Open session ids keyed by login."""
    return {
        login: populated.open_session(login, f"{login}-pw") for login in ("alice", "bob", "carol")
    }


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path to a not-yet-existing data file."""
    return tmp_path / "jackut.json"


@pytest.fixture
def store(data_file: Path) -> StateStore:
    """State store backed by a temporary file."""
    return StateStore(data_file)


@pytest.fixture
def facade(store: StateStore) -> Facade:
    """Facade over an empty temporary store."""
    return Facade(store)
