"""Facade exposing one operation per system capability."""

import logging

from jackut.api.formatting import format_collection
from jackut.services.persistence import StateStore
from jackut.services.system import System

logger = logging.getLogger(__name__)


class Facade:
    """Entry point for external drivers.

    The facade loads the system from its store when constructed and saves
    it on ``shutdown``. Session ids are resolved by the System; collections
    are returned formatted as ``{a,b,c}``. Domain errors propagate unchanged.
    """

    def __init__(self, store: StateStore) -> None:
        self.store = store
        self.system = System.from_state(store.load())

    def reset_system(self) -> None:
        self.system.reset()

    def create_user(self, login: str, password: str, name: str) -> None:
        self.system.create_user(login, password, name)

    def open_session(self, login: str, password: str) -> str:
        return self.system.open_session(login, password)

    def get_user_attribute(self, login: str, attribute: str) -> str:
        return self.system.get_user_attribute(login, attribute)

    def edit_profile(self, session_id: str, attribute: str, value: str) -> None:
        self.system.edit_profile(session_id, attribute, value)

    def remove_user(self, session_id: str) -> None:
        self.system.remove_user(session_id)

    def shutdown(self) -> None:
        """Persist the current state.

        Raises:
            PersistenceError: If the state cannot be written.
        """
        logger.info("Shutting down - saving state")
        self.store.save(self.system.snapshot())

    # Friends

    def add_friend(self, session_id: str, friend: str) -> None:
        self.system.add_friend(session_id, friend)

    def is_friend(self, login: str, friend: str) -> bool:
        return self.system.is_friend(login, friend)

    def list_friends(self, login: str) -> str:
        return format_collection(self.system.list_friends(login))

    # Scraps

    def send_scrap(self, session_id: str, recipient: str, text: str) -> None:
        self.system.send_scrap(session_id, recipient, text)

    def read_scrap(self, session_id: str) -> str:
        return self.system.read_scrap(session_id)

    # Communities

    def create_community(self, session_id: str, name: str, description: str) -> None:
        """Create a community owned by the session's user."""
        owner = self.system.get_session_user(session_id)
        self.system.create_community(name, description, owner.login)

    def get_community_description(self, name: str) -> str:
        return self.system.get_community_description(name)

    def get_community_owner(self, name: str) -> str:
        return self.system.get_community_owner(name)

    def list_community_members(self, name: str) -> str:
        return format_collection(self.system.list_community_members(name))

    def list_user_communities(self, login: str) -> str:
        return format_collection(self.system.list_user_communities(login))

    def join_community(self, session_id: str, name: str) -> None:
        self.system.join_community(session_id, name)

    def send_community_message(self, session_id: str, community: str, text: str) -> None:
        self.system.send_community_message(session_id, community, text)

    def read_community_message(self, session_id: str) -> str:
        return self.system.read_community_message(session_id)

    # Idols, crushes and enemies

    def add_idol(self, session_id: str, idol: str) -> None:
        self.system.add_idol(session_id, idol)

    def is_fan(self, login: str, idol: str) -> bool:
        return self.system.is_fan(login, idol)

    def list_fans(self, login: str) -> str:
        return format_collection(self.system.list_fans(login))

    def add_crush(self, session_id: str, crush: str) -> None:
        self.system.add_crush(session_id, crush)

    def is_crush(self, session_id: str, crush: str) -> bool:
        user = self.system.get_session_user(session_id)
        return self.system.is_crush(user.login, crush)

    def list_crushes(self, session_id: str) -> str:
        user = self.system.get_session_user(session_id)
        return format_collection(self.system.list_crushes(user.login))

    def add_enemy(self, session_id: str, enemy: str) -> None:
        self.system.add_enemy(session_id, enemy)

    def list_enemies(self, login: str) -> str:
        return format_collection(self.system.list_enemies(login))
