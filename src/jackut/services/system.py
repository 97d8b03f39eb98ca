"""Core business rules of the Jackut social network."""

import logging
from collections import deque

from jackut.errors import (
    BlockedRelationError,
    DuplicateCommunityError,
    DuplicateUserError,
    ExistingMembershipError,
    ExistingRelationError,
    InvalidCredentialsError,
    InvalidSessionError,
    SelfMessageError,
    SelfRelationError,
    UnknownCommunityError,
    UnknownUserError,
    ValidationError,
)
from jackut.models import NAME_ATTRIBUTE, Community, Message, Session, User
from jackut.schemas.state import (
    CommunityState,
    MessageState,
    SessionState,
    SystemState,
    UserState,
)

logger = logging.getLogger(__name__)

CRUSH_NOTICE = "{name} is your crush - message from Jackut."


class System:
    """Owner of every user, session and community.

    All mutation goes through this class. Each operation validates its
    inputs completely before touching any entity, so a raised error never
    leaves a partial change behind.
    """

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.sessions: dict[str, Session] = {}
        self.communities: dict[str, Community] = {}

    # -- lookups -----------------------------------------------------------

    def get_user(self, login: str) -> User:
        """Return the user registered under ``login``.

        Raises:
            UnknownUserError: If no such user exists.
        """
        try:
            return self.users[login]
        except KeyError:
            raise UnknownUserError() from None

    def get_session_user(self, session_id: str) -> User:
        """Resolve a session id to its bound user.

        Raises:
            InvalidSessionError: If the id is not bound.
        """
        session = self.sessions.get(session_id) if session_id else None
        if session is None or session.login not in self.users:
            raise InvalidSessionError()
        return self.users[session.login]

    def get_community(self, name: str) -> Community:
        try:
            return self.communities[name]
        except KeyError:
            raise UnknownCommunityError() from None

    # -- accounts and sessions ---------------------------------------------

    def create_user(self, login: str, password: str, name: str | None = None) -> User:
        """Register a new account.

        Raises:
            ValidationError: If login or password is empty.
            DuplicateUserError: If the login is taken.
        """
        if not login:
            raise ValidationError("Invalid login.")
        if not password:
            raise ValidationError("Invalid password.")
        if login in self.users:
            raise DuplicateUserError()

        user = User(login=login, password=password)
        if name:
            user.set_attribute(NAME_ATTRIBUTE, name)
        self.users[login] = user
        logger.info("Created user %s", login)
        return user

    def open_session(self, login: str, password: str) -> str:
        """Authenticate and return a new session id.

        Raises:
            InvalidCredentialsError: On unknown login or wrong password.
        """
        user = self.users.get(login) if login else None
        if user is None or not user.check_password(password):
            raise InvalidCredentialsError()

        session = Session(login=login)
        self.sessions[session.id] = session
        logger.debug("Opened session for %s", login)
        return session.id

    def get_user_attribute(self, login: str, attribute: str) -> str:
        return self.get_user(login).get_attribute(attribute)

    def edit_profile(self, session_id: str, attribute: str, value: str) -> None:
        self.get_session_user(session_id).set_attribute(attribute, value)

    def reset(self) -> None:
        """Drop every user, session and community."""
        self.users.clear()
        self.sessions.clear()
        self.communities.clear()
        logger.info("System reset")

    def remove_user(self, session_id: str) -> None:
        """Delete the session's user and every reference to them.

        Communities owned by the user are deleted with them.
        """
        user = self.get_session_user(session_id)
        login = user.login

        owned = [c.name for c in self.communities.values() if c.owner == login]
        for name in owned:
            del self.communities[name]
        for community in self.communities.values():
            community.remove_member(login)

        for other in self.users.values():
            if other.login == login:
                continue
            other.forget(login)
            other.communities = [c for c in other.communities if c not in owned]

        self.sessions = {sid: s for sid, s in self.sessions.items() if s.login != login}
        del self.users[login]
        logger.info("Removed user %s (%d owned communities deleted)", login, len(owned))

    # -- relationships -----------------------------------------------------

    def _resolve_pair(self, session_id: str, target_login: str) -> tuple[User, User]:
        actor = self.get_session_user(session_id)
        target = self.get_user(target_login)
        return actor, target

    @staticmethod
    def _check_not_blocked(actor: User, target: User) -> None:
        if actor.is_enemy_of(target):
            raise BlockedRelationError(f"Invalid operation: {target.name} is your enemy.")

    def add_friend(self, session_id: str, target_login: str) -> None:
        """Invite ``target_login``, or confirm if they already invited the actor."""
        actor, target = self._resolve_pair(session_id, target_login)
        if actor.login == target.login:
            raise SelfRelationError("User cannot add themself as a friend.")
        self._check_not_blocked(actor, target)
        if target.login in actor.friends:
            raise ExistingRelationError("User is already a friend.")
        if actor.login in target.pending_invites:
            raise ExistingRelationError("User is already invited, waiting for acceptance.")

        if target.login in actor.pending_invites:
            actor.pending_invites.remove(target.login)
            actor.friends.append(target.login)
            target.friends.append(actor.login)
            logger.debug("Friendship confirmed between %s and %s", actor.login, target.login)
        else:
            target.pending_invites.append(actor.login)

    def is_friend(self, login: str, other_login: str) -> bool:
        user = self.get_user(login)
        other = self.get_user(other_login)
        return other.login in user.friends and user.login in other.friends

    def list_friends(self, login: str) -> list[str]:
        return list(self.get_user(login).friends)

    def add_idol(self, session_id: str, idol_login: str) -> None:
        actor, idol = self._resolve_pair(session_id, idol_login)
        if actor.login == idol.login:
            raise SelfRelationError("User cannot be a fan of themself.")
        self._check_not_blocked(actor, idol)
        if idol.login in actor.idols:
            raise ExistingRelationError("User is already an idol.")

        actor.idols.append(idol.login)
        idol.fans.append(actor.login)

    def is_fan(self, login: str, idol_login: str) -> bool:
        user = self.get_user(login)
        idol = self.get_user(idol_login)
        return idol.login in user.idols

    def list_fans(self, login: str) -> list[str]:
        return list(self.get_user(login).fans)

    def add_crush(self, session_id: str, crush_login: str) -> None:
        """Declare a crush; a mutual crush notifies both users."""
        actor, crush = self._resolve_pair(session_id, crush_login)
        if actor.login == crush.login:
            raise SelfRelationError("User cannot be a crush of themself.")
        self._check_not_blocked(actor, crush)
        if crush.login in actor.crushes:
            raise ExistingRelationError("User is already a crush.")

        actor.crushes.append(crush.login)
        if actor.login in crush.crushes:
            actor.receive_scrap(Message(sender=None, text=CRUSH_NOTICE.format(name=crush.name)))
            crush.receive_scrap(Message(sender=None, text=CRUSH_NOTICE.format(name=actor.name)))

    def is_crush(self, login: str, crush_login: str) -> bool:
        user = self.get_user(login)
        crush = self.get_user(crush_login)
        return crush.login in user.crushes

    def list_crushes(self, login: str) -> list[str]:
        return list(self.get_user(login).crushes)

    def add_enemy(self, session_id: str, enemy_login: str) -> None:
        """Declare an enemy. Existing positive relations are left in place."""
        actor, enemy = self._resolve_pair(session_id, enemy_login)
        if actor.login == enemy.login:
            raise SelfRelationError("User cannot be an enemy of themself.")
        if enemy.login in actor.enemies:
            raise ExistingRelationError("User is already an enemy.")

        actor.enemies.append(enemy.login)

    def list_enemies(self, login: str) -> list[str]:
        return list(self.get_user(login).enemies)

    # -- scraps ------------------------------------------------------------

    def send_scrap(self, session_id: str, target_login: str, text: str) -> None:
        actor, target = self._resolve_pair(session_id, target_login)
        if actor.login == target.login:
            raise SelfMessageError()
        self._check_not_blocked(actor, target)

        target.receive_scrap(Message(sender=actor.login, text=text))

    def read_scrap(self, session_id: str) -> str:
        return self.get_session_user(session_id).read_scrap()

    # -- communities -------------------------------------------------------

    def create_community(self, name: str, description: str, creator_login: str) -> Community:
        """Create a community owned by ``creator_login``.

        Raises:
            ValidationError: If the name is empty.
            UnknownUserError: If the creator is not registered.
            DuplicateCommunityError: If the name is taken.
        """
        if not name:
            raise ValidationError("Invalid community name.")
        creator = self.get_user(creator_login)
        if name in self.communities:
            raise DuplicateCommunityError()

        community = Community(name=name, description=description, owner=creator.login)
        self.communities[name] = community
        creator.communities.append(name)
        logger.info("Created community %s owned by %s", name, creator.login)
        return community

    def get_community_description(self, name: str) -> str:
        return self.get_community(name).description

    def get_community_owner(self, name: str) -> str:
        return self.get_community(name).owner

    def list_community_members(self, name: str) -> list[str]:
        return list(self.get_community(name).members)

    def list_user_communities(self, login: str) -> list[str]:
        return list(self.get_user(login).communities)

    def join_community(self, session_id: str, name: str) -> None:
        user = self.get_session_user(session_id)
        community = self.get_community(name)
        if community.has_member(user.login):
            raise ExistingMembershipError()

        community.add_member(user.login)
        user.communities.append(name)

    def send_community_message(self, session_id: str, name: str, text: str) -> None:
        """Deliver ``text`` to every current member's message queue."""
        sender = self.get_session_user(session_id)
        community = self.get_community(name)
        for login in community.members:
            self.users[login].receive_message(Message(sender=sender.login, text=text))

    def read_community_message(self, session_id: str) -> str:
        return self.get_session_user(session_id).read_message()

    # -- state transfer ----------------------------------------------------

    def snapshot(self) -> SystemState:
        """Build a plain-data snapshot of the whole system."""
        return SystemState(
            users=[_user_to_state(user) for user in self.users.values()],
            sessions=[SessionState(id=s.id, login=s.login) for s in self.sessions.values()],
            communities=[
                CommunityState(
                    name=c.name,
                    description=c.description,
                    owner=c.owner,
                    members=list(c.members),
                )
                for c in self.communities.values()
            ],
        )

    @classmethod
    def from_state(cls, state: SystemState) -> "System":
        """Rebuild a System from a snapshot."""
        system = cls()
        for user_state in state.users:
            system.users[user_state.login] = _user_from_state(user_state)
        for session_state in state.sessions:
            system.sessions[session_state.id] = Session(
                login=session_state.login,
                id=session_state.id,
            )
        for community_state in state.communities:
            system.communities[community_state.name] = Community(
                name=community_state.name,
                description=community_state.description,
                owner=community_state.owner,
                members=list(community_state.members),
            )
        return system


def _user_to_state(user: User) -> UserState:
    return UserState(
        login=user.login,
        password=user.password,
        attributes=dict(user.attributes),
        friends=list(user.friends),
        pending_invites=list(user.pending_invites),
        idols=list(user.idols),
        fans=list(user.fans),
        crushes=list(user.crushes),
        enemies=list(user.enemies),
        communities=list(user.communities),
        scraps=[MessageState(sender=m.sender, text=m.text) for m in user.scraps],
        messages=[MessageState(sender=m.sender, text=m.text) for m in user.messages],
    )


def _user_from_state(state: UserState) -> User:
    return User(
        login=state.login,
        password=state.password,
        attributes=dict(state.attributes),
        friends=list(state.friends),
        pending_invites=list(state.pending_invites),
        idols=list(state.idols),
        fans=list(state.fans),
        crushes=list(state.crushes),
        enemies=list(state.enemies),
        communities=list(state.communities),
        scraps=deque(Message(sender=m.sender, text=m.text) for m in state.scraps),
        messages=deque(Message(sender=m.sender, text=m.text) for m in state.messages),
    )
