"""User domain model."""

from collections import deque
from dataclasses import dataclass, field

from jackut.errors import EmptyQueueError, MissingAttributeError

# Reserved attribute holding the display name
NAME_ATTRIBUTE = "name"


@dataclass
class Message:
    """A queued message. ``sender`` is None for system notifications."""

    sender: str | None
    text: str


@dataclass
class User:
    """Profile, relationship sets and inbound queues of one account.

    Relationship collections hold logins, never User objects, so that the
    System can cascade a removal by scanning keys. Lists keep insertion
    order, which is the order the presentation layer renders.
    """

    login: str
    password: str
    attributes: dict[str, str] = field(default_factory=dict)
    friends: list[str] = field(default_factory=list)
    pending_invites: list[str] = field(default_factory=list)
    idols: list[str] = field(default_factory=list)
    fans: list[str] = field(default_factory=list)
    crushes: list[str] = field(default_factory=list)
    enemies: list[str] = field(default_factory=list)
    communities: list[str] = field(default_factory=list)
    scraps: deque[Message] = field(default_factory=deque)
    messages: deque[Message] = field(default_factory=deque)

    @property
    def name(self) -> str:
        """Display name, falling back to the login when unset."""
        return self.attributes.get(NAME_ATTRIBUTE) or self.login

    def get_attribute(self, attribute: str) -> str:
        try:
            return self.attributes[attribute]
        except KeyError:
            raise MissingAttributeError() from None

    def set_attribute(self, attribute: str, value: str) -> None:
        self.attributes[attribute] = value

    def check_password(self, password: str) -> bool:
        return self.password == password

    def is_enemy_of(self, other: "User") -> bool:
        """True when either user declared the other an enemy."""
        return other.login in self.enemies or self.login in other.enemies

    def receive_scrap(self, message: Message) -> None:
        self.scraps.append(message)

    def receive_message(self, message: Message) -> None:
        self.messages.append(message)

    def read_scrap(self) -> str:
        if not self.scraps:
            raise EmptyQueueError("There are no scraps.")
        return self.scraps.popleft().text

    def read_message(self) -> str:
        if not self.messages:
            raise EmptyQueueError("There are no messages.")
        return self.messages.popleft().text

    def forget(self, login: str) -> None:
        """Drop every reference to ``login`` from relations and queues."""
        for relation in (
            self.friends,
            self.pending_invites,
            self.idols,
            self.fans,
            self.crushes,
            self.enemies,
        ):
            if login in relation:
                relation.remove(login)
        self.scraps = deque(m for m in self.scraps if m.sender != login)
        self.messages = deque(m for m in self.messages if m.sender != login)
