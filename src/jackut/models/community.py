"""Community domain model."""

from dataclasses import dataclass, field


@dataclass
class Community:
    """A named group owned by one user.

    The community keeps no message state of its own: broadcasts are fanned
    out to the members' queues by the System at send time.
    """

    name: str
    description: str
    owner: str
    members: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.owner not in self.members:
            self.members.insert(0, self.owner)

    def has_member(self, login: str) -> bool:
        return login in self.members

    def add_member(self, login: str) -> None:
        self.members.append(login)

    def remove_member(self, login: str) -> None:
        if login in self.members:
            self.members.remove(login)
