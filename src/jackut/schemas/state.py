"""Pydantic schemas for the persisted system snapshot."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# UserState fields that hold logins of other users
RELATION_FIELDS = ("friends", "pending_invites", "idols", "fans", "crushes", "enemies")


class MessageState(BaseModel):
    """A queued message as stored on disk."""

    model_config = ConfigDict(from_attributes=True)

    sender: str | None = Field(default=None, description="Sender login, null for system notices")
    text: str = Field(description="Message body")


class UserState(BaseModel):
    """Snapshot of one user account."""

    model_config = ConfigDict(from_attributes=True)

    login: str = Field(min_length=1, description="Unique, case-sensitive login")
    password: str = Field(min_length=1, description="Plaintext password")
    attributes: dict[str, str] = Field(default_factory=dict, description="Profile fields")
    friends: list[str] = Field(default_factory=list)
    pending_invites: list[str] = Field(default_factory=list)
    idols: list[str] = Field(default_factory=list)
    fans: list[str] = Field(default_factory=list)
    crushes: list[str] = Field(default_factory=list)
    enemies: list[str] = Field(default_factory=list)
    communities: list[str] = Field(default_factory=list)
    scraps: list[MessageState] = Field(default_factory=list)
    messages: list[MessageState] = Field(default_factory=list)


class SessionState(BaseModel):
    """Snapshot of an open session."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Session token")
    login: str = Field(description="Login of the bound user")


class CommunityState(BaseModel):
    """Snapshot of a community."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(min_length=1, description="Unique community name")
    description: str = Field(default="", description="Free text description")
    owner: str = Field(description="Login of the creator")
    members: list[str] = Field(default_factory=list, description="Member logins in join order")


class SystemState(BaseModel):
    """Full, self-contained snapshot of the system."""

    version: int = Field(default=1, description="Snapshot format version")
    users: list[UserState] = Field(default_factory=list)
    sessions: list[SessionState] = Field(default_factory=list)
    communities: list[CommunityState] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_references(self) -> "SystemState":
        """Reject snapshots that reference users or communities they do not contain."""
        logins = {user.login for user in self.users}
        if len(logins) != len(self.users):
            raise ValueError("Duplicate user login in snapshot")

        names = {community.name for community in self.communities}
        if len(names) != len(self.communities):
            raise ValueError("Duplicate community name in snapshot")

        for session in self.sessions:
            if session.login not in logins:
                raise ValueError(f"Session {session.id} is bound to unknown user {session.login}")

        for community in self.communities:
            if community.owner not in logins:
                raise ValueError(
                    f"Community {community.name} is owned by unknown user {community.owner}"
                )
            for member in community.members:
                if member not in logins:
                    raise ValueError(
                        f"Community {community.name} lists unknown member {member}"
                    )

        for user in self.users:
            for relation in RELATION_FIELDS:
                for login in getattr(user, relation):
                    if login not in logins:
                        raise ValueError(
                            f"User {user.login} has unknown user {login} in {relation}"
                        )
            for name in user.communities:
                if name not in names:
                    raise ValueError(f"User {user.login} belongs to unknown community {name}")
        return self
