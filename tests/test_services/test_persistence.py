"""Tests for the file-backed state store."""

from pathlib import Path

import pytest

from jackut.errors import PersistenceError
from jackut.schemas.state import CommunityState, SessionState, SystemState, UserState
from jackut.services.persistence import StateStore
from jackut.services.system import System


def build_system() -> System:
    """Create a system exercising every kind of state."""
    system = System()
    system.create_user("alice", "alice-pw", "Alice")
    system.create_user("bob", "bob-pw", "Bob")
    alice = system.open_session("alice", "alice-pw")
    bob = system.open_session("bob", "bob-pw")
    system.edit_profile(alice, "city", "Maceio")
    system.add_friend(alice, "bob")
    system.add_friend(bob, "alice")
    system.add_idol(bob, "alice")
    system.add_crush(alice, "bob")
    system.add_crush(bob, "alice")
    system.send_scrap(bob, "alice", "hello")
    system.add_enemy(alice, "bob")
    system.create_community("club", "A club", "alice")
    system.join_community(bob, "club")
    system.send_community_message(alice, "club", "welcome")
    return system


class TestLoad:
    """Tests for loading snapshots."""

    def test_missing_file_gives_empty_state(self, store: StateStore) -> None:
        """Test a missing data file yields an empty, valid state."""
        state = store.load()

        assert state == SystemState()
        assert not store.path.exists()

    def test_corrupt_file(self, store: StateStore, data_file: Path) -> None:
        """Test a file that is not JSON raises PersistenceError."""
        data_file.write_text("not json", encoding="utf-8")

        with pytest.raises(PersistenceError, match="Corrupt data file"):
            store.load()

    def test_dangling_session_rejected(self, store: StateStore, data_file: Path) -> None:
        """Test a snapshot whose session references a missing user is rejected."""
        data_file.write_text('{"sessions": [{"id": "s1", "login": "ghost"}]}', encoding="utf-8")

        with pytest.raises(PersistenceError):
            store.load()

    def test_unknown_community_member_rejected(self, store: StateStore, data_file: Path) -> None:
        """Test a community listing a missing member is rejected at load time."""
        data_file.write_text(
            '{"users": [{"login": "a", "password": "x", "communities": ["club"]}],'
            ' "communities": [{"name": "club", "owner": "a", "members": ["a", "ghost"]}]}',
            encoding="utf-8",
        )

        with pytest.raises(PersistenceError):
            store.load()


class TestSave:
    """Tests for saving snapshots."""

    def test_round_trip_preserves_state(self, store: StateStore) -> None:
        """Test saving then loading reproduces the full system."""
        original = build_system()

        store.save(original.snapshot())
        restored = System.from_state(store.load())

        assert restored.snapshot() == original.snapshot()
        assert restored.is_friend("alice", "bob")
        assert restored.is_friend("bob", "alice")
        assert restored.list_friends("alice") == ["bob"]
        assert restored.get_user_attribute("alice", "city") == "Maceio"
        assert restored.list_community_members("club") == ["alice", "bob"]

    def test_restored_queues_keep_order(self, store: StateStore) -> None:
        """Test queued scraps survive in FIFO order, sessions stay valid."""
        original = build_system()
        store.save(original.snapshot())
        restored = System.from_state(store.load())

        session = restored.open_session("alice", "alice-pw")
        assert restored.read_scrap(session) == "Bob is your crush - message from Jackut."
        assert restored.read_scrap(session) == "hello"
        assert restored.read_community_message(session) == "welcome"
        assert set(restored.sessions) >= set(original.sessions)

    def test_save_load_save_is_byte_identical(self, store: StateStore, data_file: Path) -> None:
        """Test re-saving an unmodified load leaves the file unchanged."""
        store.save(build_system().snapshot())
        first = data_file.read_bytes()

        store.save(System.from_state(store.load()).snapshot())

        assert data_file.read_bytes() == first

    def test_save_overwrites(self, store: StateStore) -> None:
        """Test a later save replaces the earlier snapshot."""
        store.save(build_system().snapshot())
        store.save(SystemState())

        assert store.load() == SystemState()

    def test_save_to_missing_directory(self, tmp_path: Path) -> None:
        """Test an unwritable location raises PersistenceError."""
        store = StateStore(tmp_path / "missing" / "jackut.json")

        with pytest.raises(PersistenceError, match="Could not write data file"):
            store.save(SystemState())

    def test_no_temporary_files_left(self, store: StateStore, tmp_path: Path) -> None:
        """Test a successful save leaves only the data file behind."""
        store.save(build_system().snapshot())

        assert [p.name for p in tmp_path.iterdir()] == ["jackut.json"]


class TestSnapshotSchema:
    """Tests for snapshot validation."""

    def test_duplicate_login(self) -> None:
        """Test two users with one login are rejected."""
        with pytest.raises(ValueError, match="Duplicate user login"):
            SystemState(
                users=[
                    UserState(login="a", password="x"),
                    UserState(login="a", password="y"),
                ]
            )

    def test_community_with_unknown_owner(self) -> None:
        """Test a community owned by a missing user is rejected."""
        with pytest.raises(ValueError, match="unknown user"):
            SystemState(communities=[CommunityState(name="club", owner="ghost")])

    def test_community_with_unknown_member(self) -> None:
        """Test a community whose member list names a missing user is rejected."""
        with pytest.raises(ValueError, match="unknown member ghost"):
            SystemState(
                users=[UserState(login="a", password="x", communities=["club"])],
                communities=[CommunityState(name="club", owner="a", members=["a", "ghost"])],
            )

    @pytest.mark.parametrize(
        "relation", ["friends", "pending_invites", "idols", "fans", "crushes", "enemies"]
    )
    def test_relation_with_unknown_user(self, relation: str) -> None:
        """Test every user relation list is checked for missing logins."""
        with pytest.raises(ValueError, match=f"unknown user ghost in {relation}"):
            SystemState(users=[UserState(login="a", password="x", **{relation: ["ghost"]})])

    def test_user_in_unknown_community(self) -> None:
        """Test a user listing a missing community is rejected."""
        with pytest.raises(ValueError, match="unknown community club"):
            SystemState(users=[UserState(login="a", password="x", communities=["club"])])

    def test_valid_snapshot(self) -> None:
        """Test a consistent snapshot validates."""
        state = SystemState(
            users=[UserState(login="a", password="x")],
            sessions=[SessionState(id="s1", login="a")],
            communities=[CommunityState(name="club", owner="a", members=["a"])],
        )

        assert System.from_state(state).get_session_user("s1").login == "a"
