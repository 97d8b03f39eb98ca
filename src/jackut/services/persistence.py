"""File-backed persistence for the system snapshot."""

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError as SchemaValidationError

from jackut.errors import PersistenceError
from jackut.schemas.state import SystemState

logger = logging.getLogger(__name__)


class StateStore:
    """Reads and writes the whole ``SystemState`` as one JSON document.

    Both directions are all-or-nothing: a load either returns a fully
    validated snapshot or raises, and a save writes a temporary file next
    to the target before atomically replacing it.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @staticmethod
    def encode(state: SystemState) -> str:
        """Serialize a snapshot to its on-disk JSON form."""
        return state.model_dump_json(indent=2) + "\n"

    @staticmethod
    def decode(data: str | bytes) -> SystemState:
        """Parse the on-disk JSON form.

        Raises:
            PersistenceError: If the document is not a valid snapshot.
        """
        try:
            return SystemState.model_validate_json(data)
        except SchemaValidationError as e:
            raise PersistenceError(f"Corrupt data file: {e.error_count()} error(s)") from e

    def load(self) -> SystemState:
        """Load the stored snapshot, or an empty one if nothing was saved yet.

        Raises:
            PersistenceError: If the file exists but cannot be read or parsed.
        """
        if not self.path.exists():
            logger.info("No data file at %s - starting with an empty system", self.path)
            return SystemState()

        try:
            data = self.path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Could not read data file: {e}") from e

        state = self.decode(data)
        logger.info(
            "Loaded %d users and %d communities from %s",
            len(state.users),
            len(state.communities),
            self.path,
        )
        return state

    def save(self, state: SystemState) -> None:
        """Persist the snapshot, replacing any previous file.

        Raises:
            PersistenceError: On any I/O failure. The previous file is left intact.
        """
        payload = self.encode(state)
        directory = self.path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise PersistenceError(f"Could not write data file: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Could not write data file: {e}") from e

        logger.info("Saved %d users to %s", len(state.users), self.path)
