"""Persisted install state used to detect first runs and upgrades."""

import logging
import uuid
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from pydantic import ValidationError

from automate_ci.models.base import Model

log = logging.getLogger(__name__)

STATE_FILE_NAME = "automate-analytics.json"


class VersionStateError(Exception):
    """Raised when the version state cannot be read or written."""


class VersionTransition(StrEnum):
    """Outcome of comparing the stored version with the running one."""

    NO_PRIOR_STATE = "no_prior_state"
    SAME_VERSION = "same_version"
    VERSION_CHANGED = "version_changed"


class VersionState(Model):
    """Client identifier and last-seen plugin version."""

    client_id: str
    version: str


@dataclass(frozen=True, kw_only=True)
class VersionTracker:
    """Reads and writes the version state file under a root directory."""

    root_dir: Path

    @property
    def state_file(self) -> Path:
        """Location of the persisted state."""
        return self.root_dir / STATE_FILE_NAME

    def init(self, version: str) -> bool:
        """Create the state for a first install.

        Returns:
            True if no state existed and a new one was written

        Raises:
            VersionStateError: If the state cannot be checked or written

        """
        try:
            exists = self.state_file.exists()
        except OSError as e:
            raise VersionStateError(
                f"Cannot access version state {self.state_file}: {e}"
            ) from e
        if exists:
            return False

        state = VersionState(client_id=str(uuid.uuid4()), version=version)
        self._write(state)
        log.debug("Initialised version state at %s", self.state_file)
        return True

    def update_version(self, version: str) -> bool:
        """Store ``version`` if it differs from the recorded one.

        Returns:
            True if the stored version changed

        Raises:
            VersionStateError: If the state cannot be read or written

        """
        state = self.read()
        if state.version == version:
            return False

        self._write(state.model_copy(update={"version": version}))
        log.debug("Updated stored version %s -> %s", state.version, version)
        return True

    def get_client_id(self) -> str:
        """Return the persisted client identifier.

        Raises:
            VersionStateError: If the state cannot be read

        """
        return self.read().client_id

    def read(self) -> VersionState:
        """Load the persisted state.

        Raises:
            VersionStateError: If the file is missing, unreadable or malformed

        """
        try:
            return VersionState.model_validate_json(self.state_file.read_bytes())
        except (OSError, ValidationError) as e:
            raise VersionStateError(
                f"Cannot read version state {self.state_file}: {e}"
            ) from e

    def _write(self, state: VersionState) -> None:
        try:
            self.root_dir.mkdir(parents=True, exist_ok=True)
            self.state_file.write_text(state.model_dump_json(), encoding="utf-8")
        except OSError as e:
            raise VersionStateError(
                f"Cannot write version state {self.state_file}: {e}"
            ) from e
