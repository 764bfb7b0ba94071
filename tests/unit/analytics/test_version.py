"""Tests for persisted version state."""

from pathlib import Path

import pytest

from automate_ci.analytics.version import (
    STATE_FILE_NAME,
    VersionState,
    VersionStateError,
    VersionTracker,
)


@pytest.fixture
def tracker(tmp_path: Path) -> VersionTracker:
    """Create tracker rooted in a temporary directory."""
    return VersionTracker(root_dir=tmp_path / "state")


class TestInit:
    """Tests for init."""

    def test_creates_state_on_first_run(self, tracker: VersionTracker) -> None:
        """Writes a new state with a client id and the version."""
        assert tracker.init("2.0") is True

        state = tracker.read()
        assert state.version == "2.0"
        assert state.client_id

    def test_returns_false_when_state_exists(self, tracker: VersionTracker) -> None:
        """Leaves existing state untouched."""
        tracker.init("1.0")
        client_id = tracker.get_client_id()

        assert tracker.init("2.0") is False
        assert tracker.read() == VersionState(client_id=client_id, version="1.0")

    def test_raises_when_unwritable(self, tmp_path: Path) -> None:
        """Wraps write failures in VersionStateError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        tracker = VersionTracker(root_dir=blocker / "nested")

        with pytest.raises(VersionStateError):
            tracker.init("1.0")


class TestUpdateVersion:
    """Tests for update_version."""

    def test_updates_changed_version(self, tracker: VersionTracker) -> None:
        """Stores the new version and keeps the client id."""
        tracker.init("1.0")
        client_id = tracker.get_client_id()

        assert tracker.update_version("2.0") is True
        assert tracker.read() == VersionState(client_id=client_id, version="2.0")

    def test_same_version_is_noop(self, tracker: VersionTracker) -> None:
        """Returns False for an unchanged version."""
        tracker.init("2.0")

        assert tracker.update_version("2.0") is False

    def test_raises_without_state(self, tracker: VersionTracker) -> None:
        """Raises VersionStateError when nothing was stored yet."""
        with pytest.raises(VersionStateError):
            tracker.update_version("2.0")


def test_read_rejects_malformed_state(tracker: VersionTracker) -> None:
    """Raises VersionStateError for corrupt state files."""
    tracker.root_dir.mkdir(parents=True)
    (tracker.root_dir / STATE_FILE_NAME).write_text("not json")

    with pytest.raises(VersionStateError, match="Cannot read version state"):
        tracker.read()


def test_init_wraps_existence_check_failure(tmp_path: Path) -> None:
    """Errors while checking for the state file become VersionStateError."""
    tracker = VersionTracker(root_dir=tmp_path / ("x" * 300))

    with pytest.raises(VersionStateError, match="Cannot access version state"):
        tracker.init("1.0")
