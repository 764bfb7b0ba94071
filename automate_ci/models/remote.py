"""Models for remote test case records reported by the Automate API."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ConfigDict, Field, TypeAdapter

from automate_ci.models.base import Model


@dataclass(frozen=True)
class Hashed:
    """Remote test identity carrying a content hash of the test name."""

    value: str


@dataclass(frozen=True)
class Unhashed:
    """Remote test identity without a hash; matched by full path only."""


@dataclass(frozen=True, kw_only=True)
class RemoteTestRecord:
    """A cloud-executed test case awaiting correlation with a local result."""

    session_id: str
    test_index: int
    test_full_path: str
    test_hash: Hashed | Unhashed = field(default_factory=Unhashed)

    @property
    def matching_key(self) -> str:
        """Identity the matcher compares first for this record."""
        if isinstance(self.test_hash, Hashed):
            return self.test_hash.value
        return self.test_full_path


@dataclass(frozen=True, kw_only=True)
class SessionMatch:
    """Remote session claimed by a local test case."""

    session_id: str
    matched_key: str


class RemoteTestCase(Model):
    """Test case entry as returned by the Automate session API."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    test_index: int = Field(..., alias="testIndex")
    test_full_path: str = Field(..., alias="testFullPath")
    test_hash: str | None = Field(default=None, alias="testHash")

    def to_record(self) -> RemoteTestRecord:
        """Convert to a record, treating an empty hash as no hash."""
        test_hash: Hashed | Unhashed = (
            Hashed(self.test_hash) if self.test_hash else Unhashed()
        )
        return RemoteTestRecord(
            session_id=self.session_id,
            test_index=self.test_index,
            test_full_path=self.test_full_path,
            test_hash=test_hash,
        )


_REMOTE_TEST_CASES = TypeAdapter(Sequence[RemoteTestCase])


def load_pending_records(payload: Any) -> list[RemoteTestRecord]:
    """Validate a decoded API payload into a mutable pending record list.

    Raises:
        pydantic.ValidationError: If the payload is not a list of test cases

    """
    return [case.to_record() for case in _REMOTE_TEST_CASES.validate_python(payload)]
