"""Correlation of local test cases with remotely recorded Automate sessions."""

import hashlib
import logging
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field

from automate_ci.config import TrackerConfig
from automate_ci.models.remote import Hashed, RemoteTestRecord, SessionMatch

logger = logging.getLogger(__name__)


def get_test_case_hash(test_case_name: str) -> str:
    """Return the stable hash identifying a test case by its display name."""
    return hashlib.sha256(test_case_name.encode("utf-8")).hexdigest()


@dataclass(frozen=True, kw_only=True)
class TestCaseTracker:
    """Matches local test results against pending remote test records."""

    __test__ = False

    config: TrackerConfig = field(default_factory=TrackerConfig)

    def log(self, message: str, *args: object) -> None:
        """Log a %-style message prefixed with the configured tag."""
        logger.info("%s: " + message, self.config.tag, *args)

    def log_debug(self, message: str, *args: object) -> None:
        """Log a tagged message only when debug diagnostics are enabled."""
        if self.config.debug:
            self.log(message, *args)

    def find_test_case_session(
        self,
        pending: MutableSequence[RemoteTestRecord],
        test_case_name: str,
        test_case_hash: str,
        test_index: int,
    ) -> SessionMatch | None:
        """Find and claim the remote session recorded for a local test case.

        Records are scanned in the order given. The index must match exactly;
        a record's hash takes priority over its full path. The first matching
        record is removed from ``pending`` so no other test can claim it.

        Args:
            pending: Remote records not yet claimed in this build
            test_case_name: Fully-qualified name of the local test
            test_case_hash: Hash of the local test name
            test_index: Execution index of the local test

        Returns:
            The claimed session, or None when no record matches

        """
        for position, record in enumerate(list(pending)):
            self.log_debug(">>  cr => %s | %s", test_case_name, test_index)
            self.log_debug(
                ">> atc => %s | %s", record.matching_key, record.test_index
            )

            if record.test_index != test_index:
                self.log_debug(
                    ">> => Mismatch: %s != %s", test_index, record.test_index
                )
                continue

            matched_hash = (
                isinstance(record.test_hash, Hashed)
                and record.test_hash.value == test_case_hash
            )
            if matched_hash or record.test_full_path == test_case_name:
                del pending[position]
                self.log_debug(
                    ">> CaseResult: %s {%s} <=> {%s} matched: %s",
                    test_case_name,
                    test_index,
                    record.test_index,
                    len(pending),
                )
                return SessionMatch(
                    session_id=record.session_id,
                    matched_key=test_case_hash if matched_hash else test_case_name,
                )

        return None

    def correlate(
        self,
        pending: MutableSequence[RemoteTestRecord],
        test_case_names: Sequence[str],
    ) -> Sequence[tuple[str, SessionMatch | None]]:
        """Match local test cases, in execution order, against pending records.

        The position of each name in ``test_case_names`` is its test index.
        Names are paired with their match so repeated names stay distinct.
        """
        return [
            (
                name,
                self.find_test_case_session(
                    pending, name, get_test_case_hash(name), test_index
                ),
            )
            for test_index, name in enumerate(test_case_names)
        ]
