"""CLI entry point for correlating local test results with Automate sessions."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from automate_ci.config import DEFAULT_TAG, TrackerConfig
from automate_ci.models.remote import (
    RemoteTestRecord,
    SessionMatch,
    load_pending_records,
)
from automate_ci.tracker import TestCaseTracker

STATUS_SYMBOLS = {
    True: "✅",
    False: "❌",
}

_TEST_CASE_NAMES = TypeAdapter(list[str])


def log_correlation_summary(
    log: logging.Logger, matches: Sequence[tuple[str, SessionMatch | None]]
) -> None:
    """Log a formatted summary of matched and unmatched test cases."""
    log.info("=" * 80)
    log.info("Session Correlation Summary:")
    log.info("=" * 80)

    for name, match in matches:
        symbol = STATUS_SYMBOLS[match is not None]
        if match is not None:
            log.info("%s %s: %s", symbol, name, match.session_id)
        else:
            log.info("%s %s: no remote session", symbol, name)


def format_output(
    matches: Sequence[tuple[str, SessionMatch | None]],
    remaining: Sequence[RemoteTestRecord],
) -> dict[str, Any]:
    """Format correlation results for JSON output."""
    results = [
        {
            "name": name,
            "session_id": match.session_id if match else None,
            "matched_key": match.matched_key if match else None,
        }
        for name, match in matches
    ]
    matched = sum(1 for _, match in matches if match is not None)

    return {
        "total": len(results),
        "matched": matched,
        "unmatched": len(results) - matched,
        "results": results,
        "remaining": [record.session_id for record in remaining],
    }


def run(
    sessions_path: Path,
    results_path: Path,
    config: TrackerConfig,
) -> int:
    """Correlate local results with remote sessions and return exit code."""
    log = logging.getLogger("automate_ci")

    log.info("Loading remote sessions from %s", sessions_path)
    pending = load_pending_records(json.loads(sessions_path.read_text()))

    log.info("Loading local results from %s", results_path)
    test_case_names = _TEST_CASE_NAMES.validate_json(results_path.read_text())

    log.info(
        "Correlating %d local test(s) with %d remote record(s)",
        len(test_case_names),
        len(pending),
    )
    tracker = TestCaseTracker(config=config)
    matches = tracker.correlate(pending, test_case_names)

    log_correlation_summary(log, matches)

    output = format_output(matches, pending)
    print(json.dumps(output, indent=2))

    return 1 if output["unmatched"] else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Correlate local test results with Automate sessions"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    correlate = subparsers.add_parser(
        "correlate", help="Match local test cases to remote sessions"
    )
    correlate.add_argument(
        "--sessions",
        type=Path,
        required=True,
        help="JSON file listing remote test cases for the build",
    )
    correlate.add_argument(
        "--results",
        type=Path,
        required=True,
        help="JSON file listing local test case names in execution order",
    )
    correlate.add_argument(
        "--tag",
        default=DEFAULT_TAG,
        help="Label prefixed to diagnostic log lines",
    )
    correlate.add_argument(
        "--debug",
        action="store_true",
        help="Log every candidate considered while matching",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = TrackerConfig.from_env(tag=args.tag)
    if args.debug:
        config = config.model_copy(update={"debug": True})

    exit_code = run(
        sessions_path=args.sessions,
        results_path=args.results,
        config=config,
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
