"""Tests for CLI module."""

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from automate_ci.cli import format_output, log_correlation_summary, run
from automate_ci.config import TrackerConfig
from automate_ci.models.remote import RemoteTestRecord, SessionMatch
from automate_ci.tracker import get_test_case_hash


@pytest.fixture
def sessions_file(tmp_path: Path) -> Path:
    """Write remote sessions for two tests."""
    path = tmp_path / "sessions.json"
    path.write_text(
        json.dumps(
            [
                {"sessionId": "s1", "testIndex": 0, "testFullPath": "testA"},
                {
                    "sessionId": "s2",
                    "testIndex": 1,
                    "testFullPath": "decorated testB",
                    "testHash": get_test_case_hash("testB"),
                },
            ]
        )
    )
    return path


def write_results(tmp_path: Path, names: list[str]) -> Path:
    """Write local results file."""
    path = tmp_path / "results.json"
    path.write_text(json.dumps(names))
    return path


def test_log_correlation_summary(caplog: pytest.LogCaptureFixture) -> None:
    """Logs matched and unmatched tests."""
    matches = [
        ("testA", SessionMatch(session_id="s1", matched_key="testA")),
        ("testC", None),
    ]

    with caplog.at_level(logging.INFO):
        log_correlation_summary(logging.getLogger(), matches)

    assert "Session Correlation Summary:" in caplog.text
    assert "✅ testA: s1" in caplog.text
    assert "❌ testC: no remote session" in caplog.text


def test_format_output_empty() -> None:
    """Returns empty totals when nothing was correlated."""
    assert format_output([], []) == {
        "total": 0,
        "matched": 0,
        "unmatched": 0,
        "results": [],
        "remaining": [],
    }


def test_format_output_mixed() -> None:
    """Counts matches and lists unclaimed sessions."""
    output = format_output(
        [
            ("testA", SessionMatch(session_id="s1", matched_key="testA")),
            ("testC", None),
        ],
        [RemoteTestRecord(session_id="s9", test_index=4, test_full_path="x")],
    )

    assert output["total"] == 2
    assert output["matched"] == 1
    assert output["unmatched"] == 1
    assert output["results"][1] == {
        "name": "testC",
        "session_id": None,
        "matched_key": None,
    }
    assert output["remaining"] == ["s9"]


def test_run_all_matched(
    tmp_path: Path, sessions_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Returns 0 and prints results when every local test matched."""
    results_file = write_results(tmp_path, ["testA", "testB"])

    exit_code = run(sessions_file, results_file, TrackerConfig())

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["matched"] == 2
    assert output["results"][1]["session_id"] == "s2"
    assert output["results"][1]["matched_key"] == get_test_case_hash("testB")
    assert output["remaining"] == []


def test_run_with_unmatched(
    tmp_path: Path, sessions_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Returns 1 when a local test has no remote session."""
    results_file = write_results(tmp_path, ["testA", "testC"])

    exit_code = run(sessions_file, results_file, TrackerConfig())

    assert exit_code == 1
    output = json.loads(capsys.readouterr().out)
    assert output["unmatched"] == 1
    assert output["remaining"] == ["s2"]


def test_run_rejects_non_string_results(tmp_path: Path, sessions_file: Path) -> None:
    """Raises ValidationError when local results are not test names."""
    results_file = tmp_path / "results.json"
    results_file.write_text(json.dumps([1, 2]))

    with pytest.raises(ValidationError):
        run(sessions_file, results_file, TrackerConfig())
