from __future__ import annotations

from typing import Any

import pytest
import requests

from issueoutline.errors import SubmissionError
from issueoutline.github_rest import GitHubAPIError
from issueoutline.logging import StructuredLogger
from issueoutline.models import IssueRecord
from issueoutline.submitter import DEFAULT_DELAY_SECONDS, submit

RECORDS = [
    IssueRecord(title="[Backend] API", point=2, assignees=("alice",), labels=("Backend",)),
    IssueRecord(title="Docs", point=1, comment="Write it"),
    IssueRecord(title="[Ops] Deploy", point=3, labels=("Ops", "CI")),
]


class _RecordingClient:
    def __init__(self, fail_at: int | None = None, exc: Exception | None = None):
        self.calls: list[dict[str, Any]] = []
        self._fail_at = fail_at
        self._exc = exc

    def create_issue(self, **kwargs: Any) -> int | None:
        self.calls.append(kwargs)
        if self._fail_at is not None and len(self.calls) - 1 == self._fail_at:
            raise self._exc or GitHubAPIError("boom", status=500)
        return 100 + len(self.calls)


@pytest.fixture
def logger() -> StructuredLogger:
    return StructuredLogger(name="issueoutline.test", level="INFO")


def test_submit_sends_one_create_per_record_in_order(logger):
    client = _RecordingClient()
    sleeps: list[float] = []

    created = submit(RECORDS, client, sleep=sleeps.append, logger=logger)

    assert created == [101, 102, 103]
    assert client.calls == [
        {"title": "[Backend] API", "body": None, "assignees": ["alice"], "labels": ["Backend", "point:2"]},
        {"title": "Docs", "body": "Write it", "assignees": None, "labels": ["point:1"]},
        {"title": "[Ops] Deploy", "body": None, "assignees": None, "labels": ["Ops", "CI", "point:3"]},
    ]
    assert sleeps == [DEFAULT_DELAY_SECONDS] * 3


def test_submit_pauses_between_calls():
    events: list[str] = []

    class _Client:
        def create_issue(self, **kwargs: Any) -> int:
            events.append(f"create:{kwargs['title']}")
            return 1

    submit(RECORDS[:2], _Client(), delay=0.25, sleep=lambda s: events.append(f"sleep:{s}"))

    assert events == ["create:[Backend] API", "sleep:0.25", "create:Docs", "sleep:0.25"]


def test_submit_stops_at_first_failure(logger):
    client = _RecordingClient(fail_at=1, exc=GitHubAPIError("forbidden", status=403))
    sleeps: list[float] = []

    with pytest.raises(SubmissionError) as excinfo:
        submit(RECORDS, client, sleep=sleeps.append, logger=logger)

    assert len(client.calls) == 2
    assert sleeps == [DEFAULT_DELAY_SECONDS]
    err = excinfo.value
    assert err.index == 1
    assert err.title == "Docs"
    assert err.status == 403
    assert isinstance(err.__cause__, GitHubAPIError)


def test_submit_wraps_network_errors(logger):
    client = _RecordingClient(fail_at=0, exc=requests.ConnectionError("connection reset"))

    with pytest.raises(SubmissionError) as excinfo:
        submit(RECORDS, client, sleep=lambda _: None, logger=logger)

    assert excinfo.value.status is None
    assert len(client.calls) == 1


def test_submit_with_no_records_makes_no_calls(logger):
    client = _RecordingClient()

    assert submit([], client, sleep=lambda _: None, logger=logger) == []
    assert client.calls == []
