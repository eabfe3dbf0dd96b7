"""Sequential, paced submission of resolved issue records.

One create call is in flight at a time. After each call the loop sleeps for
a fixed delay before starting the next. The first failure stops the run;
issues created before it stay created.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from typing import Protocol

import requests

from .errors import SubmissionError, redact
from .github_rest import GitHubAPIError
from .logging import StructuredLogger, get_logger
from .models import IssueRecord

DEFAULT_DELAY_SECONDS = 0.5


class IssueCreator(Protocol):
    def create_issue(
        self,
        *,
        title: str,
        body: str | None = None,
        assignees: Sequence[str] | None = None,
        labels: Sequence[str] | None = None,
    ) -> int | None: ...


def submit(
    records: Sequence[IssueRecord],
    client: IssueCreator,
    *,
    delay: float = DEFAULT_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    logger: StructuredLogger | None = None,
) -> list[int | None]:
    """Create one issue per record, in order, pausing ``delay`` seconds after each."""
    log = logger or get_logger()
    created: list[int | None] = []
    total = len(records)
    for index, record in enumerate(records):
        try:
            number = client.create_issue(
                title=record.title,
                body=record.comment,
                assignees=list(record.assignees) if record.assignees is not None else None,
                labels=record.tracker_labels,
            )
        except GitHubAPIError as exc:
            raise SubmissionError(
                redact(f"creating issue {index + 1}/{total} {record.title!r} failed: {exc}"),
                index=index,
                title=record.title,
                status=exc.status,
            ) from exc
        except requests.RequestException as exc:
            raise SubmissionError(
                redact(f"creating issue {index + 1}/{total} {record.title!r} failed: {exc}"),
                index=index,
                title=record.title,
            ) from exc
        log.log_issue_action(
            "create", record.title, issue_number=number, position=index + 1, total=total
        )
        created.append(number)
        sleep(delay)
    return created


__all__ = ["DEFAULT_DELAY_SECONDS", "IssueCreator", "submit"]
