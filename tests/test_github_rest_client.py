import json
from dataclasses import dataclass
from typing import Any

import pytest

from issueoutline.github_rest import GitHubAPIError, GitHubRestClient


@dataclass
class _DummyResponse:
    status_code: int
    payload: Any

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    @property
    def text(self) -> str:
        payload = self.payload
        if isinstance(payload, (dict, list)):
            return json.dumps(payload)
        return str(payload)


class _DummySession:
    def __init__(self, responses: list[_DummyResponse]):
        self._responses = responses
        self.request_log: list[tuple[str, str, dict[str, Any]]] = []
        self.headers: dict[str, str] = {}

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json: Any | None = None,
        timeout: float | None = None,
    ) -> _DummyResponse:
        self.request_log.append((method, url, {"headers": headers, "json": json}))
        if not self._responses:
            raise AssertionError("No response queued for request")
        return self._responses.pop(0)


def test_rest_client_creates_issue():
    session = _DummySession([_DummyResponse(201, {"number": 321})])
    client = GitHubRestClient(token="tkn", repo="acme/widgets", session=session)

    number = client.create_issue(
        title="[Backend] API", assignees=["alice"], labels=["Backend", "point:2"]
    )

    assert number == 321
    method, url, kwargs = session.request_log[0]
    assert method == "POST"
    assert url == "https://api.github.com/repos/acme/widgets/issues"
    assert kwargs["json"] == {
        "title": "[Backend] API",
        "assignees": ["alice"],
        "labels": ["Backend", "point:2"],
    }
    assert kwargs["headers"]["Authorization"] == "Bearer tkn"


def test_rest_client_includes_body_when_present():
    session = _DummySession([_DummyResponse(201, {"number": 1})])
    client = GitHubRestClient(token="tkn", repo="acme/widgets", session=session)

    client.create_issue(title="Docs", body="Write it", labels=["point:1"])

    assert session.request_log[0][2]["json"] == {
        "title": "Docs",
        "body": "Write it",
        "labels": ["point:1"],
    }


def test_rest_client_raises_on_error():
    session = _DummySession([_DummyResponse(401, {"message": "Bad credentials"})])
    client = GitHubRestClient(token="tkn", repo="acme/widgets", session=session)

    with pytest.raises(GitHubAPIError) as excinfo:
        client.create_issue(title="X")

    assert excinfo.value.status == 401
    assert "Bad credentials" in str(excinfo.value)


def test_rest_client_repr_hides_token():
    client = GitHubRestClient(token="ghp_secret", repo="acme/widgets", session=_DummySession([]))

    assert "ghp_secret" not in repr(client)
