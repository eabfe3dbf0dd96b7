from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import requests

DEFAULT_API_URL = "https://api.github.com"
USER_AGENT = "issueoutline-rest/0.1.0"
HTTP_ERROR_STATUS = 400
REQUEST_TIMEOUT = 30


class GitHubAPIError(RuntimeError):
    """Raised when the GitHub REST API returns an error."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        response_text: str | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.response_text = response_text


@dataclass
class GitHubRestClient:
    """Minimal REST client covering issue creation."""

    token: str = field(repr=False)
    repo: str  # owner/repo
    base_url: str = DEFAULT_API_URL
    session: requests.Session | None = None
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._session = self.session or requests.Session()
        self._session.headers.setdefault("Authorization", f"Bearer {self.token}")
        self._session.headers.setdefault("Accept", "application/vnd.github+json")
        self._session.headers.setdefault("User-Agent", USER_AGENT)

    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> Any:
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        response = self._session.request(
            method,
            url,
            json=json_body,
            headers=self._session.headers,
            timeout=REQUEST_TIMEOUT,
        )
        if response.status_code >= HTTP_ERROR_STATUS:
            message = f"GitHub API {method} {url} failed with {response.status_code}"
            detail = _error_message(response)
            if detail:
                message = f"{message}: {detail}"
            raise GitHubAPIError(
                message,
                status=response.status_code,
                response_text=response.text,
            )
        if response.text:
            try:
                return response.json()
            except ValueError:  # pragma: no cover - non-JSON success body
                return response.text
        return None

    def create_issue(
        self,
        *,
        title: str,
        body: str | None = None,
        assignees: Iterable[str] | None = None,
        labels: Iterable[str] | None = None,
    ) -> int | None:
        payload: dict[str, Any] = {"title": title}
        if body is not None:
            payload["body"] = body
        if assignees is not None:
            payload["assignees"] = list(assignees)
        if labels is not None:
            payload["labels"] = list(labels)
        data = self._request("POST", f"/repos/{self.repo}/issues", json_body=payload)
        if isinstance(data, dict):
            number = data.get("number")
            if isinstance(number, int):
                return number
        return None


def _error_message(response: Any) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return str(data["message"])
    return None


__all__ = ["GitHubAPIError", "GitHubRestClient"]
