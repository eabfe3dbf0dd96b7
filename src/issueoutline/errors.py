"""Error taxonomy & redaction helpers.

Every failure in a run is fatal: configuration problems stop the process
before any parsing, validation problems stop it before any issue is
created, and tracker failures stop it at the first rejected create call.
The CLI turns any ``IssueOutlineError`` into a single stderr line and exit
status 1.

Public API:
- ConfigurationError / OutlineParseError / ValidationError / SubmissionError
- classify_error(exc) -> ErrorInfo
- redact(text) -> str
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

_SENSITIVE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"ghp_[A-Za-z0-9]{20,40}"),  # GitHub classic tokens
    re.compile(r"gh[osu]_[A-Za-z0-9]{20,40}"),  # OAuth / app tokens
    re.compile(r"github_pat_\w{20,}"),  # GitHub fine-grained tokens
    re.compile(r"(?i)(bearer\s+)[A-Za-z0-9_\-\.]{8,}"),
]

_REDACTION_PLACEHOLDER = "<redacted>"

_HTTP_UNAUTHORIZED = 401
_HTTP_FORBIDDEN = 403


class IssueOutlineError(RuntimeError):
    """Base class for every fatal error raised by issueoutline."""


class ConfigurationError(IssueOutlineError):
    """A required environment value is missing."""


class OutlineParseError(IssueOutlineError):
    """The outline file could not be read or is not valid YAML."""


class ValidationError(IssueOutlineError):
    """A node of the outline matches none of the accepted shapes."""

    def __init__(self, reason: str, *, path: Sequence[str] = ()) -> None:
        self.reason = reason
        self.path = tuple(path)
        where = f" at {' > '.join(self.path)}" if self.path else ""
        super().__init__(f"invalid input{where}: {reason}")


class SubmissionError(IssueOutlineError):
    """The tracker rejected or failed a create call."""

    def __init__(
        self,
        message: str,
        *,
        index: int,
        title: str,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.title = title
        self.status = status


@dataclass
class ErrorInfo:
    category: str
    message: str
    original_type: str
    transient: bool = False


def redact(text: str) -> str:
    """Replace credential-looking substrings with a placeholder."""
    if not text:
        return text
    redacted = text
    for pat in _SENSITIVE_PATTERNS:
        if pat.groups:
            redacted = pat.sub(lambda m: m.group(1) + _REDACTION_PLACEHOLDER, redacted)
        else:
            redacted = pat.sub(_REDACTION_PLACEHOLDER, redacted)
    return redacted


def classify_error(exc: BaseException) -> ErrorInfo:
    """Best-effort classification of an exception for logging.

    Typed errors map directly; tracker failures are refined by HTTP status
    and message keywords. Transient categories are reported as such even
    though nothing retries them.
    """
    msg = str(exc) if exc else ""
    low = msg.lower()
    kind = exc.__class__.__name__

    if isinstance(exc, ConfigurationError):
        return ErrorInfo("config", redact(msg), kind)
    if isinstance(exc, OutlineParseError):
        return ErrorInfo("parse", redact(msg), kind)
    if isinstance(exc, ValidationError):
        return ErrorInfo("validation", redact(msg), kind)

    status = getattr(exc, "status", None)
    if status in (_HTTP_UNAUTHORIZED, _HTTP_FORBIDDEN) and "rate limit" not in low:
        return ErrorInfo("github.auth", redact(msg), kind)
    if "rate limit" in low or "secondary rate" in low:
        return ErrorInfo("github.rate_limit", redact(msg), kind, transient=True)
    if any(k in low for k in ("timeout", "timed out", "connection reset", "temporarily unavailable")):
        return ErrorInfo("network", redact(msg), kind, transient=True)
    if isinstance(exc, SubmissionError):
        return ErrorInfo("github", redact(msg), kind)
    return ErrorInfo("generic", redact(msg), kind)


__all__ = [
    "ConfigurationError",
    "ErrorInfo",
    "IssueOutlineError",
    "OutlineParseError",
    "SubmissionError",
    "ValidationError",
    "classify_error",
    "redact",
]
