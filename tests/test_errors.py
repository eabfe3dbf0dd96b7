from __future__ import annotations

from issueoutline.errors import (
    ConfigurationError,
    OutlineParseError,
    SubmissionError,
    ValidationError,
    classify_error,
    redact,
)
from issueoutline.github_rest import GitHubAPIError


def test_classify_typed_errors():
    assert classify_error(ConfigurationError("$OWNER is required.")).category == "config"
    assert classify_error(OutlineParseError("Invalid YAML")).category == "parse"
    assert classify_error(ValidationError("empty value", path=["A"])).category == "validation"


def test_classify_auth_failure():
    info = classify_error(GitHubAPIError("Bad credentials", status=401))
    assert info.category == "github.auth"
    assert info.transient is False


def test_classify_rate_limit():
    exc = SubmissionError("API rate limit exceeded", index=0, title="X", status=403)
    info = classify_error(exc)
    assert info.category == "github.rate_limit"
    assert info.transient is True


def test_classify_network():
    info = classify_error(RuntimeError("Connection reset by peer"))
    assert info.category == "network"
    assert info.transient is True


def test_classify_submission_and_generic():
    assert classify_error(SubmissionError("422", index=1, title="X", status=422)).category == "github"
    assert classify_error(ValueError("Some other problem")).category == "generic"


def test_validation_error_message():
    assert str(ValidationError("empty value")) == "invalid input: empty value"
    assert str(ValidationError("empty value", path=("A", "B"))) == "invalid input at A > B: empty value"


def test_redact_tokens():
    sample = (
        "Token ghp_ABCDEFGHIJKLMNOPQRSTUVWX plus github_pat_1234567890abcdefghijkl "
        "and header Bearer abcdefghijkl"
    )
    out = redact(sample)
    assert "ghp_" not in out
    assert "github_pat_" not in out
    assert "abcdefghijkl" not in out
    assert "Bearer <redacted>" in out
