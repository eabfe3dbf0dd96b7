"""issueoutline - turn a nested YAML outline of work items into GitHub issues.

from issueoutline import resolve, submit, load_outline

records = resolve(load_outline('input.yaml'))
for record in records:
    print(record.title, record.tracker_labels)

The CLI (``issueoutline submit``) wires configuration, resolution and
submission together.
"""

from __future__ import annotations

from .config import TrackerConfig, load_config
from .errors import (
    ConfigurationError,
    IssueOutlineError,
    OutlineParseError,
    SubmissionError,
    ValidationError,
)
from .loader import load_outline
from .models import IssueRecord, NodeKind
from .resolver import classify_node, resolve
from .submitter import submit

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "IssueOutlineError",
    "IssueRecord",
    "NodeKind",
    "OutlineParseError",
    "SubmissionError",
    "TrackerConfig",
    "ValidationError",
    "classify_node",
    "load_config",
    "load_outline",
    "resolve",
    "submit",
    "__version__",
]
