"""Pytest configuration for issueoutline tests.

Ensures the in-repo ``src`` directory is importable without an editable
install and keeps tests away from real credentials and ``.env`` files.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for var in (
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "OWNER",
        "REPO",
        "ISSUEOUTLINE_QUIET",
        "ISSUEOUTLINE_LOG_JSON",
        "ISSUEOUTLINE_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
