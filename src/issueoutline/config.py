"""Environment-sourced tracker configuration.

Three values are required: a GitHub token, the repository owner and the
repository name. A ``.env`` file in the working directory is honoured via
python-dotenv; values already present in the real environment win.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values

from .errors import ConfigurationError
from .logging import get_logger

TOKEN_VAR = "GITHUB_TOKEN"
TOKEN_FALLBACK_VARS = ("GH_TOKEN",)
OWNER_VAR = "OWNER"
REPO_VAR = "REPO"
DOTENV_LOCATIONS = (".env", ".env.local")


@dataclass(frozen=True)
class TrackerConfig:
    token: str = field(repr=False)
    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


def _read_dotenv(dotenv_path: str | Path | None) -> dict[str, str]:
    candidates = [Path(dotenv_path)] if dotenv_path else [Path(p) for p in DOTENV_LOCATIONS]
    for candidate in candidates:
        if candidate.is_file():
            get_logger().debug(f"Loaded environment variables from {candidate}")
            return {k: v for k, v in dotenv_values(candidate).items() if v is not None}
    return {}


def load_config(
    environ: Mapping[str, str] | None = None,
    *,
    load_env_file: bool = True,
    dotenv_path: str | Path | None = None,
) -> TrackerConfig:
    """Build a :class:`TrackerConfig` or raise :class:`ConfigurationError`."""
    env: dict[str, str] = _read_dotenv(dotenv_path) if load_env_file else {}
    env.update(os.environ if environ is None else environ)

    def _get(name: str) -> str | None:
        value = env.get(name)
        return value.strip() if value and value.strip() else None

    token = _get(TOKEN_VAR)
    if token is None:
        for alt in TOKEN_FALLBACK_VARS:
            token = _get(alt)
            if token:
                get_logger().debug(f"Using GitHub token from {alt}")
                break
    owner = _get(OWNER_VAR)
    repo = _get(REPO_VAR)

    missing = [
        f"${name}"
        for name, value in ((TOKEN_VAR, token), (OWNER_VAR, owner), (REPO_VAR, repo))
        if value is None
    ]
    if missing:
        verb = "is" if len(missing) == 1 else "are"
        raise ConfigurationError(f"{', '.join(missing)} {verb} required.")
    return TrackerConfig(token=str(token), owner=str(owner), repo=str(repo))


__all__ = ["TrackerConfig", "load_config"]
