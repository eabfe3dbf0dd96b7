"""Runtime helpers for CLI command execution."""

from __future__ import annotations

import time
from typing import Any, Protocol

from .errors import classify_error
from .logging import get_logger


class _HandlerCallable(Protocol):
    def __call__(self) -> Any: ...


def execute_command(handler: _HandlerCallable, command: str) -> int:
    """Run a command handler, logging its duration or its failure."""
    logger = get_logger()
    start = time.monotonic()
    try:
        result = handler()
    except Exception as exc:
        info = classify_error(exc)
        logger.log_error(
            f"command {command} failed",
            error=info.message,
            category=info.category,
            transient=info.transient,
        )
        raise
    exit_code = int(result) if result is not None else 0
    duration_ms = max(0.0, time.monotonic() - start) * 1000
    logger.log_performance(command, duration_ms, exit_code=exit_code)
    return exit_code


__all__ = ["execute_command"]
