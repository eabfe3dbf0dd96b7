"""issueoutline CLI.

Subcommands:
  submit  -> resolve the outline and create one GitHub issue per leaf
  preview -> human-readable listing of the resolved issues
  export  -> resolved issues as JSON

Environment:
  GITHUB_TOKEN (or GH_TOKEN), OWNER, REPO  required by ``submit``
  ISSUEOUTLINE_LOG_JSON=1                  JSON log lines
  ISSUEOUTLINE_LOG_LEVEL                   log level (default INFO)
  ISSUEOUTLINE_QUIET=1                     same as --quiet
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, TextIO

from issueoutline.config import load_config
from issueoutline.errors import IssueOutlineError, redact
from issueoutline.github_rest import GitHubRestClient
from issueoutline.loader import DEFAULT_INPUT, load_outline
from issueoutline.logging import configure_logging, get_logger
from issueoutline.models import IssueRecord
from issueoutline.resolver import resolve
from issueoutline.runtime import execute_command
from issueoutline.submitter import DEFAULT_DELAY_SECONDS, submit

INPUT_HELP = f"Outline YAML file (default: {DEFAULT_INPUT})"
_MAX_HELP_WIDTH = 100

_BOLD_CYAN = "\033[1;36m"
_DIM = "\033[2m"
_RESET = "\033[0m"


def _styled(text: str, style: str, stream: TextIO | None = None) -> str:
    """Wrap text in an ANSI style when writing to a colour-capable terminal."""
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR") or os.environ.get("TERM") == "dumb":
        return text
    if not hasattr(stream, "isatty") or not stream.isatty():
        return text
    return f"{style}{text}{_RESET}"


class _HelpFormatter(argparse.HelpFormatter):
    def __init__(self, prog: str) -> None:
        super().__init__(prog, max_help_position=30, width=_MAX_HELP_WIDTH)


class _FormatterArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("formatter_class", _HelpFormatter)
        super().__init__(*args, **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    p = _FormatterArgumentParser(
        prog="issueoutline", description="Create GitHub issues from a nested YAML outline"
    )
    p.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors (env: ISSUEOUTLINE_QUIET=1)",
    )
    p.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines (env: ISSUEOUTLINE_LOG_JSON=1)",
    )
    p.add_argument("--log-level", help="Log level (env: ISSUEOUTLINE_LOG_LEVEL, default INFO)")
    sub = p.add_subparsers(
        dest="cmd",
        required=True,
        parser_class=_FormatterArgumentParser,
        metavar="<command>",
    )

    ps = sub.add_parser("submit", help="Create one issue per outline leaf")
    ps.add_argument("--input", default=DEFAULT_INPUT, help=INPUT_HELP)
    ps.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_DELAY_SECONDS,
        help=f"Seconds to pause after each create call (default: {DEFAULT_DELAY_SECONDS})",
    )
    ps.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the planned create calls; no credentials or network needed",
    )

    pv = sub.add_parser("preview", help="List the issues the outline resolves to")
    pv.add_argument("--input", default=DEFAULT_INPUT, help=INPUT_HELP)
    pv.add_argument("--limit", type=int, default=200)

    pe = sub.add_parser("export", help="Write resolved issues as JSON")
    pe.add_argument("--input", default=DEFAULT_INPUT, help=INPUT_HELP)
    pe.add_argument("--output", help="Destination file (default: stdout)")
    pe.add_argument("--pretty", action="store_true")
    return p


def _resolve_input(path: str) -> list[IssueRecord]:
    logger = get_logger()
    records = resolve(load_outline(path))
    logger.log_operation("resolve", input=path, issue_count=len(records))
    return records


def _plan_line(record: IssueRecord) -> str:
    parts = [f"title={record.title!r}", f"labels={record.tracker_labels}"]
    if record.assignees is not None:
        parts.append(f"assignees={list(record.assignees)}")
    if record.comment is not None:
        parts.append(f"body={record.comment!r}")
    return " ".join(parts)


def _cmd_submit(args: argparse.Namespace) -> int:
    # Credentials are checked before the outline is touched.
    cfg = None if args.dry_run else load_config()
    records = _resolve_input(args.input)
    if cfg is None:
        for record in records:
            print("DRY-RUN create issue", _plan_line(record))
        print(f"[dry-run] {len(records)} issues planned")
        return 0

    client = GitHubRestClient(token=cfg.token, repo=cfg.slug)
    with get_logger().timed_operation("submit", repo=cfg.slug, issue_count=len(records)):
        created = submit(records, client, delay=args.delay)
    if args.quiet:
        print(f"[submit] {len(created)} issues -> {cfg.slug}")
    else:
        print(f"Created {len(created)} issues in {_styled(cfg.slug, _BOLD_CYAN)}")
    return 0


def _cmd_preview(args: argparse.Namespace) -> int:
    records = _resolve_input(args.input)
    if args.quiet:
        print(f"Total: {len(records)}")
    else:
        print(_styled(f"Resolved issues ({len(records)} total)", _BOLD_CYAN))
    for record in records[: args.limit]:
        title = record.title if args.quiet else _styled(record.title, _BOLD_CYAN)
        point = record.point_label if args.quiet else _styled(record.point_label, _DIM)
        labels = ", ".join(record.labels) or "-"
        print(f"  {title} {point} [{labels}]")
    if len(records) > args.limit:
        print(f"  ... ({len(records) - args.limit} more)")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    records = _resolve_input(args.input)
    data = [r.to_dict() for r in records]
    text = json.dumps(data, indent=2 if args.pretty else None) + "\n"
    if args.output:
        out_path = Path(args.output)
        out_path.write_text(text, encoding="utf-8")
        print(f"[export] {len(data)} issues -> {out_path}")
    else:
        sys.stdout.write(text)
    return 0


def _build_handlers(args: argparse.Namespace) -> dict[str, Callable[[], int]]:
    return {
        "submit": lambda: _cmd_submit(args),
        "preview": lambda: _cmd_preview(args),
        "export": lambda: _cmd_export(args),
    }


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.quiet and os.environ.get("ISSUEOUTLINE_QUIET") == "1":
        args.quiet = True
    json_logs = args.json_logs or os.environ.get("ISSUEOUTLINE_LOG_JSON") == "1"
    level = args.log_level or os.environ.get("ISSUEOUTLINE_LOG_LEVEL", "INFO")
    if args.quiet and not args.log_level:
        level = "WARNING"
    # Logs go to stderr so export/dry-run output on stdout stays clean.
    configure_logging(json_logging=json_logs, level=level, stream=sys.stderr)

    handler = _build_handlers(args).get(args.cmd)
    if handler is None:  # pragma: no cover - argparse enforces valid choices
        parser.print_help()
        return 1
    try:
        return execute_command(handler, args.cmd)
    except IssueOutlineError as exc:
        print(f"error: {redact(str(exc))}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
