"""Application entry point for backlog-slackify."""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import replace
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint

import settings
from client import build_issue_source, build_notifier
from core.config import ClientOptions
from core.due_date import DATE_FORMAT
from core.errors import SlackifyError
from core.models import RunSummary
from core.ports import IssueSourcePort, NotifierPort
from core.processor import IssueProcessor
from core.validation import validate_options

NAME = "SLACKIFY"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict, options: ClientOptions) -> list[str]:
    # The API key rides in Backlog request URLs; the webhook URL is a credential.
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", True):
        return []
    values = {options.backlog_api_key, options.slack_webhook_url}
    return sorted((value for value in values if value), key=len, reverse=True)


def _configure_logging(config: dict, options: ClientOptions) -> None:
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config, options)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/backlog-slackify.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def run(
    options: ClientOptions,
    reference_time: datetime,
    *,
    issue_source: Optional[IssueSourcePort] = None,
    notifier: Optional[NotifierPort] = None,
) -> RunSummary:
    """Validate options, then fetch, format and post issues once.

    ``reference_time`` anchors due-date resolution. Adapters default to the
    Backlog API and Slack (or the console for dry runs); tests inject fakes.
    Raises a :class:`core.errors.SlackifyError` subclass naming the failed
    step.
    """

    config = validate_options(options, reference_time)
    if issue_source is None:
        issue_source = build_issue_source(config, options.backlog_api_key)
    if notifier is None:
        notifier = build_notifier(config)
    return IssueProcessor(config, issue_source, notifier).execute()


def _parse_date(value: str) -> datetime:
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from e


def _post(options: ClientOptions, reference_time: datetime) -> int:
    logger = logging.getLogger(__name__)
    logger.info("Starting backlog-slackify")
    try:
        run(options, reference_time)
    except SlackifyError as e:
        logger.error("Run failed: %s", e)
        return 1
    return 0


def _check(options: ClientOptions, reference_time: datetime) -> int:
    _print_banner()
    try:
        config = validate_options(options, reference_time)
    except SlackifyError as e:
        print(f"Invalid config: {e}")
        return 1

    mode = "dry run" if config.dry_run else f"slack {config.slack.channel}"
    post_mode = "single post" if config.is_single_post else "one post per condition"
    print(f"Backlog: {config.backlog_base_url}")
    print(f"Due date until: {config.due_date}")
    print(f"Delivery: {mode} ({post_mode})")
    for index, search in enumerate(config.search_conditions, start=1):
        label = search.name or "(unnamed)"
        status = "ok" if search.condition is not None else "missing condition"
        print(f"{index}. {label} | {status}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="backlog-slackify")
    parser.add_argument("--config", help="Path to the JSON config file")
    parser.add_argument("--date", type=_parse_date, help="Reference date (YYYY-MM-DD) instead of today")
    subparsers = parser.add_subparsers(dest="command")

    post_parser = subparsers.add_parser("post", help="Post due issues to Slack")
    post_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print messages instead of posting them",
    )
    subparsers.add_parser("check", help="Validate the config without network calls")

    args = parser.parse_args(argv)
    raw = settings.load_config(args.config)
    try:
        options = settings.load_options(raw)
    except SlackifyError as e:
        print(f"Invalid config: {e}")
        return 1
    if getattr(args, "dry_run", False) and not options.dry_run:
        options = replace(options, dry_run=True)
    _configure_logging(settings.logging_config(raw), options)

    reference_time = args.date or datetime.now()
    if args.command == "check":
        return _check(options, reference_time)
    return _post(options, reference_time)


if __name__ == "__main__":
    raise SystemExit(main())
