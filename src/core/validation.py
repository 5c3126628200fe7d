"""Option validation (core domain)."""

from __future__ import annotations

import logging
from datetime import datetime

from core.config import DEFAULT_ACCOUNT_NAME, ClientOptions, NotifierConfig, SlackConfig
from core.due_date import resolve_due_date
from core.errors import (
    NoApiKeyError,
    NoBacklogUrlError,
    NoSearchConditionsError,
    NoSlackChannelError,
    NoSlackUrlError,
)

LOGGER = logging.getLogger(__name__)


def validate_options(options: ClientOptions, reference_time: datetime) -> NotifierConfig:
    """Check required options and resolve the run's due date.

    Checks run in a fixed order and the first failure is raised, so a config
    missing several fields always reports the same one. Nothing here touches
    the network.
    """

    if not options.backlog_api_key:
        raise NoApiKeyError()
    if not options.backlog_base_url:
        raise NoBacklogUrlError()
    if not options.slack_webhook_url:
        raise NoSlackUrlError()
    if not options.slack_channel:
        raise NoSlackChannelError()
    if options.search_conditions is None:
        raise NoSearchConditionsError()

    username = options.slack_account_name or DEFAULT_ACCOUNT_NAME
    due_date = resolve_due_date(options.backlog_due_date, reference_time)
    LOGGER.debug("Resolved due date %r to %s", options.backlog_due_date, due_date)

    return NotifierConfig(
        # Issue links are built as "<base>/view/<key>".
        backlog_base_url=options.backlog_base_url.rstrip("/"),
        due_date=due_date,
        search_conditions=tuple(options.search_conditions),
        slack=SlackConfig(
            webhook_url=options.slack_webhook_url,
            channel=options.slack_channel,
            username=username,
            icon_emoji=options.slack_icon_emoji,
            icon_url=options.slack_icon_url,
        ),
        is_single_post=options.is_single_post,
        dry_run=options.dry_run,
    )
