"""Adapter factory for backlog-slackify.

Selecting adapters here keeps the core processor independent from delivery
details: dry runs get the console notifier, real runs get Slack.
"""

from __future__ import annotations

import logging

from adapters.backlog_client import BacklogIssueSource
from adapters.console_notifier import ConsoleNotifier
from adapters.slack_notifier import SlackWebhookNotifier
from core.config import NotifierConfig
from core.ports import IssueSourcePort, NotifierPort


def build_issue_source(config: NotifierConfig, api_key: str) -> IssueSourcePort:
    """Create the Backlog client for the configured space."""

    logging.getLogger(__name__).info("Initializing Backlog client for %s", config.backlog_base_url)
    return BacklogIssueSource(api_key=api_key, base_url=config.backlog_base_url)


def build_notifier(config: NotifierConfig) -> NotifierPort:
    """Create the notifier matching the run mode."""

    if config.dry_run:
        logging.getLogger(__name__).info("Selected notification method - dry run")
        return ConsoleNotifier()
    logging.getLogger(__name__).info("Selected notification method - slack (%s)", config.slack.channel)
    return SlackWebhookNotifier(config.slack)
