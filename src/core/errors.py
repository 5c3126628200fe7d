"""Error types raised by the core and its adapters.

Messages mirror the wording users already see in logs, so each class carries
a fixed default message and can be raised without arguments.
"""

from __future__ import annotations

from typing import Optional


class SlackifyError(RuntimeError):
    """Base class for every failure that aborts a run."""

    default_message = "backlog-slackify failed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class OptionError(SlackifyError, ValueError):
    """Configuration is incomplete or invalid; detected before any network call."""


class NoApiKeyError(OptionError):
    default_message = "BacklogApiKey is required"


class NoBacklogUrlError(OptionError):
    default_message = "BacklogBaseUrl is required"


class NoSlackUrlError(OptionError):
    default_message = "SlackWebhookUrl is required"


class NoSlackChannelError(OptionError):
    default_message = "SlackChannel is required"


class NoSearchConditionsError(OptionError):
    default_message = "SearchConditions is required"


class DueDateInvalidError(OptionError):
    default_message = 'BacklogDueDate is "weekend" or "end_of_month" or relative days number like "3"'


class InvalidConfigError(OptionError):
    default_message = "config has an invalid value"


class NoConditionError(SlackifyError, ValueError):
    default_message = "parameter invalid, SearchConditions.Condition is blank"


class _HttpError(SlackifyError):
    def __init__(self, message: Optional[str] = None, status: Optional[int] = None, body: str = "") -> None:
        if status is not None:
            message = f"{message or self.default_message} (status {status})"
            if body:
                message = f"{message}: {body}"
        super().__init__(message)
        self.status = status
        self.body = body


class BacklogApiError(_HttpError):
    default_message = "Backlog API error"


class SlackPostError(_HttpError):
    default_message = "Slack webhook error"
