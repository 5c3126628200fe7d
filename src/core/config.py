"""Core configuration dataclasses.

We keep config file parsing outside the core, but these dataclasses define
the shape the core expects so adapters and the app layer can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from core.errors import InvalidConfigError

DEFAULT_ACCOUNT_NAME = "Backlog-bot"

# Backlog query parameter the core fills in when a condition leaves it unset.
DUE_DATE_UNTIL_KEY = "dueDateUntil"


@dataclass(frozen=True)
class SearchCondition:
    """A named Backlog issue query.

    ``condition`` holds Backlog API parameters as-is (``projectId``,
    ``statusId``, ``dueDateUntil``...); the core only reads and sets the
    due-date bound.
    """

    name: str
    condition: Optional[Mapping[str, Any]]

    @classmethod
    def from_dict(cls, raw: Any) -> "SearchCondition":
        if not isinstance(raw, Mapping):
            raise InvalidConfigError(f"search_conditions entries must be objects, got {raw!r}")
        condition = raw.get("condition")
        if condition is not None and not isinstance(condition, Mapping):
            raise InvalidConfigError(f"condition of {raw.get('name')!r} must be an object or null")
        return cls(name=_text(raw.get("name")), condition=condition)


@dataclass(frozen=True)
class ClientOptions:
    """Raw run options as read from the JSON config file."""

    backlog_api_key: str = ""
    backlog_base_url: str = ""
    backlog_due_date: str = ""
    slack_webhook_url: str = ""
    slack_channel: str = ""
    slack_account_name: str = ""
    slack_icon_emoji: str = ""
    slack_icon_url: str = ""
    is_single_post: bool = False
    dry_run: bool = False
    search_conditions: Optional[Tuple[SearchCondition, ...]] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ClientOptions":
        """Build options from the flat JSON schema.

        ``search_conditions`` missing or null stays ``None`` so validation can
        tell "unset" from "empty". The older misspelled ``slack_webhool_url``
        key is still honoured.
        """

        if not isinstance(raw, Mapping):
            raise InvalidConfigError("config must be a JSON object")
        raw_conditions = raw.get("search_conditions")
        conditions = None
        if raw_conditions is not None:
            if not isinstance(raw_conditions, list):
                raise InvalidConfigError("search_conditions must be a list")
            conditions = tuple(SearchCondition.from_dict(entry) for entry in raw_conditions)
        webhook_url = raw.get("slack_webhook_url") or raw.get("slack_webhool_url") or ""
        return cls(
            backlog_api_key=_text(raw.get("backlog_api_key")),
            backlog_base_url=_text(raw.get("backlog_base_url")),
            backlog_due_date=_text(raw.get("backlog_due_date")),
            slack_webhook_url=_text(webhook_url),
            slack_channel=_text(raw.get("slack_channel")),
            slack_account_name=_text(raw.get("slack_account_name")),
            slack_icon_emoji=_text(raw.get("slack_icon_emoji")),
            slack_icon_url=_text(raw.get("slack_icon_url")),
            is_single_post=_flag(raw, "is_single_post"),
            dry_run=_flag(raw, "dry_run"),
            search_conditions=conditions,
        )


@dataclass(frozen=True)
class SlackConfig:
    """Delivery settings consumed by the Slack notifier adapter."""

    webhook_url: str
    channel: str
    username: str = DEFAULT_ACCOUNT_NAME
    icon_emoji: str = ""
    icon_url: str = ""


@dataclass(frozen=True)
class NotifierConfig:
    """Validated settings for a single run."""

    backlog_base_url: str
    due_date: str
    search_conditions: Tuple[SearchCondition, ...]
    slack: SlackConfig
    is_single_post: bool = False
    dry_run: bool = False


def _flag(raw: Mapping[str, Any], key: str) -> bool:
    value = raw.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
