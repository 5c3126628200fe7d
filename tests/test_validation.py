from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from core.config import DEFAULT_ACCOUNT_NAME, ClientOptions, SearchCondition
from core.errors import (
    DueDateInvalidError,
    NoApiKeyError,
    NoBacklogUrlError,
    NoSearchConditionsError,
    NoSlackChannelError,
    NoSlackUrlError,
    OptionError,
)
from core.validation import validate_options

REFERENCE = datetime(2000, 1, 1, tzinfo=timezone.utc)


def _options(**overrides) -> ClientOptions:
    options = ClientOptions(
        backlog_api_key="dummy",
        backlog_base_url="https://backlog.example.com",
        backlog_due_date="weekend",
        slack_webhook_url="https://slack.example.com",
        slack_channel="test-channel",
        slack_account_name="test-slack-bot",
        slack_icon_emoji=":backlog:",
        is_single_post=True,
        dry_run=True,
        search_conditions=(
            SearchCondition(name="test", condition={"projectId": [1], "categoryId": [1], "statusId": [1]}),
        ),
    )
    return replace(options, **overrides)


def test_valid_options_build_config() -> None:
    config = validate_options(_options(), REFERENCE)

    assert config.backlog_base_url == "https://backlog.example.com"
    assert config.due_date == "2000-01-01"
    assert config.is_single_post is True
    assert config.dry_run is True
    assert config.slack.username == "test-slack-bot"
    assert config.slack.icon_emoji == ":backlog:"
    assert config.slack.channel == "test-channel"
    assert [search.name for search in config.search_conditions] == ["test"]


def test_missing_required_fields_raise_specific_errors() -> None:
    cases = [
        ({"backlog_api_key": ""}, NoApiKeyError),
        ({"backlog_base_url": ""}, NoBacklogUrlError),
        ({"slack_webhook_url": ""}, NoSlackUrlError),
        ({"slack_channel": ""}, NoSlackChannelError),
        ({"search_conditions": None}, NoSearchConditionsError),
        ({"backlog_due_date": "invalid"}, DueDateInvalidError),
    ]
    for overrides, error in cases:
        with pytest.raises(error):
            validate_options(_options(**overrides), REFERENCE)


def test_first_failing_check_wins() -> None:
    options = _options(backlog_api_key="", slack_channel="", backlog_due_date="invalid")
    with pytest.raises(NoApiKeyError):
        validate_options(options, REFERENCE)

    options = _options(search_conditions=None, backlog_due_date="invalid")
    with pytest.raises(NoSearchConditionsError):
        validate_options(options, REFERENCE)


def test_option_errors_share_a_base_class() -> None:
    with pytest.raises(OptionError) as excinfo:
        validate_options(_options(slack_channel=""), REFERENCE)
    assert str(excinfo.value) == "SlackChannel is required"


def test_empty_search_conditions_are_allowed() -> None:
    config = validate_options(_options(search_conditions=()), REFERENCE)
    assert config.search_conditions == ()


def test_account_name_defaults_to_bot_name() -> None:
    config = validate_options(_options(slack_account_name=""), REFERENCE)
    assert config.slack.username == DEFAULT_ACCOUNT_NAME == "Backlog-bot"


def test_relative_due_date() -> None:
    config = validate_options(_options(backlog_due_date="3"), REFERENCE)
    assert config.due_date == "2000-01-04"


def test_trailing_slash_is_stripped_from_base_url() -> None:
    config = validate_options(_options(backlog_base_url="https://backlog.example.com/"), REFERENCE)
    assert config.backlog_base_url == "https://backlog.example.com"
