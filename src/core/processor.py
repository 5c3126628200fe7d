"""Core run orchestration.

This module is integration-agnostic. It only relies on ports for the issue
search and message delivery, so dry runs and tests swap adapters without
changes here.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from core.config import DUE_DATE_UNTIL_KEY, NotifierConfig
from core.errors import InvalidConfigError, NoConditionError
from core.formatting import build_post
from core.models import Issue, RunSummary
from core.ports import IssueSourcePort, NotifierPort

LOGGER = logging.getLogger(__name__)


class IssueProcessor:
    """Fetches issues per search condition, formats them, and posts the result."""

    def __init__(
        self,
        config: NotifierConfig,
        issue_source: IssueSourcePort,
        notifier: NotifierPort,
    ) -> None:
        self._config = config
        self._issue_source = issue_source
        self._notifier = notifier

    def fetch_issues(self, condition: Optional[Mapping[str, Any]]) -> List[Optional[Issue]]:
        """Search issues for one condition, defaulting its due-date bound."""

        if condition is None:
            raise NoConditionError()
        if not isinstance(condition, Mapping):
            raise InvalidConfigError(f"search condition must be a mapping, got {condition!r}")

        # Work on a copy; configured conditions may be reused across runs.
        query = dict(condition)
        if query.get(DUE_DATE_UNTIL_KEY) is None:
            query[DUE_DATE_UNTIL_KEY] = self._config.due_date
        return list(self._issue_source.search_issues(query))

    def build_post(self, issues: List[Optional[Issue]], name: str) -> str:
        return build_post(issues, name, self._config.backlog_base_url)

    def execute(self) -> RunSummary:
        """Process every search condition in configured order.

        Without single-post mode each message is posted as soon as it is
        built, so a failure leaves earlier posts delivered. In single-post mode
        the messages are joined and posted once after all conditions.
        """

        posts: List[str] = []
        post_count = 0
        issue_count = 0
        for search in self._config.search_conditions:
            issues = self.fetch_issues(search.condition)
            issue_count += len(issues)
            LOGGER.info("Fetched %s issues for %r", len(issues), search.name)
            post = self.build_post(issues, search.name)
            if self._config.is_single_post:
                posts.append(post)
            else:
                self._notifier.post(post)
                post_count += 1

        if self._config.is_single_post:
            self._notifier.post("\n".join(posts))
            post_count += 1

        summary = RunSummary(
            conditions=len(self._config.search_conditions),
            issues=issue_count,
            posts=post_count,
        )
        LOGGER.info(
            "Run complete: conditions=%s, issues=%s, posts=%s",
            summary.conditions,
            summary.issues,
            summary.posts,
        )
        return summary
