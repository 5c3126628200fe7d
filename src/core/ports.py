"""Ports (interfaces) used by the core processor.

Ports define the minimal contracts for the ticket tracker and the chat
notifier so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol

from core.models import Issue


class IssueSourcePort(Protocol):
    """Issue search required by the core processor."""

    def search_issues(self, query: Mapping[str, Any]) -> List[Optional[Issue]]:
        ...


class NotifierPort(Protocol):
    """Message delivery required by the core processor."""

    def post(self, text: str) -> None:
        ...
