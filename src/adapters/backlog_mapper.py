"""Backlog-to-core issue mapping adapter.

This keeps Backlog's JSON shape out of the core processor.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from core.models import Issue


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def issue_from_payload(payload: Any) -> Optional[Issue]:
    """Map one Backlog issue object; anything that is not an object maps to None."""

    if not isinstance(payload, dict):
        return None
    assignee = payload.get("assignee")
    assignee_name = None
    if isinstance(assignee, dict):
        assignee_name = _optional_text(assignee.get("name"))
    return Issue(
        issue_key=_optional_text(payload.get("issueKey")),
        summary=_optional_text(payload.get("summary")),
        assignee_name=assignee_name,
    )


def issues_from_payload(payload: Iterable[Any]) -> List[Optional[Issue]]:
    return [issue_from_payload(item) for item in payload]
