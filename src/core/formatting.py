"""Slack message formatting for issue lists.

Formatting lives in the core because single-post mode joins several
rendered blocks before anything is delivered.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from core.models import Issue

MAX_ISSUES_PER_POST = 10
MORE_MARKER = "and more..."
FENCE = "```"


def issue_url(base_url: str, issue_key: str) -> str:
    return f"{base_url}/view/{issue_key}"


def build_post(issues: Sequence[Optional[Issue]], name: str, base_url: str) -> str:
    """Render issues as a fenced block, optionally headed by ``name``.

    Each issue contributes its link, summary and assignee (whichever are
    present) followed by a blank line. Only the first ``MAX_ISSUES_PER_POST``
    entries are rendered; ``None`` entries count toward that cap but produce
    no output.
    """

    lines: List[str] = [name, FENCE] if name else [FENCE]
    for index, issue in enumerate(issues):
        if index >= MAX_ISSUES_PER_POST:
            lines.append(MORE_MARKER)
            break
        if issue is None:
            continue
        if issue.issue_key is not None:
            lines.append(issue_url(base_url, issue.issue_key))
        if issue.summary is not None:
            lines.append(issue.summary)
        if issue.assignee_name is not None:
            lines.append(issue.assignee_name)
        lines.append("")
    lines.append(FENCE)
    return "\n".join(lines)
