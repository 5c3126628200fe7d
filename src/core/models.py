"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to the Backlog JSON schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Issue:
    """The few Backlog issue fields a notification needs; any may be missing."""

    issue_key: Optional[str] = None
    summary: Optional[str] = None
    assignee_name: Optional[str] = None


@dataclass(frozen=True)
class RunSummary:
    """Counters reported at the end of a run."""

    conditions: int
    issues: int
    posts: int
