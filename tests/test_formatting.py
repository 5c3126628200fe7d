from __future__ import annotations

from core.formatting import MORE_MARKER, build_post
from core.models import Issue

BASE_URL = "https://backlog.example.com"


def test_build_post_with_label() -> None:
    issues = [
        Issue(issue_key="PRJ-1", summary="Fix login", assignee_name="alice"),
        Issue(issue_key="PRJ-2", summary="Write docs", assignee_name=None),
    ]

    post = build_post(issues, "Due this week", BASE_URL)

    assert post == "\n".join(
        [
            "Due this week",
            "```",
            "https://backlog.example.com/view/PRJ-1",
            "Fix login",
            "alice",
            "",
            "https://backlog.example.com/view/PRJ-2",
            "Write docs",
            "",
            "```",
        ]
    )


def test_build_post_without_label_or_issues() -> None:
    assert build_post([], "", BASE_URL) == "```\n```"


def test_none_issues_and_fields_are_skipped() -> None:
    issues = [None, Issue(summary="No key"), Issue()]

    post = build_post(issues, "", BASE_URL)

    assert post == "```\nNo key\n\n\n```"


def test_build_post_is_deterministic() -> None:
    issues = [Issue(issue_key=f"PRJ-{n}", summary=f"task {n}") for n in range(3)]
    assert build_post(issues, "label", BASE_URL) == build_post(issues, "label", BASE_URL)


def test_build_post_caps_at_ten_issues() -> None:
    issues = [Issue(issue_key=f"PRJ-{n}", summary=f"task {n}") for n in range(1, 13)]

    post = build_post(issues, "many", BASE_URL)
    lines = post.split("\n")

    assert "task 10" in lines
    assert "task 11" not in lines
    assert "task 12" not in lines
    assert lines[-2:] == [MORE_MARKER, "```"]
    assert lines.count(MORE_MARKER) == 1


def test_exactly_ten_issues_has_no_more_marker() -> None:
    issues = [Issue(issue_key=f"PRJ-{n}") for n in range(10)]
    assert MORE_MARKER not in build_post(issues, "", BASE_URL)
