"""
Builders for host pull request events used across the test suite.
"""

from prhook.core.models import (
    PullRequest,
    PullRequestEvent,
    PullRequestEventKind,
    PullRequestRef,
    Repository,
    User,
)

SOURCE_REPO = Repository(id=7, slug="app-fork", project_key="~DEV")
TARGET_REPO = Repository(id=42, slug="app", project_key="PROJ")


def make_pull_request(
    from_ref: str = "refs/heads/main",
    from_commit: str | None = "abc123",
    to_ref: str = "refs/heads/develop",
    to_commit: str | None = "def456",
    pr_id: int = 101,
) -> PullRequest:
    return PullRequest(
        id=pr_id,
        title="Add feature",
        from_ref=PullRequestRef(id=from_ref, latest_commit=from_commit, repository=SOURCE_REPO),
        to_ref=PullRequestRef(id=to_ref, latest_commit=to_commit, repository=TARGET_REPO),
    )


def make_event(
    kind: PullRequestEventKind = PullRequestEventKind.OPENED,
    previous_from_hash: str | None = None,
    username: str = "alice",
    **pr_kwargs,
) -> PullRequestEvent:
    return PullRequestEvent(
        kind=kind,
        pull_request=make_pull_request(**pr_kwargs),
        user=User(name=username, display_name=username.title()),
        previous_from_hash=previous_from_hash,
    )
