from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PullRequestEventKind(str, Enum):
    """Pull request lifecycle events that can trigger a notification."""

    OPENED = "opened"
    REOPENED = "reopened"
    RESCOPED = "rescoped"


class Repository(BaseModel):
    """Repository identity as reported by the host application."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Host repository ID")
    slug: str = Field(..., description="Repository slug (without project)")
    project_key: str = Field(..., description="Key of the owning project")

    @property
    def full_name(self) -> str:
        """The project-qualified name (e.g., 'PROJ/repo')."""
        return f"{self.project_key}/{self.slug}"


class PullRequestRef(BaseModel):
    """One side (source or destination) of a pull request."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Full ref name, e.g. refs/heads/main")
    latest_commit: str | None = Field(None, description="Hash of the newest commit on the ref")
    repository: Repository


class PullRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    from_ref: PullRequestRef = Field(..., description="Source side of the merge")
    to_ref: PullRequestRef = Field(..., description="Destination side of the merge")
    title: str = ""


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Username of the acting user")
    display_name: str | None = None


class PullRequestEvent(BaseModel):
    """
    A pull request lifecycle event delivered by the host.

    ``previous_from_hash`` carries the source ref hash from before a rescope and
    is only present on rescoped events.
    """

    model_config = ConfigDict(frozen=True)

    kind: PullRequestEventKind
    pull_request: PullRequest
    user: User
    previous_from_hash: str | None = None

    @model_validator(mode="after")
    def _previous_hash_only_on_rescope(self) -> "PullRequestEvent":
        if self.previous_from_hash is not None and self.kind != PullRequestEventKind.RESCOPED:
            raise ValueError(f"previous_from_hash is only valid on rescoped events, not '{self.kind.value}'")
        return self

    @classmethod
    def from_payload(cls, kind: PullRequestEventKind | str, payload: dict[str, Any]) -> "PullRequestEvent":
        """Build an event from a host JSON payload (``pullRequest``/``actor`` style keys)."""
        pr = payload.get("pullRequest") or {}

        def _ref(data: dict[str, Any]) -> dict[str, Any]:
            repo = data.get("repository") or {}
            return {
                "id": data.get("id") or "",
                "latest_commit": data.get("latestCommit"),
                "repository": {
                    "id": repo.get("id"),
                    "slug": repo.get("slug") or "",
                    "project_key": (repo.get("project") or {}).get("key") or "",
                },
            }

        actor = payload.get("actor") or {}
        return cls.model_validate(
            {
                "kind": PullRequestEventKind(kind),
                "pull_request": {
                    "id": pr.get("id"),
                    "title": pr.get("title") or "",
                    "from_ref": _ref(pr.get("fromRef") or {}),
                    "to_ref": _ref(pr.get("toRef") or {}),
                },
                "user": {"name": actor.get("name") or "", "display_name": actor.get("displayName")},
                "previous_from_hash": payload.get("previousFromHash"),
            }
        )

    @property
    def destination_repository(self) -> Repository:
        return self.pull_request.to_ref.repository


class RepositorySettings(BaseModel):
    """Per-repository webhook configuration. Absence means webhooks are disabled."""

    model_config = ConfigDict(frozen=True)

    notify_url: str = Field(..., description="Endpoint that receives the notification")
    ignore_committers: list[str] = Field(default_factory=list, description="Usernames that never trigger")
    ignore_branches: str | None = Field(None, description="Regex of source branches that never trigger")
    omit_hash: bool = Field(False, description="Leave the commit hash out of the payload")
    omit_branch_name: bool = Field(False, description="Leave the branch name out of the payload")


class NotificationRequest(BaseModel):
    """The minimal data handed to the notifier."""

    model_config = ConfigDict(frozen=True)

    repository: Repository
    branch_name: str
    commit_hash: str | None
