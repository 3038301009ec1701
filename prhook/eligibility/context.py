from pydantic import BaseModel, ConfigDict

from prhook.core.models import PullRequestEvent, Repository


class EventContext(BaseModel):
    """
    Canonical view of a pull request event handed to eligibility filters.

    Built once per event after the settings gate has passed and discarded
    after the dispatch decision.
    """

    model_config = ConfigDict(frozen=True)

    event: PullRequestEvent
    repository: Repository
    username: str


def build_event_context(event: PullRequestEvent) -> EventContext:
    """Extract the destination repository and acting username from an event."""
    return EventContext(
        event=event,
        repository=event.destination_repository,
        username=event.user.name,
    )
