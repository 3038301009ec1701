from dataclasses import dataclass
from enum import Enum

import structlog

from prhook.core.models import NotificationRequest, PullRequestEvent, PullRequestEventKind, PullRequestRef
from prhook.core.refs import branch_name_from_ref
from prhook.core.utils.logging import log_operation
from prhook.eligibility.base import EligibilityFilter
from prhook.eligibility.context import build_event_context
from prhook.events.dispatcher import EventDispatcher
from prhook.listeners.rescope_guard import should_process_rescope
from prhook.services.interfaces import Notifier, PullRequestService, SettingsService

logger = structlog.get_logger()


class EventOutcome(str, Enum):
    """
    Terminal state of one pull request event.

    - DISPATCHED: a notification request was handed to the notifier
    - DROPPED: duplicate rescope or repository without settings
    - SUPPRESSED: an eligibility filter denied the notification
    """

    DISPATCHED = "dispatched"
    DROPPED = "dropped"
    SUPPRESSED = "suppressed"


@dataclass
class ListenerResult:
    """Result of handling one event."""

    outcome: EventOutcome
    reason: str = ""
    request: NotificationRequest | None = None


class PullRequestEventListener:
    """
    Turns opened, reopened and rescoped pull request events into notification requests.

    Every collaborator is passed in; nothing is kept between events, so
    concurrent calls are safe. Collaborator errors propagate to the caller.
    """

    def __init__(
        self,
        filter_chain: EligibilityFilter,
        notifier: Notifier,
        settings_service: SettingsService,
        pull_request_service: PullRequestService,
    ):
        self.filter_chain = filter_chain
        self.notifier = notifier
        self.settings_service = settings_service
        self.pull_request_service = pull_request_service

    def register(self, dispatcher: EventDispatcher) -> None:
        """Bind one handler per event kind on the host dispatcher."""
        dispatcher.register_handler(PullRequestEventKind.OPENED, self.on_pull_request_opened)
        dispatcher.register_handler(PullRequestEventKind.REOPENED, self.on_pull_request_reopened)
        dispatcher.register_handler(PullRequestEventKind.RESCOPED, self.on_pull_request_rescoped)

    async def on_pull_request_opened(self, event: PullRequestEvent) -> ListenerResult:
        return await self.handle_event(event)

    async def on_pull_request_reopened(self, event: PullRequestEvent) -> ListenerResult:
        return await self.handle_event(event)

    async def on_pull_request_rescoped(self, event: PullRequestEvent) -> ListenerResult:
        """
        Handle a rescope, ignoring those caused only by the destination branch moving.

        For a source-side rescope the host is first asked whether the pull
        request can merge, which makes it update the destination repository's
        merge refs. The source commit is then re-read before dispatch.
        """
        pull_request = event.pull_request
        if not should_process_rescope(event):
            logger.debug(
                "rescope_destination_side_only",
                repo=event.destination_repository.full_name,
                pr_id=pull_request.id,
                commit=pull_request.from_ref.latest_commit,
            )
            return ListenerResult(outcome=EventOutcome.DROPPED, reason="Destination-side rescope")

        repository_id = pull_request.to_ref.repository.id
        async with log_operation("merge_refresh", repo_id=repository_id, pr_id=pull_request.id):
            await self.pull_request_service.can_merge(repository_id, pull_request.id)

        return await self.handle_event(event, refreshed=True)

    async def handle_event(self, event: PullRequestEvent, refreshed: bool = False) -> ListenerResult:
        """
        Common pipeline: settings gate, context, filter chain, dispatch.

        Args:
            event: The pull request event to handle.
            refreshed: Whether merge refs were just refreshed, in which case
                the source ref is re-read from the host before dispatch.
        """
        log = logger.bind(
            kind=event.kind.value,
            repo=event.destination_repository.full_name,
            pr_id=event.pull_request.id,
            user=event.user.name,
        )

        settings = await self.settings_service.get_settings(event.destination_repository)
        if settings is None:
            log.debug("repository_not_configured")
            return ListenerResult(outcome=EventOutcome.DROPPED, reason="Repository has no webhook settings")

        context = build_event_context(event)
        if not await self.filter_chain.evaluate(context):
            log.info("notification_suppressed")
            return ListenerResult(outcome=EventOutcome.SUPPRESSED, reason="Denied by eligibility filter")

        from_ref = await self._current_from_ref(event) if refreshed else event.pull_request.from_ref
        request = NotificationRequest(
            repository=context.repository,
            branch_name=branch_name_from_ref(from_ref.id),
            commit_hash=from_ref.latest_commit,
        )
        await self.notifier.dispatch(request)

        log.info("notification_requested", branch=request.branch_name, commit=request.commit_hash)
        return ListenerResult(outcome=EventOutcome.DISPATCHED, request=request)

    async def _current_from_ref(self, event: PullRequestEvent) -> PullRequestRef:
        pull_request = event.pull_request
        current = await self.pull_request_service.get_pull_request(pull_request.to_ref.repository.id, pull_request.id)
        if current is None:
            logger.warning(
                "pull_request_reread_missing",
                repo=event.destination_repository.full_name,
                pr_id=pull_request.id,
            )
            return pull_request.from_ref
        return current.from_ref
