from typing import Any

import httpx
import structlog

from prhook.core.config.notifier_config import NotifierConfig
from prhook.core.models import NotificationRequest, RepositorySettings
from prhook.services.interfaces import Notifier, SettingsService
from prhook.tasks.task_queue import TaskQueue

logger = structlog.get_logger()


def build_payload(request: NotificationRequest, settings: RepositorySettings) -> dict[str, Any]:
    """JSON body sent to the repository's notify_url."""
    repository = request.repository
    payload: dict[str, Any] = {
        "repository": {
            "id": repository.id,
            "slug": repository.slug,
            "project": repository.project_key,
        },
    }
    if not settings.omit_branch_name:
        payload["branch"] = request.branch_name
    if not settings.omit_hash and request.commit_hash:
        payload["commit"] = request.commit_hash
    return payload


class HttpNotifier(Notifier):
    """
    Posts notification requests to the repository's configured endpoint.

    ``dispatch`` only enqueues; delivery runs on a TaskQueue worker and its
    outcome is logged there. There is no retry.
    """

    def __init__(
        self,
        settings_service: SettingsService,
        queue: TaskQueue,
        notifier_config: NotifierConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.settings_service = settings_service
        self.queue = queue
        self.config = notifier_config or NotifierConfig()
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers={"User-Agent": self.config.user_agent},
            )
        return self._client

    async def dispatch(self, request: NotificationRequest) -> None:
        enqueued = await self.queue.enqueue(self.deliver, f"notify:{request.repository.full_name}", request)
        if not enqueued:
            logger.warning("notification_dropped", repo=request.repository.full_name, branch=request.branch_name)

    async def deliver(self, request: NotificationRequest) -> bool:
        """
        Send one notification.

        Returns True on a 2xx response. Transport errors and error responses
        are logged and reported as False.
        """
        log = logger.bind(repo=request.repository.full_name, branch=request.branch_name, commit=request.commit_hash)

        settings = await self.settings_service.get_settings(request.repository)
        if settings is None:
            log.info("notification_skipped_no_settings")
            return False

        payload = build_payload(request, settings)
        try:
            response = await self._get_client().post(settings.notify_url, json=payload)
        except httpx.HTTPError as e:
            log.error("notification_failed", url=settings.notify_url, error=str(e))
            return False

        if response.is_success:
            log.info("notification_sent", url=settings.notify_url, status_code=response.status_code)
            return True

        log.error(
            "notification_rejected",
            url=settings.notify_url,
            status_code=response.status_code,
            response=response.text[:500],
        )
        return False

    async def close(self) -> None:
        """Closes the httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
