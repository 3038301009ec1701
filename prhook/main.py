import structlog

from prhook.core.config import Config, config
from prhook.core.utils.logging import configure_logging
from prhook.eligibility.registry import build_filter_chain
from prhook.events.dispatcher import EventDispatcher
from prhook.listeners.pull_request import PullRequestEventListener
from prhook.services.interfaces import PullRequestService, SettingsService
from prhook.services.notifier import HttpNotifier
from prhook.services.settings_store import StaticSettingsService
from prhook.tasks.task_queue import TaskQueue

logger = structlog.get_logger()


class Application:
    """
    Wires the listener, its collaborators and the host dispatcher together.

    The host supplies its pull request service and, optionally, its own
    settings lookup. Without one, settings come from ``SETTINGS_FILE``.
    """

    def __init__(
        self,
        pull_request_service: PullRequestService,
        settings_service: SettingsService | None = None,
        app_config: Config | None = None,
    ):
        self.config = app_config or config
        self.config.validate()

        if settings_service is None:
            if self.config.settings_file:
                settings_service = StaticSettingsService.from_yaml(self.config.settings_file)
            else:
                logger.warning("no_settings_source", detail="Webhooks are disabled for every repository")
                settings_service = StaticSettingsService()

        self.settings_service = settings_service
        self.task_queue = TaskQueue()
        self.notifier = HttpNotifier(self.settings_service, self.task_queue, self.config.notifier)
        self.filter_chain = build_filter_chain(self.config.filters.names, self.settings_service)
        self.listener = PullRequestEventListener(
            filter_chain=self.filter_chain,
            notifier=self.notifier,
            settings_service=self.settings_service,
            pull_request_service=pull_request_service,
        )
        self.dispatcher = EventDispatcher()
        self.listener.register(self.dispatcher)

    async def start(self) -> None:
        """Application startup logic."""
        configure_logging(self.config.logging)
        await self.task_queue.start_workers(num_workers=self.config.notifier.workers)
        logger.info("prhook_started", filters=self.config.filters.names)

    async def stop(self) -> None:
        """Application shutdown logic."""
        await self.task_queue.stop_workers()
        await self.notifier.close()
        logger.info("prhook_stopped")
