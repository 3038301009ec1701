from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from prhook.core.models import PullRequestEvent, PullRequestEventKind

logger = structlog.get_logger()

EventHandler = Callable[[PullRequestEvent], Awaitable[Any]]


class EventDispatcher:
    """
    Dispatches host pull request events to registered handlers.

    This is the host side of the listener boundary: a handler that raises is
    logged and reported, and the next event is still dispatched.
    """

    def __init__(self):
        self._handlers: dict[PullRequestEventKind, EventHandler] = {}

    def register_handler(self, kind: PullRequestEventKind, handler: EventHandler):
        """
        Registers a handler for a specific event kind.

        Args:
            kind: The PullRequestEventKind to handle (e.g., PullRequestEventKind.OPENED).
            handler: An async callable taking the event.
        """
        if kind in self._handlers:
            logger.warning("handler_overridden", kind=kind.value)
        self._handlers[kind] = handler
        logger.info("handler_registered", kind=kind.value, handler=getattr(handler, "__qualname__", repr(handler)))

    def get_handler(self, kind: PullRequestEventKind) -> EventHandler | None:
        return self._handlers.get(kind)

    async def dispatch(self, event: PullRequestEvent) -> dict[str, Any]:
        """
        Looks up and awaits the handler registered for the event's kind.

        Args:
            event: The PullRequestEvent to be dispatched.

        Returns:
            A dictionary containing the result from the handler.
        """
        handler = self._handlers.get(event.kind)

        if not handler:
            logger.warning("no_handler_registered", kind=event.kind.value)
            return {"status": "skipped", "reason": f"No handler for event kind {event.kind.name}"}

        try:
            result = await handler(event)
            return {"status": "processed", "result": result}
        except Exception as e:
            logger.error("handler_failed", kind=event.kind.value, error=str(e), exc_info=True)
            return {"status": "error", "reason": str(e)}
