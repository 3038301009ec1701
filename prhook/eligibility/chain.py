from collections.abc import Iterable

import structlog

from prhook.eligibility.base import EligibilityFilter
from prhook.eligibility.context import EventContext

logger = structlog.get_logger()


class EligibilityFilterChain(EligibilityFilter):
    """
    Allows a notification only if every filter in it allows.

    Filters run in order and evaluation stops at the first deny. An empty
    chain allows everything. The chain is itself a filter, so chains nest.
    """

    name = "chain"
    description = "Allows only when every chained filter allows"

    def __init__(self, filters: Iterable[EligibilityFilter] = ()):
        self._filters: tuple[EligibilityFilter, ...] = tuple(filters)

    @property
    def filters(self) -> tuple[EligibilityFilter, ...]:
        return self._filters

    def __len__(self) -> int:
        return len(self._filters)

    async def evaluate(self, context: EventContext) -> bool:
        for eligibility_filter in self._filters:
            if not await eligibility_filter.evaluate(context):
                logger.debug(
                    "eligibility_denied",
                    filter=eligibility_filter.name or eligibility_filter.__class__.__name__,
                    repo=context.repository.full_name,
                    pr_id=context.event.pull_request.id,
                )
                return False
        return True
