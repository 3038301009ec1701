"""
Registry for eligibility filters.

Maps the filter names used in configuration to their classes so the filter
chain can be assembled without the listener knowing any concrete filter.
"""

from collections.abc import Iterable

import structlog

from prhook.core.errors import UnknownFilterError
from prhook.eligibility.base import EligibilityFilter
from prhook.eligibility.chain import EligibilityFilterChain
from prhook.eligibility.filters import IgnoreBranchesFilter, IgnoreCommittersFilter
from prhook.services.interfaces import SettingsService

logger = structlog.get_logger()

FILTER_REGISTRY: dict[str, type[EligibilityFilter]] = {
    IgnoreCommittersFilter.name: IgnoreCommittersFilter,
    IgnoreBranchesFilter.name: IgnoreBranchesFilter,
}


def register_filter(filter_class: type[EligibilityFilter]) -> type[EligibilityFilter]:
    """
    Register a filter class under its ``name``. Usable as a class decorator.

    Registered classes are constructed with the settings service as their only argument.
    """
    if not filter_class.name:
        raise ValueError(f"{filter_class.__name__} must define a name to be registered")
    if filter_class.name in FILTER_REGISTRY:
        logger.warning("filter_overridden", name=filter_class.name)
    FILTER_REGISTRY[filter_class.name] = filter_class
    return filter_class


def build_filter_chain(names: Iterable[str], settings_service: SettingsService) -> EligibilityFilterChain:
    """
    Instantiate the named filters, in order, and chain them.

    Args:
        names: Registered filter names, evaluated in the given order.
        settings_service: Passed to every filter for its settings lookups.

    Raises:
        UnknownFilterError: If a name is not registered.
    """
    filters: list[EligibilityFilter] = []
    for name in names:
        filter_class = FILTER_REGISTRY.get(name)
        if filter_class is None:
            raise UnknownFilterError(name, sorted(FILTER_REGISTRY))
        filters.append(filter_class(settings_service))

    logger.info("filter_chain_built", filters=[f.name for f in filters])
    return EligibilityFilterChain(filters)
