"""Base eligibility filter interface.

This module defines the abstract base class that all eligibility filters must implement.
"""

from abc import ABC, abstractmethod

from prhook.eligibility.context import EventContext


class EligibilityFilter(ABC):
    """Abstract base class for all eligibility filters.

    A filter decides whether a pull request event that passed the settings
    gate should still produce a notification. Filters keep their reasons to
    themselves; the caller only sees allow or deny.

    Attributes:
        name: Unique identifier used to register the filter in configuration.
        description: Human-readable description of what the filter checks.
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    async def evaluate(self, context: EventContext) -> bool:
        """Evaluate the filter against an event context.

        Args:
            context: The event context to evaluate.

        Returns:
            True to allow the notification, False to deny it.
        """
        pass
