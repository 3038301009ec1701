from abc import ABC, abstractmethod

from prhook.core.models import NotificationRequest, PullRequest, Repository, RepositorySettings


class SettingsService(ABC):
    """
    Abstract interface for looking up per-repository webhook settings.

    This interface allows us to swap out different settings sources
    (host plugin storage, YAML files, etc.) without changing the listener.
    """

    @abstractmethod
    async def get_settings(self, repository: Repository) -> RepositorySettings | None:
        """
        Fetch the settings for a repository.

        Args:
            repository: The repository whose settings are requested

        Returns:
            The settings, or None when webhooks are disabled for the repository
        """
        pass


class PullRequestService(ABC):
    """Host pull request API used to refresh merge refs and re-read pull requests."""

    @abstractmethod
    async def can_merge(self, repository_id: int, pull_request_id: int) -> None:
        """
        Ask the host whether the pull request can merge.

        The answer is ignored; the call makes the host update its merge refs
        for the destination repository.
        """
        pass

    @abstractmethod
    async def get_pull_request(self, repository_id: int, pull_request_id: int) -> PullRequest | None:
        """Fetch the current state of a pull request, or None if it no longer exists."""
        pass


class Notifier(ABC):
    """Delivers notification requests outside of the event handling path."""

    @abstractmethod
    async def dispatch(self, request: NotificationRequest) -> None:
        """
        Hand a request off for delivery.

        Implementations must return without waiting for the delivery outcome.
        """
        pass
