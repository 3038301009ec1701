"""
Shared fixtures: stub collaborators for the listener and filters.
"""

from unittest.mock import AsyncMock

import pytest

from prhook.core.models import RepositorySettings
from prhook.services.interfaces import Notifier, PullRequestService, SettingsService


@pytest.fixture
def settings() -> RepositorySettings:
    return RepositorySettings(notify_url="https://ci.example.com/hooks/pr")


@pytest.fixture
def settings_service(settings: RepositorySettings) -> AsyncMock:
    service = AsyncMock(spec=SettingsService)
    service.get_settings.return_value = settings
    return service


@pytest.fixture
def pull_request_service() -> AsyncMock:
    service = AsyncMock(spec=PullRequestService)
    service.get_pull_request.return_value = None
    return service


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock(spec=Notifier)
