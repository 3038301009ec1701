from prhook.services.interfaces import Notifier, PullRequestService, SettingsService
from prhook.services.notifier import HttpNotifier
from prhook.services.settings_store import StaticSettingsService

__all__ = [
    "Notifier",
    "PullRequestService",
    "SettingsService",
    "HttpNotifier",
    "StaticSettingsService",
]
