"""
Static repository settings lookup.

Serves settings from an in-memory mapping keyed by ``PROJECT/slug``, optionally
loaded from a YAML file of the form::

    repositories:
      PROJ/repo:
        notify_url: https://ci.example.com/hooks/pr
        ignore_committers: [release-bot]
        ignore_branches: "^dependabot/.*"
"""

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from prhook.core.errors import SettingsLoadError
from prhook.core.models import Repository, RepositorySettings
from prhook.services.interfaces import SettingsService

logger = structlog.get_logger()


class StaticSettingsService(SettingsService):
    """Settings lookup backed by a fixed mapping of repository full names."""

    def __init__(self, settings: dict[str, RepositorySettings] | None = None):
        self._settings: dict[str, RepositorySettings] = dict(settings or {})

    async def get_settings(self, repository: Repository) -> RepositorySettings | None:
        return self._settings.get(repository.full_name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StaticSettingsService":
        repositories = data.get("repositories") or {}
        if not isinstance(repositories, dict):
            raise SettingsLoadError("'repositories' must be a mapping of PROJECT/slug to settings")

        settings: dict[str, RepositorySettings] = {}
        for full_name, repo_data in repositories.items():
            try:
                settings[full_name] = RepositorySettings.model_validate(repo_data or {})
            except ValidationError as e:
                raise SettingsLoadError(f"Invalid settings for repository '{full_name}': {e}") from e
        return cls(settings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "StaticSettingsService":
        """Load settings from a YAML file."""
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise SettingsLoadError(f"Cannot read settings file {path}: {e}") from e

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise SettingsLoadError(f"Invalid YAML in settings file {path}: {e}") from e

        if not isinstance(data, dict):
            raise SettingsLoadError(f"Settings file {path} must contain a mapping")

        service = cls.from_dict(data)
        logger.info("settings_loaded", path=str(path), repositories=len(service._settings))
        return service
