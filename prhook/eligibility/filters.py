"""Eligibility filters driven by repository settings.

Each filter looks the destination repository's settings up on its own and
allows the notification when the relevant setting is empty.
"""

import re

import structlog

from prhook.core.refs import branch_name_from_ref
from prhook.eligibility.base import EligibilityFilter
from prhook.eligibility.context import EventContext
from prhook.services.interfaces import SettingsService

logger = structlog.get_logger()


class IgnoreCommittersFilter(EligibilityFilter):
    """Denies events caused by users listed in the repository's ignore_committers."""

    name = "ignore_committers"
    description = "Skips notifications for events triggered by ignored users"

    def __init__(self, settings_service: SettingsService):
        self.settings_service = settings_service

    async def evaluate(self, context: EventContext) -> bool:
        settings = await self.settings_service.get_settings(context.repository)
        if settings is None or not settings.ignore_committers:
            return True

        if context.username in settings.ignore_committers:
            logger.info(
                "committer_ignored",
                repo=context.repository.full_name,
                username=context.username,
            )
            return False
        return True


class IgnoreBranchesFilter(EligibilityFilter):
    """Denies events whose source branch matches the repository's ignore_branches pattern."""

    name = "ignore_branches"
    description = "Skips notifications for source branches matching a pattern"

    def __init__(self, settings_service: SettingsService):
        self.settings_service = settings_service

    async def evaluate(self, context: EventContext) -> bool:
        settings = await self.settings_service.get_settings(context.repository)
        if settings is None or not settings.ignore_branches:
            return True

        branch = branch_name_from_ref(context.event.pull_request.from_ref.id)
        pattern = settings.ignore_branches
        try:
            matches = re.fullmatch(pattern, branch) is not None
        except re.error as e:
            logger.error(
                "invalid_ignore_branches_pattern",
                repo=context.repository.full_name,
                pattern=pattern,
                error=str(e),
            )
            return True  # Allow if pattern is invalid

        if matches:
            logger.info(
                "branch_ignored",
                repo=context.repository.full_name,
                branch=branch,
                pattern=pattern,
            )
            return False
        return True
