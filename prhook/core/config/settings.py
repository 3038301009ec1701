"""
Main configuration class that composes all configs.
"""

import os

from dotenv import load_dotenv

from prhook.core.config.filter_config import FilterConfig
from prhook.core.config.logging_config import LoggingConfig
from prhook.core.config.notifier_config import NotifierConfig
from prhook.core.errors import ConfigurationError

# Load environment variables from a .env file
load_dotenv()

DEFAULT_FILTERS = "ignore_committers,ignore_branches"


class Config:
    """Main configuration class."""

    def __init__(self) -> None:
        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "console"),
        )

        self.notifier = NotifierConfig(
            timeout=float(os.getenv("NOTIFIER_TIMEOUT", "10")),
            workers=int(os.getenv("NOTIFIER_WORKERS", "3")),
            user_agent=os.getenv("NOTIFIER_USER_AGENT", "prhook/0.1.0"),
        )

        filter_names = os.getenv("ELIGIBILITY_FILTERS", DEFAULT_FILTERS)
        self.filters = FilterConfig(
            names=[name.strip() for name in filter_names.split(",") if name.strip()],
        )

        # Optional YAML file with per-repository settings
        self.settings_file = os.getenv("SETTINGS_FILE")

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        if self.notifier.timeout <= 0:
            errors.append("NOTIFIER_TIMEOUT must be positive")

        if self.notifier.workers <= 0:
            errors.append("NOTIFIER_WORKERS must be positive")

        if self.logging.format not in ("console", "json"):
            errors.append("LOG_FORMAT must be 'console' or 'json'")

        if errors:
            raise ConfigurationError(f"Configuration errors: {', '.join(errors)}")

        return True


# Global config instance
config = Config()
