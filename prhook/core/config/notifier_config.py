"""
Notifier configuration.
"""

from dataclasses import dataclass


@dataclass
class NotifierConfig:
    """Outbound notification delivery configuration."""

    timeout: float = 10.0
    workers: int = 3
    user_agent: str = "prhook/0.1.0"
