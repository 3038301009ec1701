"""
Eligibility filter configuration.
"""

from dataclasses import dataclass, field


@dataclass
class FilterConfig:
    """Names of the eligibility filters to chain, in evaluation order."""

    names: list[str] = field(default_factory=list)
