"""Eligibility filters deciding whether a pull request event still produces a notification."""

from prhook.eligibility.base import EligibilityFilter
from prhook.eligibility.chain import EligibilityFilterChain
from prhook.eligibility.context import EventContext, build_event_context
from prhook.eligibility.filters import IgnoreBranchesFilter, IgnoreCommittersFilter
from prhook.eligibility.registry import build_filter_chain, register_filter

__all__ = [
    "EligibilityFilter",
    "EligibilityFilterChain",
    "EventContext",
    "build_event_context",
    "IgnoreBranchesFilter",
    "IgnoreCommittersFilter",
    "build_filter_chain",
    "register_filter",
]
