from prhook.listeners.pull_request import EventOutcome, ListenerResult, PullRequestEventListener
from prhook.listeners.rescope_guard import is_source_side_rescope, should_process_rescope

__all__ = [
    "EventOutcome",
    "ListenerResult",
    "PullRequestEventListener",
    "is_source_side_rescope",
    "should_process_rescope",
]
