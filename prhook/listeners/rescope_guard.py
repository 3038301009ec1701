"""
Rescope deduplication.

The host raises a rescope event when either side of a pull request moves.
Only a move of the source side should notify again; a rescope caused by the
destination branch advancing leaves the source hash unchanged.
"""

from prhook.core.models import PullRequestEvent


def is_source_side_rescope(previous_hash: str | None, current_hash: str | None) -> bool:
    """
    True when the source ref moved during the rescope.

    A missing or empty hash on either side counts as moved.
    """
    if not previous_hash or not current_hash:
        return True
    return previous_hash != current_hash


def should_process_rescope(event: PullRequestEvent) -> bool:
    """Apply :func:`is_source_side_rescope` to a rescoped event."""
    return is_source_side_rescope(event.previous_from_hash, event.pull_request.from_ref.latest_commit)
