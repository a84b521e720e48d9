"""Data models for reviewer assignment."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional


class EventKind(Enum):
    """Pull request event kinds that drive reviewer reconciliation."""
    OPENED = 'opened'
    READY_FOR_REVIEW = 'ready_for_review'
    REVIEW_REQUEST_REMOVED = 'review_request_removed'
    OTHER = 'other'

    @classmethod
    def from_action(cls, action: str) -> 'EventKind':
        """Map a GitHub ``pull_request`` event action to an EventKind."""
        try:
            return cls((action or '').strip().lower())
        except ValueError:
            return cls.OTHER


class NotificationKind(Enum):
    ASSIGNED = 'assigned'
    REPLACED = 'replaced'
    NO_CANDIDATES = 'no_candidates'


@dataclass(frozen=True)
class User:
    """A directory entry for a single handle."""
    handle: str
    assignable: bool = True
    notify_enabled: bool = True
    chat_id: Optional[str] = None


@dataclass(frozen=True)
class PullRequest:
    """Read-only view of the pull request fields the assigner needs."""
    number: int
    author: str
    draft: bool = False
    requested_reviewers: FrozenSet[str] = frozenset()
    title: str = ''
    url: str = ''


@dataclass(frozen=True)
class ReviewEvent:
    """The triggering event; ``removed`` is only set for removal events."""
    kind: EventKind
    removed: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    text: str


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of a reconciliation: handles to request and the message to post."""
    to_add: FrozenSet[str] = field(default_factory=frozenset)
    notification: Optional[Notification] = None
