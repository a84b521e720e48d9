"""Reviewer selection and reconciliation policy."""

import logging
import random
from typing import Iterable, List

from .message_templates import format_pr, get_message_templates, join_mentions
from .models import (
    EventKind,
    Notification,
    NotificationKind,
    PullRequest,
    ReconcileResult,
    ReviewEvent,
)
from .user_directory import UserDirectory

# Minimum number of requested reviewers a pull request should have
REQUIRED_REVIEWERS = 2


class ReviewerReconciler:
    """Computes which reviewers to add so a PR reaches the reviewer target.

    Selection among eligible candidates is uniformly random; everything else
    is a pure function of the event, the pull request and the directory.
    """

    def __init__(self, rng: random.Random = None, language: str = 'english',
                 required_reviewers: int = REQUIRED_REVIEWERS):
        """Initialize the reconciler.

        Args:
            rng: Random source used for candidate selection
            language: Language for notification messages
            required_reviewers: Minimum number of requested reviewers
        """
        self.rng = rng or random.Random()
        self.language = language
        self.required_reviewers = required_reviewers

    def candidates(self, event: ReviewEvent, pr: PullRequest, directory: UserDirectory) -> List[str]:
        """Return the sorted handles eligible for selection.

        Excludes the author, anyone already requested and, on removal
        events, the reviewers that were just removed.
        """
        excluded = {pr.author} | set(pr.requested_reviewers)
        if event.kind is EventKind.REVIEW_REQUEST_REMOVED:
            excluded |= set(event.removed)
        return [handle for handle in directory.assignable_handles() if handle not in excluded]

    def needed(self, event: ReviewEvent, pr: PullRequest) -> int:
        """Return how many reviewers are missing from the target."""
        current = set(pr.requested_reviewers) - set(event.removed)
        return max(0, self.required_reviewers - len(current))

    def select(self, candidates: List[str], count: int) -> List[str]:
        """Draw up to ``count`` distinct candidates uniformly at random."""
        return self.rng.sample(candidates, min(count, len(candidates)))

    def reconcile(self, event: ReviewEvent, pr: PullRequest, directory: UserDirectory) -> ReconcileResult:
        """Compute the reviewers to add and the notification to post.

        Args:
            event: The triggering event
            pr: Current pull request state
            directory: User directory for this run

        Returns:
            ReconcileResult with the handles to request and an optional
            notification
        """
        if event.kind is EventKind.OTHER:
            logging.info(f"Event does not affect reviewers of PR #{pr.number}, nothing to do")
            return ReconcileResult()

        # Team removals carry no user handle
        if event.kind is EventKind.REVIEW_REQUEST_REMOVED and not event.removed:
            logging.info(f"No removed user reviewers for PR #{pr.number}, nothing to do")
            return ReconcileResult()

        if event.kind is EventKind.OPENED and pr.draft:
            logging.info(f"PR #{pr.number} was opened as a draft, skipping reviewer assignment")
            return ReconcileResult()

        needed = self.needed(event, pr)
        if needed == 0:
            logging.info(f"PR #{pr.number} already has enough reviewers")
            return ReconcileResult()

        candidates = self.candidates(event, pr, directory)
        if not candidates:
            logging.warning(f"No eligible reviewers for PR #{pr.number} ({needed} needed)")
            return ReconcileResult(notification=self._no_candidates_message(pr, needed))

        selected = self.select(candidates, needed)
        if len(selected) < needed:
            logging.warning(
                f"Only {len(selected)} of {needed} needed reviewer(s) available for PR #{pr.number}"
            )
        logging.info(f"Selected reviewer(s) for PR #{pr.number}: {', '.join(sorted(selected))}")

        return ReconcileResult(
            to_add=frozenset(selected),
            notification=self._assignment_message(event, pr, directory, selected),
        )

    def _mentions(self, handles: Iterable[str], directory: UserDirectory, templates: dict) -> str:
        return join_mentions((directory.mention(h) for h in sorted(handles)), templates['conjunction'])

    def _assignment_message(self, event: ReviewEvent, pr: PullRequest, directory: UserDirectory,
                            selected: List[str]) -> Notification:
        templates = get_message_templates(self.language)
        mentions = self._mentions(selected, directory, templates)

        if event.kind is EventKind.REVIEW_REQUEST_REMOVED and event.removed:
            text = templates['replaced'].format(
                removed=self._mentions(event.removed, directory, templates),
                mentions=mentions,
                pr=format_pr(pr, templates),
            )
            return Notification(NotificationKind.REPLACED, text)

        text = templates['assigned'].format(mentions=mentions, pr=format_pr(pr, templates))
        return Notification(NotificationKind.ASSIGNED, text)

    def _no_candidates_message(self, pr: PullRequest, needed: int) -> Notification:
        templates = get_message_templates(self.language)
        text = templates['no_candidates'].format(pr=format_pr(pr, templates), needed=needed)
        return Notification(NotificationKind.NO_CANDIDATES, text)
