"""Runs one reviewer assignment pass for a pull request event."""

import logging
import random

from .api_client import GitHubAPIClient
from .config import Config
from .models import ReconcileResult
from .notifier import ChatNotifier
from .reconciler import ReviewerReconciler
from .user_directory import UserDirectory


class ReviewerAssigner:
    """Fetches inputs, reconciles reviewers, and applies the result."""

    def __init__(
        self,
        config: Config,
        api_client: GitHubAPIClient = None,
        notifier: ChatNotifier = None,
        reconciler: ReviewerReconciler = None,
        rng: random.Random = None
    ):
        """Initialize the assigner.

        Args:
            config: Run configuration
            api_client: GitHub client; built from the config if omitted
            notifier: Chat notifier; built from the config if omitted
            reconciler: Reviewer reconciler; built from the config if omitted
            rng: Random source for the default reconciler
        """
        self.config = config
        self.api_client = api_client or GitHubAPIClient(config.token, config.api_url, config.http_timeout)
        self.notifier = notifier or ChatNotifier(config.webhook_url, timeout=config.http_timeout)
        self.reconciler = reconciler or ReviewerReconciler(rng=rng, language=config.message_language)

        logging.info(
            f"Initialized assigner for {config.repository}#{config.pr_number} "
            f"(event: {config.event_kind.value})"
        )

    def load_directory(self) -> UserDirectory:
        # Plain session: the GitHub token must not leak to the directory host
        return UserDirectory.fetch(self.config.directory_url, timeout=self.config.http_timeout)

    def run(self) -> ReconcileResult:
        """Run reconciliation and apply it.

        Returns:
            The ReconcileResult that was applied

        Raises:
            requests.RequestException: If reading the pull request or adding
                reviewers fails
        """
        config = self.config
        directory = self.load_directory()

        pr = self.api_client.get_pull_request(config.repo_owner, config.repo_name, config.pr_number)
        logging.info(
            f"PR #{pr.number} by {pr.author} (draft: {pr.draft}), "
            f"requested reviewers: {', '.join(sorted(pr.requested_reviewers)) or 'none'}"
        )

        result = self.reconciler.reconcile(config.event, pr, directory)

        if config.dry_run:
            logging.info(f"Dry run: would request {sorted(result.to_add)}")
            if result.notification:
                logging.info(f"Dry run: would send notification: {result.notification.text}")
            return result

        if result.to_add:
            self.api_client.add_reviewers(config.repo_owner, config.repo_name, pr.number, result.to_add)

        if result.notification:
            self.notifier.send(result.notification.text)

        return result
