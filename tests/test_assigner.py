"""
Unit tests for ReviewerAssigner
"""

import random

import pytest
import requests
from unittest.mock import Mock, patch
from pr_assigner.assigner import ReviewerAssigner
from pr_assigner.config import Config
from pr_assigner.models import EventKind, NotificationKind, PullRequest
from pr_assigner.user_directory import UserDirectory


def make_config(**overrides):
    values = {
        'repo_owner': 'test',
        'repo_name': 'repo',
        'pr_number': 7,
        'event_kind': EventKind.OPENED,
        'directory_url': 'https://example.com/users.yml',
        'webhook_url': 'https://hooks.slack.com/services/T/B/X',
        'token': 'test_token',
    }
    values.update(overrides)
    return Config(**values)


class TestReviewerAssigner:
    """Test cases for one assignment run."""

    @pytest.fixture
    def api_client(self):
        client = Mock()
        client.get_pull_request.return_value = PullRequest(
            number=7, author='a', draft=False, requested_reviewers=frozenset(), title='Add feature'
        )
        return client

    @pytest.fixture
    def notifier(self):
        return Mock()

    @pytest.fixture
    def directory(self):
        return UserDirectory.from_mapping({'a': {}, 'b': {}, 'c': {'assignable': False}})

    def make_assigner(self, api_client, notifier, directory, **config_overrides):
        assigner = ReviewerAssigner(
            make_config(**config_overrides),
            api_client=api_client,
            notifier=notifier,
            rng=random.Random(1)
        )
        assigner.load_directory = Mock(return_value=directory)
        return assigner

    def test_run_adds_reviewers_and_notifies(self, api_client, notifier, directory):
        """Test a full run that assigns the only eligible reviewer."""
        assigner = self.make_assigner(api_client, notifier, directory)

        result = assigner.run()

        assert result.to_add == frozenset({'b'})
        api_client.get_pull_request.assert_called_once_with('test', 'repo', 7)
        api_client.add_reviewers.assert_called_once_with('test', 'repo', 7, frozenset({'b'}))
        notifier.send.assert_called_once_with(result.notification.text)

    def test_run_without_candidates_only_notifies(self, api_client, notifier):
        """Test that an empty directory posts a warning and requests nobody."""
        assigner = self.make_assigner(api_client, notifier, UserDirectory())

        result = assigner.run()

        assert result.notification.kind is NotificationKind.NO_CANDIDATES
        api_client.add_reviewers.assert_not_called()
        notifier.send.assert_called_once()

    def test_run_noop_when_satisfied(self, api_client, notifier, directory):
        """Test that nothing is written or sent when the PR has two reviewers."""
        api_client.get_pull_request.return_value = PullRequest(
            number=7, author='a', requested_reviewers=frozenset({'x', 'y'})
        )
        assigner = self.make_assigner(api_client, notifier, directory)

        result = assigner.run()

        assert result.to_add == frozenset()
        api_client.add_reviewers.assert_not_called()
        notifier.send.assert_not_called()

    def test_add_reviewers_failure_propagates(self, api_client, notifier, directory):
        """Test that a failed write fails the run before notifying."""
        api_client.add_reviewers.side_effect = requests.exceptions.HTTPError("422 Unprocessable")
        assigner = self.make_assigner(api_client, notifier, directory)

        with pytest.raises(requests.exceptions.HTTPError):
            assigner.run()
        notifier.send.assert_not_called()

    def test_get_pull_request_failure_propagates(self, api_client, notifier, directory):
        api_client.get_pull_request.side_effect = requests.exceptions.ConnectionError("Network error")
        assigner = self.make_assigner(api_client, notifier, directory)

        with pytest.raises(requests.exceptions.ConnectionError):
            assigner.run()

    def test_dry_run_skips_side_effects(self, api_client, notifier, directory):
        """Test that a dry run computes the result without writing or notifying."""
        assigner = self.make_assigner(api_client, notifier, directory, dry_run=True)

        result = assigner.run()

        assert result.to_add == frozenset({'b'})
        api_client.add_reviewers.assert_not_called()
        notifier.send.assert_not_called()

    def test_removal_event_from_config(self, api_client, notifier):
        """Test that removed reviewers from the config reach the reconciler."""
        api_client.get_pull_request.return_value = PullRequest(
            number=7, author='a', requested_reviewers=frozenset({'c'})
        )
        directory = UserDirectory.from_mapping({'a': {}, 'b': {}, 'c': {}, 'd': {}})
        assigner = self.make_assigner(
            api_client, notifier, directory,
            event_kind=EventKind.REVIEW_REQUEST_REMOVED,
            removed_reviewers=frozenset({'b'})
        )

        result = assigner.run()

        assert result.to_add == frozenset({'d'})
        assert result.notification.kind is NotificationKind.REPLACED

    def test_load_directory_uses_config(self, api_client, notifier):
        """Test that the directory is fetched from the configured URL."""
        assigner = ReviewerAssigner(make_config(http_timeout=5), api_client=api_client, notifier=notifier)
        with patch('pr_assigner.assigner.UserDirectory.fetch', return_value=UserDirectory()) as mock_fetch:
            assigner.load_directory()

        mock_fetch.assert_called_once_with('https://example.com/users.yml', timeout=5)

    def test_default_collaborators_from_config(self):
        """Test building the client and notifier from the config."""
        assigner = ReviewerAssigner(make_config(message_language='german', http_timeout=5))

        assert assigner.api_client.token == 'test_token'
        assert assigner.api_client.timeout == 5
        assert assigner.notifier.webhook_url == 'https://hooks.slack.com/services/T/B/X'
        assert assigner.reconciler.language == 'german'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
