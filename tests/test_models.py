"""
Unit tests for data models
"""

import pytest
from pr_assigner.models import EventKind, PullRequest, ReconcileResult, ReviewEvent, User


class TestEventKind:
    """Test cases for mapping event actions."""

    @pytest.mark.parametrize('action, kind', [
        ('opened', EventKind.OPENED),
        ('ready_for_review', EventKind.READY_FOR_REVIEW),
        ('review_request_removed', EventKind.REVIEW_REQUEST_REMOVED),
        (' Opened ', EventKind.OPENED),
        ('synchronize', EventKind.OTHER),
        ('', EventKind.OTHER),
        (None, EventKind.OTHER),
    ])
    def test_from_action(self, action, kind):
        assert EventKind.from_action(action) is kind


class TestModelDefaults:
    """Test cases for model defaults."""

    def test_user_defaults(self):
        user = User('alice')
        assert user.assignable is True
        assert user.notify_enabled is True
        assert user.chat_id is None

    def test_pull_request_defaults(self):
        pr = PullRequest(number=1, author='alice')
        assert pr.draft is False
        assert pr.requested_reviewers == frozenset()

    def test_review_event_defaults(self):
        assert ReviewEvent(EventKind.OPENED).removed == frozenset()

    def test_reconcile_result_defaults(self):
        result = ReconcileResult()
        assert result.to_add == frozenset()
        assert result.notification is None

    def test_models_are_immutable(self):
        """Test that request-scoped models cannot be mutated in place."""
        pr = PullRequest(number=1, author='alice')
        with pytest.raises(AttributeError):
            pr.draft = True


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
