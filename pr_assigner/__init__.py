"""PR Reviewer Assigner - requests pull request reviewers and posts chat notifications."""

from .models import (
    EventKind,
    Notification,
    NotificationKind,
    PullRequest,
    ReconcileResult,
    ReviewEvent,
    User,
)
from .user_directory import UserDirectory
from .api_client import GitHubAPIClient
from .notifier import ChatNotifier
from .reconciler import ReviewerReconciler, REQUIRED_REVIEWERS
from .config import Config, ConfigError
from .assigner import ReviewerAssigner

__all__ = [
    'EventKind',
    'Notification',
    'NotificationKind',
    'PullRequest',
    'ReconcileResult',
    'ReviewEvent',
    'User',
    'UserDirectory',
    'GitHubAPIClient',
    'ChatNotifier',
    'ReviewerReconciler',
    'REQUIRED_REVIEWERS',
    'Config',
    'ConfigError',
    'ReviewerAssigner',
]
