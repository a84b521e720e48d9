"""
Run configuration.

All settings come from the process environment (optionally populated from a
.env file by the entry script). Values missing from the environment are
filled in from the CI runner's event payload at GITHUB_EVENT_PATH.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping, Optional

from .api_client import DEFAULT_API_URL
from .message_templates import SUPPORTED_LANGUAGES
from .models import EventKind, ReviewEvent

DEFAULT_HTTP_TIMEOUT = 30.0


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class Config:
    repo_owner: str
    repo_name: str
    pr_number: int
    event_kind: EventKind
    removed_reviewers: FrozenSet[str] = frozenset()
    directory_url: Optional[str] = None
    webhook_url: Optional[str] = None
    token: Optional[str] = field(default=None, repr=False)
    api_url: str = DEFAULT_API_URL
    message_language: str = 'english'
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    dry_run: bool = False

    @property
    def repository(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

    @property
    def event(self) -> ReviewEvent:
        removed = self.removed_reviewers if self.event_kind is EventKind.REVIEW_REQUEST_REMOVED else frozenset()
        return ReviewEvent(self.event_kind, removed)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> 'Config':
        """Build the configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            The validated Config

        Raises:
            ConfigError: If the repository, PR number or event action is
                missing or malformed
        """
        env = os.environ if environ is None else environ
        payload = load_event_payload(env.get('GITHUB_EVENT_PATH'))

        repo_owner, repo_name = _parse_repository(env, payload)
        pr_number = _parse_pr_number(env, payload)

        action = _get(env, 'EVENT_ACTION') or payload.get('action')
        if not action:
            raise ConfigError("EVENT_ACTION is not set and the event payload has no action")
        event_kind = EventKind.from_action(action)

        removed = _parse_removed_reviewers(env, payload)

        language = (_get(env, 'MESSAGE_LANGUAGE') or 'english').lower()
        if language not in SUPPORTED_LANGUAGES:
            logging.warning(f"Invalid MESSAGE_LANGUAGE value '{language}', using default: english")
            language = 'english'

        http_timeout = DEFAULT_HTTP_TIMEOUT
        timeout_env = _get(env, 'HTTP_TIMEOUT')
        if timeout_env:
            try:
                http_timeout = float(timeout_env)
            except ValueError:
                logging.warning(f"Invalid HTTP_TIMEOUT value '{timeout_env}', using default: {DEFAULT_HTTP_TIMEOUT}")

        return cls(
            repo_owner=repo_owner,
            repo_name=repo_name,
            pr_number=pr_number,
            event_kind=event_kind,
            removed_reviewers=removed,
            directory_url=_get(env, 'USER_DIRECTORY_URL'),
            webhook_url=_get(env, 'SLACK_WEBHOOK_URL'),
            token=_get(env, 'GITHUB_TOKEN'),
            api_url=_get(env, 'GITHUB_API_URL') or DEFAULT_API_URL,
            message_language=language,
            http_timeout=http_timeout,
            dry_run=(_get(env, 'DRY_RUN') or 'false').lower() in ('true', '1', 'yes'),
        )


def load_event_payload(path: Optional[str]) -> Dict:
    """Load the CI runner's event payload, or an empty dict if unavailable."""
    if not path:
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logging.warning(f"Could not load event payload from {path}: {e}")
        return {}
    return payload if isinstance(payload, dict) else {}


def _get(env: Mapping[str, str], key: str) -> Optional[str]:
    """Return a stripped environment value, treating empty strings as unset."""
    value = env.get(key)
    if value is None:
        return None
    return value.strip() or None


def _parse_repository(env: Mapping[str, str], payload: Dict):
    repository = _get(env, 'GITHUB_REPOSITORY') or (payload.get('repository') or {}).get('full_name')
    if repository:
        owner, _, name = repository.partition('/')
    else:
        owner, name = _get(env, 'REPO_OWNER'), _get(env, 'REPO_NAME')

    if not owner or not name:
        raise ConfigError("Repository is required: set GITHUB_REPOSITORY=owner/name or REPO_OWNER and REPO_NAME")
    return owner, name


def _parse_pr_number(env: Mapping[str, str], payload: Dict) -> int:
    value = _get(env, 'PR_NUMBER')
    if value is None:
        value = payload.get('number') or (payload.get('pull_request') or {}).get('number')
    if value is None:
        raise ConfigError("PR_NUMBER is not set and the event payload has no pull request number")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid PR_NUMBER value '{value}'")


def _parse_removed_reviewers(env: Mapping[str, str], payload: Dict) -> FrozenSet[str]:
    removed_env = _get(env, 'REMOVED_REVIEWERS')
    if removed_env and removed_env.startswith('['):
        # JSON array of user objects (or plain handles), as the event payload carries them
        try:
            items = json.loads(removed_env)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid REMOVED_REVIEWERS JSON: {e}")
        handles = set()
        for item in items:
            login = item.get('login') if isinstance(item, dict) else item
            if isinstance(login, str) and login.strip().lstrip('@'):
                handles.add(login.strip().lstrip('@'))
        return frozenset(handles)

    if removed_env:
        return frozenset(u.strip().lstrip('@') for u in removed_env.split(',') if u.strip().lstrip('@'))

    login = (payload.get('requested_reviewer') or {}).get('login')
    return frozenset([login]) if login else frozenset()
