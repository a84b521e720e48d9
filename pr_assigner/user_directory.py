"""
User directory for reviewer assignment.

The directory is a YAML mapping fetched from a URL on every run:

    alice:
      slack_id: U012ABCDEF
    bob:
      notify: false
    carol:
      assignable: false

A missing or ``null`` entry value means all defaults (assignable, notified,
no chat id).
"""

import logging
from typing import Dict, Iterator, List, Optional

import requests
import yaml

from .models import User

DEFAULT_TIMEOUT = 30


class UserDirectory:
    """Maps handles to their assignment and notification preferences."""

    def __init__(self, users: Dict[str, User] = None):
        """
        Initialize the directory.

        Args:
            users: Mapping of handle to User
        """
        self.users: Dict[str, User] = dict(users or {})

    @classmethod
    def from_mapping(cls, data) -> 'UserDirectory':
        """
        Build a directory from parsed YAML data.

        Args:
            data: Mapping of handle to an optional dict with ``assignable``,
                ``notify`` and ``slack_id`` keys

        Returns:
            A UserDirectory; empty if ``data`` is not a mapping
        """
        if not isinstance(data, dict):
            if data is not None:
                logging.warning(f"User directory must be a mapping, got {type(data).__name__}")
            return cls()

        users = {}
        for handle, attrs in data.items():
            handle = str(handle).strip()
            if not handle:
                continue
            if not isinstance(attrs, dict):
                if attrs is not None:
                    logging.warning(f"Ignoring malformed directory entry for '{handle}'")
                attrs = {}

            chat_id = attrs.get('slack_id')
            users[handle] = User(
                handle=handle,
                # Only an explicit false opts out; null keeps the default
                assignable=attrs.get('assignable') is not False,
                notify_enabled=attrs.get('notify') is not False,
                chat_id=str(chat_id) if chat_id else None,
            )

        return cls(users)

    @classmethod
    def fetch(cls, url: Optional[str], session: requests.Session = None,
              timeout: float = DEFAULT_TIMEOUT) -> 'UserDirectory':
        """
        Fetch and parse the directory file.

        Fetch or parse failures are logged and yield an empty directory so
        the run can still report that nobody was eligible.

        Args:
            url: Location of the YAML directory file
            session: Optional requests session to use
            timeout: Request timeout in seconds

        Returns:
            The parsed UserDirectory
        """
        if not url:
            logging.warning("No user directory URL configured, using an empty directory")
            return cls()

        http = session or requests
        try:
            response = http.get(url, timeout=timeout)
            response.raise_for_status()
            data = yaml.safe_load(response.text)
        except requests.RequestException as e:
            logging.warning(f"Could not fetch user directory from {url}: {e}")
            return cls()
        except yaml.YAMLError as e:
            logging.warning(f"Could not parse user directory from {url}: {e}")
            return cls()

        directory = cls.from_mapping(data)
        logging.info(f"Loaded user directory with {len(directory)} user(s)")
        return directory

    def get(self, handle: str) -> Optional[User]:
        return self.users.get(handle)

    def handles(self) -> List[str]:
        return sorted(self.users)

    def assignable_handles(self) -> List[str]:
        """Return the sorted handles that may be requested as reviewers."""
        return sorted(handle for handle, user in self.users.items() if user.assignable)

    def mention(self, handle: str) -> str:
        """
        Render a handle for a chat message.

        Args:
            handle: The GitHub handle

        Returns:
            A Slack mention token if the user opted in and has a chat id,
            otherwise ``@handle``
        """
        user = self.users.get(handle)
        if user and user.notify_enabled and user.chat_id:
            return f"<@{user.chat_id}>"
        return f"@{handle}"

    def __contains__(self, handle: str) -> bool:
        return handle in self.users

    def __iter__(self) -> Iterator[str]:
        return iter(self.users)

    def __len__(self) -> int:
        return len(self.users)
