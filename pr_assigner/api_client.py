"""GitHub API client for reading pull requests and requesting reviewers."""

import os
import logging
from typing import Dict, Iterable
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .models import PullRequest

DEFAULT_API_URL = 'https://api.github.com'


class GitHubAPIClient:
    """Handles GitHub API requests with retry logic."""

    def __init__(self, token: str = None, api_url: str = DEFAULT_API_URL, timeout: float = 30):
        """Initialize the GitHub API client.

        Args:
            token: GitHub token for authentication
            api_url: Base URL of the GitHub REST API
            timeout: Request timeout in seconds
        """
        # Use provided token or fall back to environment variable
        self.token = token or os.environ.get('GITHUB_TOKEN')
        self.api_url = (api_url or DEFAULT_API_URL).rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

        # Only idempotent methods are retried; adding reviewers is never replayed
        adapter = HTTPAdapter(
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=frozenset(['GET'])
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        self.session.headers.update({'Accept': 'application/vnd.github.v3+json'})
        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Reviewer requests will be rejected.")
            logging.warning("Set GITHUB_TOKEN environment variable or pass token as argument.")

    def _pull_url(self, owner: str, repo: str, number: int) -> str:
        return f"{self.api_url}/repos/{owner}/{repo}/pulls/{number}"

    def _check(self, response: requests.Response) -> requests.Response:
        """Raise for error responses, logging rate limit and permission failures."""
        if response.status_code == 403:
            logging.error(f"Request forbidden (rate limit or missing permission). Response: {response.text}")
        response.raise_for_status()
        return response

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        """Fetch the current state of a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            PullRequest view with author, draft flag and requested reviewers

        Raises:
            requests.HTTPError: If the API returns an error status
        """
        url = self._pull_url(owner, repo, number)
        logging.debug(f"Fetching {url}")
        data = self._check(self.session.get(url, timeout=self.timeout)).json()
        return self.parse_pull_request(data)

    @staticmethod
    def parse_pull_request(data: Dict) -> PullRequest:
        """Build a PullRequest from a GitHub ``pulls`` API payload."""
        reviewers = frozenset(
            reviewer['login'] for reviewer in data.get('requested_reviewers') or []
            if reviewer and reviewer.get('login')
        )
        return PullRequest(
            number=data['number'],
            author=(data.get('user') or {}).get('login', ''),
            draft=bool(data.get('draft', False)),
            requested_reviewers=reviewers,
            title=data.get('title') or '',
            url=data.get('html_url') or '',
        )

    def add_reviewers(self, owner: str, repo: str, number: int, handles: Iterable[str]) -> None:
        """Request reviews from the given handles.

        GitHub ignores handles that are already requested, so repeating the
        call is harmless.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number
            handles: Handles to request

        Raises:
            requests.HTTPError: If the API returns an error status
        """
        reviewers = sorted(handles)
        if not reviewers:
            return

        url = f"{self._pull_url(owner, repo, number)}/requested_reviewers"
        logging.info(f"Requesting review from {', '.join(reviewers)} on PR #{number}")
        self._check(self.session.post(url, json={'reviewers': reviewers}, timeout=self.timeout))
