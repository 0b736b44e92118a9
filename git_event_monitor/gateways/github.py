from __future__ import annotations

from typing import Dict, List, Optional

import requests

from git_event_monitor.config import DEFAULT_GITHUB_API_BASE
from git_event_monitor.errors import TransportError
from git_event_monitor.gateways.transport import RestTransport, decode_event_list, split_repository
from git_event_monitor.models import Platform, UnifiedEvent, to_unified


EVENTS_PAGE_SIZE = 100

# GitHub answers 409 "Git Repository is empty" on the commits endpoint.
_NO_COMMITS_STATUSES = {404, 409}


class GitHubGateway:
    """GitHub REST v3 access: repository events and a one-commit probe."""

    platform = Platform.GITHUB

    def __init__(
        self,
        base_url: str = DEFAULT_GITHUB_API_BASE,
        *,
        session: Optional[requests.Session] = None,
        transport: Optional[RestTransport] = None,
    ):
        self._transport = transport or RestTransport(
            base_url,
            session=session,
            headers={"Accept": "application/vnd.github+json"},
        )

    @staticmethod
    def _auth_headers(token: Optional[str]) -> Dict[str, str]:
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def fetch_events(self, repo: str, token: Optional[str] = None) -> List[UnifiedEvent]:
        owner, name = split_repository(repo)
        response = self._transport.get(
            f"/repos/{owner}/{name}/events",
            params={"per_page": str(EVENTS_PAGE_SIZE)},
            headers=self._auth_headers(token),
        )
        return [to_unified(raw, self.platform) for raw in decode_event_list(response)]

    def has_commits(self, repo: str, token: Optional[str] = None) -> bool:
        owner, name = split_repository(repo)
        response = self._transport.get(
            f"/repos/{owner}/{name}/commits",
            params={"per_page": "1"},
            headers=self._auth_headers(token),
        )
        if response.status_code == 200:
            return True
        if response.status_code in _NO_COMMITS_STATUSES:
            return False
        raise TransportError(
            f"GitHub API returned unexpected status {response.status_code}",
            status_code=response.status_code,
        )
