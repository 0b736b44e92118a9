from __future__ import annotations

from typing import Dict, List, Optional

import requests

from git_event_monitor.config import DEFAULT_GITEE_API_BASE
from git_event_monitor.errors import TransportError
from git_event_monitor.gateways.transport import RestTransport, decode_event_list, split_repository
from git_event_monitor.models import Platform, UnifiedEvent, to_unified


EVENTS_PAGE_SIZE = 100


class GiteeGateway:
    """Gitee API v5 access.

    Gitee takes the token as an `access_token` query parameter and sizes the
    events page with `limit`. A 404 on the commits endpoint covers both an
    empty and a missing repository.
    """

    platform = Platform.GITEE

    def __init__(
        self,
        base_url: str = DEFAULT_GITEE_API_BASE,
        *,
        session: Optional[requests.Session] = None,
        transport: Optional[RestTransport] = None,
    ):
        self._transport = transport or RestTransport(base_url, session=session)

    @staticmethod
    def _params(token: Optional[str], **params: str) -> Dict[str, str]:
        if token:
            params["access_token"] = token
        return params

    def fetch_events(self, repo: str, token: Optional[str] = None) -> List[UnifiedEvent]:
        owner, name = split_repository(repo)
        response = self._transport.get(
            f"/repos/{owner}/{name}/events",
            params=self._params(token, limit=str(EVENTS_PAGE_SIZE)),
        )
        return [to_unified(raw, self.platform) for raw in decode_event_list(response)]

    def has_commits(self, repo: str, token: Optional[str] = None) -> bool:
        owner, name = split_repository(repo)
        response = self._transport.get(
            f"/repos/{owner}/{name}/commits",
            params=self._params(token, per_page="1"),
        )
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise TransportError(
            f"Gitee API returned unexpected status {response.status_code}",
            status_code=response.status_code,
        )
