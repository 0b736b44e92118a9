"""In-memory stand-ins for the platform gateways."""

from __future__ import annotations

import time
from typing import List, Optional

from git_event_monitor.errors import TransportError
from git_event_monitor.models import Platform, UnifiedEvent


def make_event(event_type: str, created_at: str, event_id: str = "1", repo_name: str = "octocat/hello") -> UnifiedEvent:
    return UnifiedEvent(
        id=event_id,
        type=event_type,
        created_at=created_at,
        actor_login="octocat",
        actor_avatar_url="https://avatars.example/octocat",
        repo_name=repo_name,
        repo_url=f"https://api.github.com/repos/{repo_name}",
        payload={"ref": "refs/heads/main"},
    )


def push(created_at: str, event_id: str = "1") -> UnifiedEvent:
    return make_event("PushEvent", created_at, event_id)


class FakeGateway:
    def __init__(
        self,
        platform: Platform = Platform.GITHUB,
        *,
        events: Optional[List[UnifiedEvent]] = None,
        events_error: Optional[Exception] = None,
        has_commits: bool = True,
        commits_error: Optional[Exception] = None,
        delay: float = 0.0,
        commits_delay: float = 0.0,
    ):
        self.platform = platform
        self.events = list(events or [])
        self.events_error = events_error
        self._has_commits = has_commits
        self.commits_error = commits_error
        self.delay = delay
        self.commits_delay = commits_delay
        self.calls: List[tuple] = []

    def fetch_events(self, repo: str, token: Optional[str] = None) -> List[UnifiedEvent]:
        self.calls.append(("fetch_events", repo, token))
        if self.delay:
            time.sleep(self.delay)
        if self.events_error is not None:
            raise self.events_error
        return list(self.events)

    def has_commits(self, repo: str, token: Optional[str] = None) -> bool:
        self.calls.append(("has_commits", repo, token))
        if self.commits_delay:
            time.sleep(self.commits_delay)
        if self.commits_error is not None:
            raise self.commits_error
        return self._has_commits


def unreachable(platform: Platform = Platform.GITHUB, status: int = 404) -> FakeGateway:
    return FakeGateway(
        platform,
        events_error=TransportError(f"API request failed with status {status}", status_code=status),
    )
