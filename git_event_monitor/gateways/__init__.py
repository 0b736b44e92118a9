"""Platform gateways.

Both gateways satisfy the `PlatformGateway` protocol; they share the HTTP
plumbing in `transport` by composition.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol

from git_event_monitor.config import Settings
from git_event_monitor.gateways.gitee import GiteeGateway
from git_event_monitor.gateways.github import GitHubGateway
from git_event_monitor.models import Platform, UnifiedEvent


class PlatformGateway(Protocol):
    platform: Platform

    def fetch_events(self, repo: str, token: Optional[str] = None) -> List[UnifiedEvent]:
        ...

    def has_commits(self, repo: str, token: Optional[str] = None) -> bool:
        ...


def build_gateways(settings: Optional[Settings] = None) -> Dict[Platform, PlatformGateway]:
    settings = settings or Settings()
    return {
        Platform.GITHUB: GitHubGateway(settings.github_api_base),
        Platform.GITEE: GiteeGateway(settings.gitee_api_base),
    }


__all__ = [
    "GiteeGateway",
    "GitHubGateway",
    "PlatformGateway",
    "build_gateways",
]
